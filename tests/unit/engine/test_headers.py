from __future__ import annotations

from datetime import date

import pytest

from releaseos.core.engine import format_date, format_header, validate_header_template
from releaseos.core.errors import ConfigurationError

DAY = date(2024, 3, 7)


@pytest.mark.parametrize(
    "pattern, expected",
    [
        ("yyyy-MM-dd", "2024-03-07"),
        ("d/M/yy", "7/3/24"),
        ("MMM d, yyyy", "Mar 7, 2024"),
        ("dd MMMM yyyy", "07 March 2024"),
        ("'week of' yyyy-MM-dd", "week of 2024-03-07"),
        ("yyyy''MM", "2024'03"),
    ],
)
def test_format_date(pattern: str, expected: str) -> None:
    assert format_date(DAY, pattern) == expected


@pytest.mark.parametrize("pattern", ["yyyy-MM-dd HH:mm", "EEE", "'open", "YYYY-MM-dd", "DD", "D"])
def test_format_date_rejects_unsupported(pattern: str) -> None:
    with pytest.raises(ConfigurationError):
        format_date(DAY, pattern)


def test_format_header() -> None:
    assert format_header("{version} - {date#yyyy-MM-dd}", "1.0.0", DAY) == "1.0.0 - 2024-03-07"
    assert format_header("{version} ({date})", "2.0.0", DAY) == "2.0.0 (2024-03-07)"
    assert format_header("Release {version}", "3.0.0", DAY) == "Release 3.0.0"


def test_validate_header_template() -> None:
    assert validate_header_template("{version}") == "{version}"
    with pytest.raises(ConfigurationError):
        validate_header_template("{date}")
    with pytest.raises(ConfigurationError):
        validate_header_template("{version} {date#QQ}")
