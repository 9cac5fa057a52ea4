"""
Changelog header templates

A version header template may contain:
- {version}: the new version
- {date}: the execution date as an ISO date
- {date#pattern}: the execution date formatted with a date pattern

Date patterns use the letters familiar from Maven tooling: yyyy, yy, MMMM, MMM,
MM, M, dd, d. Text in single quotes is copied literally ('' is a quote); any
other letter is rejected, including Y (week based year) and D (day of year).
"""

import calendar
import re
from datetime import date
from typing import Callable, Dict

from releaseos.core.errors import ConfigurationError

PLACEHOLDER_PATTERN = re.compile(r"\{(date(#([^{}]*))?|version)\}")
DATE_TOKEN_PATTERN = re.compile(r"'((?:[^']|'')*)'|([A-Za-z])\2*")

DEFAULT_DATE_PATTERN = "yyyy-MM-dd"

_FIELDS: Dict[str, Callable[[date], str]] = {
    "yyyy": lambda d: f"{d.year:04d}",
    "yy": lambda d: f"{d.year % 100:02d}",
    "MMMM": lambda d: calendar.month_name[d.month],
    "MMM": lambda d: calendar.month_abbr[d.month],
    "MM": lambda d: f"{d.month:02d}",
    "M": lambda d: str(d.month),
    "dd": lambda d: f"{d.day:02d}",
    "d": lambda d: str(d.day),
}


def format_date(value: date, pattern: str) -> str:
    """Format a date with a pattern such as 'yyyy-MM-dd' or "d MMMM ''yy".

    Raises:
        ConfigurationError: If the pattern has an unknown field or an open quote
    """
    output = []
    position = 0
    for match in DATE_TOKEN_PATTERN.finditer(pattern):
        literal = pattern[position:match.start()]
        if "'" in literal:
            raise ConfigurationError(f"Unterminated quote in date pattern '{pattern}'")
        output.append(literal)
        position = match.end()

        quoted, letters = match.group(1), match.group(0)
        if quoted is not None:
            output.append(quoted.replace("''", "'") if quoted else "'")
            continue
        formatter = _FIELDS.get(letters)
        if formatter is None:
            raise ConfigurationError(f"Unsupported field '{letters}' in date pattern '{pattern}'")
        output.append(formatter(value))

    rest = pattern[position:]
    if "'" in rest:
        raise ConfigurationError(f"Unterminated quote in date pattern '{pattern}'")
    output.append(rest)
    return "".join(output)


def validate_date_pattern(pattern: str) -> str:
    format_date(date(2000, 1, 1), pattern)
    return pattern


def validate_header_template(template: str, require_version: bool = True) -> str:
    """Check a header template, returning it unchanged.

    Raises:
        ConfigurationError: If a date pattern is invalid or {version} is required but missing
    """
    if require_version and "{version}" not in template:
        raise ConfigurationError(f"Version header '{template}' must contain {{version}}")
    for match in PLACEHOLDER_PATTERN.finditer(template):
        if match.group(3) is not None:
            validate_date_pattern(match.group(3))
    return template


def format_header(template: str, version: str, today: date) -> str:
    def substitute(match: re.Match) -> str:
        if match.group(1) == "version":
            return version
        if match.group(3) is None:
            return today.isoformat()
        return format_date(today, match.group(3))

    return PLACEHOLDER_PATTERN.sub(substitute, template)
