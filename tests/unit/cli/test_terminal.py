from __future__ import annotations

import io

import click
import pytest

from releaseos.cli import terminal
from releaseos.cli.terminal import parse_selection, read_message


def test_parse_selection() -> None:
    assert parse_selection("1", 3) == [0]
    assert parse_selection("3, 1,3", 3) == [2, 0]
    assert parse_selection("2 3", 3) == [1, 2]


@pytest.mark.parametrize("text", ["", "0", "4", "a", " , "])
def test_parse_selection_rejects(text: str) -> None:
    with pytest.raises(click.BadParameter):
        parse_selection(text, 3)


def test_read_message_stops_after_two_blank_lines() -> None:
    stream = io.StringIO("First paragraph.\n\nSecond paragraph.\n\n\nIgnored.\n")
    assert read_message(stream) == "First paragraph.\n\nSecond paragraph."


def test_read_message_until_end_of_input() -> None:
    assert read_message(io.StringIO("Only line.\n")) == "Only line."
    assert read_message(io.StringIO("")) == ""


def test_read_message_opens_editor_on_empty_first_line(monkeypatch) -> None:
    monkeypatch.setattr(terminal, "open_editor", lambda: "  From the editor.\n")
    assert read_message(io.StringIO("\nnot read\n")) == "From the editor."
