"""
Front matter splitting

A metadata block is only recognised at the very start of a document: blank
lines may precede it, a line holding just '---' opens it, and it runs until
the next '---' line or the end of input.

    ---
    com.example:core: minor
    ---

    Body text
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)

DELIMITER = "---"


class _State(Enum):
    PREAMBLE = "preamble"
    METADATA = "metadata"
    BODY = "body"


@dataclass
class FrontMatterParser:
    """Line driven state machine separating metadata lines from the body.

    `eligible` stays True while only blank lines have been seen; the first
    content line clears it, after which no metadata block can start.
    """

    state: _State = _State.PREAMBLE
    eligible: bool = True
    metadata: Optional[List[str]] = None
    body: List[str] = field(default_factory=list)

    def feed(self, line: str) -> None:
        if self.state is _State.PREAMBLE:
            if not line.strip():
                self.body.append(line)
                return
            if self.eligible and line.rstrip() == DELIMITER:
                self.state = _State.METADATA
                self.metadata = []
                self.body = []
                return
            self.eligible = False
            self.state = _State.BODY
            self.body.append(line)
        elif self.state is _State.METADATA:
            if line.rstrip() == DELIMITER:
                self.state = _State.BODY
                return
            self.metadata.append(line)
        else:
            self.body.append(line)

    def close(self) -> Tuple[Optional[List[str]], str]:
        if self.state is _State.METADATA:
            logger.debug("Metadata block not closed before end of input")
        return self.metadata, "\n".join(self.body)


def split_front_matter(text: str) -> Tuple[Optional[List[str]], str]:
    """Split a document into its metadata lines (None if absent) and body."""
    parser = FrontMatterParser()
    for line in text.splitlines():
        parser.feed(line)
    return parser.close()


def render_front_matter(metadata_lines: List[str], body: str) -> str:
    """Write '---', the metadata lines, '---', a blank line, then the body."""
    head = "\n".join([DELIMITER, *metadata_lines, DELIMITER])
    text = f"{head}\n\n{body}"
    return text if text.endswith("\n") else text + "\n"
