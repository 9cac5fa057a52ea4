"""
Block level Markdown model

Only the structure needed for intent bodies and changelogs is recognised:
ATX headings, fenced code blocks, and everything else as verbatim text blocks
separated by blank lines. Rendering joins blocks with a single blank line.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

HEADING_PATTERN = re.compile(r"^ {0,3}(#{1,6})(?:[ \t]+(.*?))?(?:[ \t]+#+)?[ \t]*$")
FENCE_PATTERN = re.compile(r"^ {0,3}(`{3,}|~{3,})")


class BlockKind(Enum):
    HEADING = "heading"
    CODE = "code"
    TEXT = "text"


@dataclass(frozen=True)
class Block:
    kind: BlockKind
    text: str
    level: int = 0

    @property
    def title(self) -> Optional[str]:
        """Heading text without the leading hashes, None for other blocks."""
        if self.kind is not BlockKind.HEADING:
            return None
        match = HEADING_PATTERN.match(self.text)
        return (match.group(2) or "").strip()

    def is_heading(self, level: int, title: Optional[str] = None) -> bool:
        if self.kind is not BlockKind.HEADING or self.level != level:
            return False
        return title is None or self.title == title


def heading(level: int, title: str) -> Block:
    return Block(BlockKind.HEADING, f"{'#' * level} {title}", level)


def parse_blocks(text: str) -> List[Block]:
    blocks: List[Block] = []
    pending: List[str] = []
    fence: Optional[str] = None

    def flush_text() -> None:
        if pending:
            blocks.append(Block(BlockKind.TEXT, "\n".join(pending)))
            pending.clear()

    for line in text.splitlines():
        if fence is not None:
            pending.append(line)
            if line.strip().startswith(fence) and not line.strip().strip(fence[0]):
                blocks.append(Block(BlockKind.CODE, "\n".join(pending)))
                pending.clear()
                fence = None
            continue

        fence_match = FENCE_PATTERN.match(line)
        if fence_match:
            flush_text()
            fence = fence_match.group(1)
            pending.append(line)
            continue

        heading_match = HEADING_PATTERN.match(line)
        if heading_match:
            flush_text()
            blocks.append(Block(BlockKind.HEADING, line.strip(), len(heading_match.group(1))))
            continue

        if not line.strip():
            flush_text()
            continue

        pending.append(line)

    # An unterminated fence runs to the end of the document
    if fence is not None:
        blocks.append(Block(BlockKind.CODE, "\n".join(pending)))
    else:
        flush_text()
    return blocks


def render_blocks(blocks: Iterable[Block]) -> str:
    text = "\n\n".join(block.text for block in blocks)
    return text + "\n" if text else ""
