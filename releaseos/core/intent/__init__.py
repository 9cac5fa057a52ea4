"""Intent store - versioning Markdown files and their aggregation"""

from releaseos.core.intent.document import (
    IntentDocument,
    parse_document,
    read_document,
    render_document,
    write_document,
)
from releaseos.core.intent.frontmatter import render_front_matter, split_front_matter
from releaseos.core.intent.markdown import Block, BlockKind, heading, parse_blocks, render_blocks
from releaseos.core.intent.store import (
    VERSIONING_DIR,
    AggregatedIntents,
    discover_intent_files,
    load_intents,
    read_intents,
)

__all__ = [
    "IntentDocument",
    "parse_document",
    "read_document",
    "render_document",
    "write_document",
    "render_front_matter",
    "split_front_matter",
    "Block",
    "BlockKind",
    "heading",
    "parse_blocks",
    "render_blocks",
    "VERSIONING_DIR",
    "AggregatedIntents",
    "discover_intent_files",
    "load_intents",
    "read_intents",
]
