"""
Changelog merging

Each changed module gets a new section right below the changelog title:

    # Changelog

    ## 1.3.0 - 2024-05-01

    ### Minor

    Added support for nested profiles.

    ## 1.2.3 - 2024-04-02
    ...

Bodies are grouped by the bump each intent document declared for the module,
in the order Major, Minor, Patch, Other.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from functools import cached_property
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

from jinja2 import Environment, FileSystemLoader

from releaseos.core.engine.applier import VersionChange
from releaseos.core.engine.headers import format_header
from releaseos.core.errors import FormatError
from releaseos.core.intent.document import IntentDocument
from releaseos.core.intent.markdown import Block, BlockKind, heading, parse_blocks, render_blocks
from releaseos.core.intent.store import AggregatedIntents
from releaseos.core.version import BumpKind

if TYPE_CHECKING:
    from releaseos.core.config import ChangelogHeaders

logger = logging.getLogger(__name__)

CHANGELOG_FILE = "CHANGELOG.md"
DEPENDENCY_BUMP_MESSAGE = "Project version bumped as result of dependency bumps"
TEMPLATE_NAME = "changelog_section.md.j2"
TEMPLATE_DIR = Path(__file__).parent.parent.parent / "templates"

GROUP_ORDER = (BumpKind.MAJOR, BumpKind.MINOR, BumpKind.PATCH, BumpKind.NONE)


@dataclass(frozen=True)
class ChangelogGroup:
    label: str
    bodies: Tuple[str, ...]


@dataclass(frozen=True)
class ChangelogEntry:
    version: str
    heading: str
    groups: Tuple[ChangelogGroup, ...] = field(default_factory=tuple)


def dependency_bump_document(artifact) -> IntentDocument:
    """Stand-in document for modules changed only through propagation."""
    return IntentDocument(
        bumps={artifact: BumpKind.NONE},
        body=[Block(BlockKind.TEXT, DEPENDENCY_BUMP_MESSAGE)],
    )


class ChangelogRenderer:
    """Builds and merges changelog sections for one update run.

    The Jinja2 environment is created on first use and reused afterwards.
    """

    def __init__(self, headers: "ChangelogHeaders", today: Optional[date] = None):
        self.headers = headers
        self.today = today or date.today()

    @cached_property
    def env(self) -> Environment:
        logger.debug(f"Loading changelog templates from {TEMPLATE_DIR}")
        return Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def _label(self, bump: BumpKind) -> str:
        return {
            BumpKind.MAJOR: self.headers.major,
            BumpKind.MINOR: self.headers.minor,
            BumpKind.PATCH: self.headers.patch,
            BumpKind.NONE: self.headers.other,
        }[bump]

    def entry(self, change: VersionChange, documents: Sequence[IntentDocument]) -> ChangelogEntry:
        """Group document bodies by the bump they declare for the changed module."""
        if not documents:
            documents = [dependency_bump_document(change.artifact)]

        buckets = {bump: [] for bump in GROUP_ORDER}
        for document in documents:
            body = render_blocks(document.body).strip()
            if body:
                buckets[document.bumps.get(change.artifact, BumpKind.NONE)].append(body)

        groups = tuple(
            ChangelogGroup(self._label(bump), tuple(buckets[bump]))
            for bump in GROUP_ORDER
            if buckets[bump]
        )
        return ChangelogEntry(
            version=change.new_version,
            heading=format_header(self.headers.version, change.new_version, self.today),
            groups=groups,
        )

    def render_section(self, entry: ChangelogEntry) -> str:
        template = self.env.get_template(TEMPLATE_NAME)
        return template.render(heading=entry.heading, groups=entry.groups)

    def merge(self, existing: Optional[str], entry: ChangelogEntry, path: Optional[Path] = None) -> str:
        """Insert the entry right after the title of an existing changelog.

        Raises:
            FormatError: If the changelog does not start with the title heading
        """
        title = self.headers.changelog
        blocks: List[Block] = parse_blocks(existing or "")
        if not blocks:
            blocks = [heading(1, title)]
        elif not blocks[0].is_heading(1, title):
            raise FormatError(
                f"Changelog must start with a single H1 heading with the text '{title}'",
                path=path,
            )

        section = parse_blocks(self.render_section(entry))
        return render_blocks(blocks[:1] + section + blocks[1:])

    def merge_change(
        self,
        change: VersionChange,
        intents: AggregatedIntents,
        existing: Optional[str],
        path: Optional[Path] = None,
    ) -> str:
        return self.merge(existing, self.entry(change, intents.documents_for(change.artifact)), path)
