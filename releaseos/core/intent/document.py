"""
Intent documents

An intent document is a Markdown file whose front matter maps artifacts to
the bump they need, followed by the changelog text for that change:

    ---
    com.example:core: minor
    com.example:api: patch
    ---

    Added support for nested profiles.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Union

import yaml

from releaseos.core.errors import FormatError, IOFailure, ReleaseError
from releaseos.core.graph.artifact import ArtifactId, ArtifactIdentifier, format_key, parse_key
from releaseos.core.intent.frontmatter import render_front_matter, split_front_matter
from releaseos.core.intent.markdown import Block, parse_blocks, render_blocks
from releaseos.core.utils.atomic_write import atomic_write
from releaseos.core.version import BumpKind

logger = logging.getLogger(__name__)

FILE_PREFIX = "versioning-"
FILE_TIMESTAMP = "%Y%m%d%H%M%S"


@dataclass(frozen=True)
class IntentDocument:
    """Bump intents plus the changelog body that explains them.

    Attributes:
        bumps: Artifact to bump kind, in declaration order (never empty)
        body: Markdown blocks after the metadata block
        path: Source file, None for synthesized documents
    """

    bumps: Dict[ArtifactId, BumpKind]
    body: List[Block] = field(default_factory=list)
    path: Optional[Path] = None

    def bump_for(self, artifact: ArtifactId) -> Optional[BumpKind]:
        return self.bumps.get(artifact)


def _load_bumps(
    lines: List[str],
    path: Optional[Path],
    identifier: ArtifactIdentifier,
    group: Optional[str],
) -> Dict[ArtifactId, BumpKind]:
    source = "\n".join(lines)
    logger.debug(f"Front matter of {path or '<text>'}:\n{source}")
    try:
        data = yaml.safe_load(source)
    except yaml.YAMLError as e:
        raise FormatError(f"Invalid YAML in version metadata: {e}", path=path) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FormatError("Version metadata must be a mapping of artifact to bump", path=path)

    bumps: Dict[ArtifactId, BumpKind] = {}
    for key, value in data.items():
        try:
            artifact = parse_key(str(key), identifier, group)
            bump = BumpKind.parse(None if value is None else str(value))
        except ReleaseError as e:
            raise FormatError(e.message, path=path) from e
        bumps[artifact] = BumpKind.max(bumps.get(artifact), bump)

    if not bumps:
        raise FormatError("Version metadata does not name any artifact", path=path)
    return bumps


def parse_document(
    text: str,
    path: Optional[Path] = None,
    identifier: ArtifactIdentifier = ArtifactIdentifier.GROUP_ID_AND_ARTIFACT_ID,
    group: Optional[str] = None,
) -> IntentDocument:
    """Parse intent document text.

    Raises:
        FormatError: If the metadata block is missing or invalid
    """
    metadata, body = split_front_matter(text)
    if metadata is None:
        raise FormatError("Version Markdown must start with a metadata block", path=path)
    bumps = _load_bumps(metadata, path, identifier, group)
    return IntentDocument(bumps=bumps, body=parse_blocks(body), path=path)


def render_document(
    document: IntentDocument,
    identifier: ArtifactIdentifier = ArtifactIdentifier.GROUP_ID_AND_ARTIFACT_ID,
) -> str:
    mapping = {format_key(artifact, identifier): bump.name for artifact, bump in document.bumps.items()}
    dumped = yaml.safe_dump(mapping, sort_keys=False, default_flow_style=False, allow_unicode=True)
    return render_front_matter(dumped.splitlines(), render_blocks(document.body))


def read_document(
    path: Union[str, Path],
    identifier: ArtifactIdentifier = ArtifactIdentifier.GROUP_ID_AND_ARTIFACT_ID,
    group: Optional[str] = None,
) -> IntentDocument:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise IOFailure(f"Unable to read version Markdown: {e}", path=path) from e
    logger.info(f"Read {len(text.splitlines())} lines from {path}")
    return parse_document(text, path, identifier, group)


def intent_file_name(moment: datetime) -> str:
    return f"{FILE_PREFIX}{moment.strftime(FILE_TIMESTAMP)}.md"


def write_document(
    document: IntentDocument,
    directory: Union[str, Path],
    moment: Optional[datetime] = None,
    identifier: ArtifactIdentifier = ArtifactIdentifier.GROUP_ID_AND_ARTIFACT_ID,
) -> Path:
    """Write a new versioning-<timestamp>.md file into the directory.

    An existing file with the same timestamp is never overwritten; a counter
    is appended instead.
    """
    directory = Path(directory)
    name = intent_file_name(moment or datetime.now())
    path = directory / name
    counter = 1
    while path.exists():
        counter += 1
        path = directory / f"{Path(name).stem}-{counter}.md"
    atomic_write(path, render_document(document, identifier))
    logger.info(f"Created version Markdown {path}")
    return path
