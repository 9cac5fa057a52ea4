"""Intent store: discovery and aggregation of intent documents"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from releaseos.core.graph.artifact import ArtifactId, ArtifactIdentifier
from releaseos.core.intent.document import IntentDocument, read_document
from releaseos.core.version import BumpKind

logger = logging.getLogger(__name__)

VERSIONING_DIR = ".versioning"
MARKDOWN_SUFFIX = ".md"


@dataclass
class AggregatedIntents:
    """Per-artifact maximum bump over all documents, plus the documents
    that mention each artifact in discovery order."""

    bumps: Dict[ArtifactId, BumpKind] = field(default_factory=dict)
    documents: Dict[ArtifactId, List[IntentDocument]] = field(default_factory=dict)
    sources: List[IntentDocument] = field(default_factory=list)

    @classmethod
    def aggregate(cls, documents: Iterable[IntentDocument]) -> "AggregatedIntents":
        result = cls()
        for document in documents:
            result.sources.append(document)
            for artifact, bump in document.bumps.items():
                result.bumps[artifact] = BumpKind.max(result.bumps.get(artifact), bump)
                result.documents.setdefault(artifact, []).append(document)
        if result.bumps:
            logger.debug(
                "Aggregated bumps: " + ", ".join(f"{a}={b}" for a, b in sorted(result.bumps.items()))
            )
        return result

    @property
    def is_empty(self) -> bool:
        return not self.bumps

    @property
    def paths(self) -> List[Path]:
        return [doc.path for doc in self.sources if doc.path is not None]

    def bump_for(self, artifact: ArtifactId) -> BumpKind:
        return self.bumps.get(artifact, BumpKind.NONE)

    def documents_for(self, artifact: ArtifactId) -> List[IntentDocument]:
        return list(self.documents.get(artifact, []))


def discover_intent_files(directory: Union[str, Path]) -> List[Path]:
    """List *.md files directly inside the directory, ordered by file name."""
    directory = Path(directory)
    if not directory.is_dir():
        logger.warning(f"Versioning directory {directory} does not exist, no version Markdown files found")
        return []
    files = [
        path
        for path in directory.iterdir()
        if path.is_file() and path.suffix.lower() == MARKDOWN_SUFFIX
    ]
    return sorted(files, key=lambda path: path.name)


def read_intents(
    directory: Union[str, Path],
    identifier: ArtifactIdentifier = ArtifactIdentifier.GROUP_ID_AND_ARTIFACT_ID,
    group: Optional[str] = None,
) -> List[IntentDocument]:
    documents = [read_document(path, identifier, group) for path in discover_intent_files(directory)]
    logger.info(f"Read {len(documents)} version Markdown file(s) from {directory}")
    return documents


def load_intents(
    directory: Union[str, Path],
    identifier: ArtifactIdentifier = ArtifactIdentifier.GROUP_ID_AND_ARTIFACT_ID,
    group: Optional[str] = None,
) -> AggregatedIntents:
    return AggregatedIntents.aggregate(read_intents(directory, identifier, group))
