"""Create workflow: writes a new version Markdown file"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Union

from releaseos.core.config import VersioningConfig
from releaseos.core.engine import check_scope
from releaseos.core.errors import FormatError
from releaseos.core.graph import ArtifactId, ArtifactIdentifier, parse_key
from releaseos.core.intent import IntentDocument, parse_blocks, write_document
from releaseos.core.utils.process import git_add
from releaseos.core.version import BumpKind
from releaseos.core.workflows.project import open_project

logger = logging.getLogger(__name__)

# Bumps offered when creating a version Markdown file
SELECTABLE_BUMPS = (BumpKind.PATCH, BumpKind.MINOR, BumpKind.MAJOR)


def parse_bump_option(
    text: str,
    identifier: ArtifactIdentifier = ArtifactIdentifier.GROUP_ID_AND_ARTIFACT_ID,
    group: Optional[str] = None,
) -> tuple:
    """Parse 'ARTIFACT=KIND' into (ArtifactId, BumpKind)."""
    key, sep, kind = text.rpartition("=")
    if not sep or not key.strip():
        raise FormatError(f"Invalid bump '{text}', expected <artifact>=<patch|minor|major>")
    return parse_key(key.strip(), identifier, group), BumpKind.parse(kind)


def list_candidates(project_dir: Union[str, Path], config: VersioningConfig) -> List[ArtifactId]:
    """In-scope artifacts in reactor order."""
    return open_project(project_dir, config).graph.artifacts


def create_intent(
    project_dir: Union[str, Path],
    config: VersioningConfig,
    bumps: Mapping[ArtifactId, BumpKind],
    message: str,
    moment: Optional[datetime] = None,
) -> Path:
    """Write a version Markdown file for the chosen artifacts.

    Raises:
        FormatError: If no artifact is selected or the message is empty
        ArtifactNotInScopeError: If an artifact is not part of the project scope
    """
    if not bumps:
        raise FormatError("No projects selected for a version bump")
    if not message or not message.strip():
        raise FormatError("Changelog text must not be empty")

    project = open_project(project_dir, config)
    check_scope(project.graph, bumps)

    selected: Dict[ArtifactId, BumpKind] = dict(bumps)
    document = IntentDocument(bumps=selected, body=parse_blocks(message))
    path = write_document(document, project.versioning_dir, moment, config.identifier)

    if config.git.is_stash:
        git_add([path], cwd=project.project_dir)
    return path
