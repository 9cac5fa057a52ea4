"""Artifact identifiers (group:name) and their textual key forms"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from releaseos.core.errors import FormatError


class ArtifactIdentifier(str, Enum):
    """How artifacts are written as keys in intent documents."""

    GROUP_ID_AND_ARTIFACT_ID = "group-and-artifact"
    ONLY_ARTIFACT_ID = "artifact-only"


@dataclass(frozen=True, order=True)
class ArtifactId:
    """Maven coordinates without a version, ordered by group then name."""

    group: str
    name: str

    def __post_init__(self):
        if not self.group or not self.name:
            raise FormatError(f"Artifact group and name must not be empty: '{self.group}:{self.name}'")

    @classmethod
    def parse(cls, text: str) -> "ArtifactId":
        """Parse '<group>:<name>'.

        Raises:
            FormatError: If the text does not have exactly two non-empty parts
        """
        parts = str(text).strip().split(":")
        if len(parts) != 2 or not all(parts):
            raise FormatError(
                f"Invalid Maven artifact format: {text}, expected <group-id>:<artifact-id>"
            )
        return cls(parts[0], parts[1])

    def __str__(self) -> str:
        return f"{self.group}:{self.name}"


def parse_key(
    key: str,
    identifier: ArtifactIdentifier = ArtifactIdentifier.GROUP_ID_AND_ARTIFACT_ID,
    group: Optional[str] = None,
) -> ArtifactId:
    """Parse an intent document key according to the identifier mode.

    In ONLY_ARTIFACT_ID mode the key is a bare artifact name and the implied
    group is required.
    """
    if identifier is ArtifactIdentifier.ONLY_ARTIFACT_ID:
        if not group:
            raise FormatError("A group is required to read artifact-only identifiers")
        name = str(key).strip()
        if not name or ":" in name:
            raise FormatError(f"Invalid artifact name '{key}', expected <artifact-id> only")
        return ArtifactId(group, name)
    return ArtifactId.parse(key)


def format_key(
    artifact: ArtifactId,
    identifier: ArtifactIdentifier = ArtifactIdentifier.GROUP_ID_AND_ARTIFACT_ID,
) -> str:
    if identifier is ArtifactIdentifier.ONLY_ARTIFACT_ID:
        return artifact.name
    return str(artifact)
