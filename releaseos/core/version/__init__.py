"""Version algebra - semantic versions and bump kinds"""

from releaseos.core.version.semver import (
    SEMVER_PATTERN,
    BumpKind,
    SemanticVersion,
)

__all__ = [
    "SEMVER_PATTERN",
    "BumpKind",
    "SemanticVersion",
]
