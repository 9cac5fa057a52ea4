"""Release engine - propagation, version rewriting, changelogs and verification"""

from releaseos.core.engine.applier import ApplyResult, VersionChange, apply_bumps
from releaseos.core.engine.changelog import (
    CHANGELOG_FILE,
    DEPENDENCY_BUMP_MESSAGE,
    ChangelogEntry,
    ChangelogGroup,
    ChangelogRenderer,
)
from releaseos.core.engine.headers import format_date, format_header, validate_header_template
from releaseos.core.engine.propagation import Provenance, ResolvedBump, resolve_bumps
from releaseos.core.engine.verification import (
    VerificationMode,
    check_scope,
    dependent_closure,
    verify_intents,
)

__all__ = [
    "ApplyResult",
    "VersionChange",
    "apply_bumps",
    "CHANGELOG_FILE",
    "DEPENDENCY_BUMP_MESSAGE",
    "ChangelogEntry",
    "ChangelogGroup",
    "ChangelogRenderer",
    "format_date",
    "format_header",
    "validate_header_template",
    "Provenance",
    "ResolvedBump",
    "resolve_bumps",
    "VerificationMode",
    "check_scope",
    "dependent_closure",
    "verify_intents",
]
