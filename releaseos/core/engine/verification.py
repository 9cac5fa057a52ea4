"""
Verification policies

Checks run in order:
1. every artifact named in an intent must be part of the scope
2. the mode specific rule on which modules need an intent
3. optionally, all direct bumps must be identical
"""

import logging
from collections import deque
from enum import Enum
from typing import Dict, Iterable, List, Set

from releaseos.core.errors import (
    ArtifactNotInScopeError,
    InconsistentBumpsError,
    ScopeViolationError,
)
from releaseos.core.graph.artifact import ArtifactId
from releaseos.core.graph.model import ArtifactGraph
from releaseos.core.version import BumpKind

logger = logging.getLogger(__name__)


class VerificationMode(str, Enum):
    NONE = "none"
    AT_LEAST_ONE_PROJECT = "at-least-one-project"
    DEPENDENT_PROJECTS = "dependent-projects"
    ALL_PROJECTS = "all-projects"


def dependent_closure(graph: ArtifactGraph, roots: Iterable[ArtifactId]) -> Set[ArtifactId]:
    """The given artifacts plus every module that transitively depends on one."""
    closure: Set[ArtifactId] = set()
    queue = deque(artifact for artifact in roots if artifact in graph)
    while queue:
        artifact = queue.popleft()
        if artifact in closure:
            continue
        closure.add(artifact)
        queue.extend(graph.dependents_of(artifact))
    return closure


def check_scope(graph: ArtifactGraph, artifacts: Iterable[ArtifactId]) -> None:
    """Raise ArtifactNotInScopeError for artifacts that are not in the graph."""
    unknown = [artifact for artifact in artifacts if artifact not in graph]
    if unknown:
        raise ArtifactNotInScopeError(unknown)


def verify_intents(
    graph: ArtifactGraph,
    bumps: Dict[ArtifactId, BumpKind],
    mode: VerificationMode,
    consistent: bool = False,
) -> None:
    """Check direct intents against the verification policy.

    Raises:
        ArtifactNotInScopeError: If an intent names an artifact outside the graph
        ScopeViolationError: If modules required by the mode carry no intent
        InconsistentBumpsError: If consistent bumps are required but differ
    """
    check_scope(graph, bumps)

    missing: List[ArtifactId] = []
    if mode is VerificationMode.AT_LEAST_ONE_PROJECT:
        if not bumps:
            raise ScopeViolationError(mode.value)
    elif mode is VerificationMode.DEPENDENT_PROJECTS:
        required = dependent_closure(graph, bumps)
        missing = sorted(required - set(bumps))
    elif mode is VerificationMode.ALL_PROJECTS:
        missing = [artifact for artifact in graph.artifacts if artifact not in bumps]

    if missing:
        raise ScopeViolationError(mode.value, missing)

    if consistent and len(set(bumps.values())) > 1:
        raise InconsistentBumpsError(bumps)

    logger.info(f"Verification passed ({mode.value}) for {len(bumps)} artifact(s) with version intents")
