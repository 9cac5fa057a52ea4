"""
Bump propagation

Every module starts from its direct intent (NONE when it has none). Modules
are visited dependencies first; a module with at least one changed dependency
is raised to PATCH or more. A forced bump replaces file based intents for
every module in the graph.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Mapping, Optional

from releaseos.core.graph.artifact import ArtifactId
from releaseos.core.graph.model import ArtifactGraph
from releaseos.core.version import BumpKind

logger = logging.getLogger(__name__)


class Provenance(str, Enum):
    """Why a module ends up with its bump."""

    DIRECT = "direct"
    PROPAGATED = "propagated"
    FORCED = "forced"
    NONE = "none"


@dataclass(frozen=True)
class ResolvedBump:
    artifact: ArtifactId
    kind: BumpKind
    provenance: Provenance

    @property
    def changed(self) -> bool:
        return self.kind is not BumpKind.NONE


def resolve_bumps(
    graph: ArtifactGraph,
    intents: Mapping[ArtifactId, BumpKind],
    forced: Optional[BumpKind] = None,
) -> Dict[ArtifactId, ResolvedBump]:
    """Resolve the bump of every module in the graph.

    Args:
        graph: In-scope modules and their references
        intents: Direct intents per artifact; artifacts outside the graph are ignored
        forced: Bump applied to every module instead of file based resolution

    Returns:
        ResolvedBump per artifact, in topological order
    """
    order = graph.topological_order()

    if forced is not None and forced is not BumpKind.NONE:
        logger.info(f"Forcing a {forced} bump for {len(order)} project(s)")
        return {
            artifact: ResolvedBump(
                artifact,
                forced,
                Provenance.DIRECT if artifact in intents else Provenance.FORCED,
            )
            for artifact in order
        }

    resolved: Dict[ArtifactId, ResolvedBump] = {}
    for artifact in order:
        direct = intents.get(artifact)
        kind = direct or BumpKind.NONE
        provenance = Provenance.DIRECT if direct not in (None, BumpKind.NONE) else Provenance.NONE

        changed_dependencies: List[ArtifactId] = [
            dependency
            for dependency in graph.dependencies_of(artifact)
            if resolved[dependency].changed
        ]
        if changed_dependencies and kind < BumpKind.PATCH:
            kind = BumpKind.PATCH
            provenance = Provenance.PROPAGATED
            logger.debug(
                f"{artifact} bumped as a result of changed dependencies: "
                + ", ".join(str(d) for d in changed_dependencies)
            )

        resolved[artifact] = ResolvedBump(artifact, kind, provenance)

    return resolved
