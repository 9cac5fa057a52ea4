"""Version applier: rewrites module versions and literal references in memory"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List

from releaseos.core.errors import FormatError
from releaseos.core.engine.propagation import Provenance, ResolvedBump
from releaseos.core.graph.artifact import ArtifactId
from releaseos.core.graph.descriptor import locate_version_node
from releaseos.core.graph.model import ArtifactGraph, ArtifactNode, ScopeStrategy
from releaseos.core.version import BumpKind, SemanticVersion

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VersionChange:
    artifact: ArtifactId
    old_version: str
    new_version: str
    bump: BumpKind = BumpKind.NONE
    provenance: Provenance = Provenance.NONE


@dataclass
class ApplyResult:
    """Changes in topological order plus the nodes whose descriptor is dirty."""

    changes: List[VersionChange] = field(default_factory=list)
    dirty: List[ArtifactNode] = field(default_factory=list)

    @property
    def changed_artifacts(self) -> List[ArtifactId]:
        return [change.artifact for change in self.changes]


def apply_bumps(
    graph: ArtifactGraph,
    resolved: Dict[ArtifactId, ResolvedBump],
    scope: ScopeStrategy,
) -> ApplyResult:
    """Bump every changed module and the literal references to it.

    A version element is only rewritten while its text still equals the old
    version; placeholder references are left alone.

    Raises:
        GraphError: If a changed module has no version at the scope's path
        FormatError: If a changed module's version is not a semantic version
    """
    result = ApplyResult()

    for artifact in graph.topological_order():
        bump = resolved.get(artifact)
        if bump is None or not bump.changed:
            logger.debug(f"Skipping {artifact}, no version bump")
            continue

        node = graph.node(artifact)
        element = locate_version_node(node.descriptor, scope)
        old_text = (element.text or "").strip()
        try:
            old_version = SemanticVersion.parse(old_text)
        except FormatError as e:
            raise FormatError(e.message, path=node.descriptor_path, artifact=artifact) from e
        new_text = str(old_version.bump(bump.kind))

        node.descriptor.set_text(element, new_text)
        updated = 0
        for site in graph.literal_sites_targeting(artifact):
            if site.version_text == old_text:
                graph.node(site.owner).descriptor.set_text(site.element, new_text)
                updated += 1

        logger.info(
            f"Bumped {artifact} {old_text} -> {new_text} ({bump.kind}, {bump.provenance.value}), "
            f"{updated} reference(s) updated"
        )
        result.changes.append(
            VersionChange(artifact, old_text, new_text, bump.kind, bump.provenance)
        )

    result.dirty = [node for node in graph if node.descriptor.dirty]
    return result
