"""
Artifact graph model

Nodes are the in-scope modules of a reactor; edges come from the version
references (parent, dependencies, plugins and their management sections) that
one module's descriptor holds to another module of the same graph.
"""

from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Tuple
from xml.etree.ElementTree import Element

from releaseos.core.errors import GraphError
from releaseos.core.graph.artifact import ArtifactId

if TYPE_CHECKING:
    from releaseos.core.graph.descriptor import ProjectDescriptor

logger = logging.getLogger(__name__)


class ScopeStrategy(str, Enum):
    """Which modules are versioned and where their version lives."""

    PROJECT_VERSION = "project-version"
    REVISION_PROPERTY = "revision-property"
    PROJECT_VERSION_ONLY_LEAFS = "project-version-only-leafs"

    @property
    def version_path(self) -> Tuple[str, ...]:
        """Element path below <project> holding the version text."""
        if self is ScopeStrategy.REVISION_PROPERTY:
            return ("properties", "revision")
        return ("version",)


class ReferenceCategory(str, Enum):
    PARENT = "parent"
    DEPENDENCY = "dependency"
    DEPENDENCY_MANAGEMENT = "dependency-management"
    PLUGIN = "plugin"
    PLUGIN_MANAGEMENT = "plugin-management"


@dataclass(eq=False)
class ReferenceSite:
    """A version element in one descriptor that points at another artifact.

    Literal sites hold a semantic version and may be rewritten; placeholder
    sites hold a ${property} expression and are only used as graph edges.
    """

    owner: ArtifactId
    target: ArtifactId
    category: ReferenceCategory
    element: Element
    literal: bool

    @property
    def version_text(self) -> str:
        return (self.element.text or "").strip()

    def __repr__(self) -> str:
        kind = "literal" if self.literal else "placeholder"
        return f"ReferenceSite({self.owner} -> {self.target}, {self.category.value}, {kind}, {self.version_text!r})"


@dataclass(eq=False)
class ArtifactNode:
    """A reactor module with its parsed descriptor."""

    artifact: ArtifactId
    folder: Path
    descriptor_path: Path
    has_modules: bool
    descriptor: "ProjectDescriptor"
    sites: List[ReferenceSite] = field(default_factory=list)


class ArtifactGraph:
    """Dependency graph over a fixed set of modules.

    Built once per invocation; only the descriptors it holds are mutated later.
    """

    def __init__(self, nodes: Iterable[ArtifactNode]):
        self._nodes: Dict[ArtifactId, ArtifactNode] = {}
        for node in nodes:
            if node.artifact in self._nodes:
                raise GraphError(
                    f"Duplicate artifact in project graph: {node.artifact}",
                    first=self._nodes[node.artifact].descriptor_path,
                    second=node.descriptor_path,
                )
            self._nodes[node.artifact] = node

        self._dependencies: Dict[ArtifactId, List[ArtifactId]] = {}
        self._dependents: Dict[ArtifactId, List[ArtifactId]] = {a: [] for a in self._nodes}
        for artifact, node in self._nodes.items():
            targets = sorted(
                {
                    site.target
                    for site in node.sites
                    if site.target in self._nodes and site.target != artifact
                }
            )
            self._dependencies[artifact] = targets
            for target in targets:
                self._dependents[target].append(artifact)

    def __contains__(self, artifact: object) -> bool:
        return artifact in self._nodes

    def __iter__(self):
        return iter(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def artifacts(self) -> List[ArtifactId]:
        """Artifact ids in the order the nodes were given."""
        return list(self._nodes)

    def node(self, artifact: ArtifactId) -> ArtifactNode:
        try:
            return self._nodes[artifact]
        except KeyError:
            raise GraphError(f"Artifact is not part of the project graph: {artifact}") from None

    def get(self, artifact: ArtifactId) -> Optional[ArtifactNode]:
        return self._nodes.get(artifact)

    def dependencies_of(self, artifact: ArtifactId) -> List[ArtifactId]:
        self.node(artifact)
        return list(self._dependencies[artifact])

    def dependents_of(self, artifact: ArtifactId) -> List[ArtifactId]:
        self.node(artifact)
        return sorted(self._dependents[artifact])

    def literal_sites_targeting(self, artifact: ArtifactId) -> List[ReferenceSite]:
        """All literal version references to the artifact from other modules."""
        self.node(artifact)
        return [
            site
            for node in self._nodes.values()
            if node.artifact != artifact
            for site in node.sites
            if site.target == artifact and site.literal
        ]

    def topological_order(self) -> List[ArtifactId]:
        """Dependencies before dependents, ties broken by artifact id.

        Raises:
            GraphError: If the references form a cycle
        """
        pending = {artifact: len(deps) for artifact, deps in self._dependencies.items()}
        ready = [artifact for artifact, count in pending.items() if count == 0]
        heapq.heapify(ready)
        order: List[ArtifactId] = []
        while ready:
            artifact = heapq.heappop(ready)
            order.append(artifact)
            for dependent in self._dependents[artifact]:
                pending[dependent] -= 1
                if pending[dependent] == 0:
                    heapq.heappush(ready, dependent)

        if len(order) != len(self._nodes):
            cyclic = sorted(a for a, count in pending.items() if count > 0)
            raise GraphError(
                "Dependency cycle between projects: " + ", ".join(str(a) for a in cyclic)
            )
        return order
