"""Maven reactor discovery: the root project plus its <modules>, recursively"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Set, Union

from releaseos.core.errors import GraphError
from releaseos.core.graph.descriptor import extract_reference_sites, read_descriptor
from releaseos.core.graph.model import ArtifactGraph, ArtifactNode, ScopeStrategy

logger = logging.getLogger(__name__)

POM_FILE = "pom.xml"


@dataclass
class Reactor:
    """All projects of a multi-module build, root first."""

    root: ArtifactNode
    projects: List[ArtifactNode]

    @property
    def root_group(self) -> str:
        return self.root.artifact.group

    def in_scope(self, scope: ScopeStrategy) -> List[ArtifactNode]:
        if scope is ScopeStrategy.REVISION_PROPERTY:
            return [self.root]
        if scope is ScopeStrategy.PROJECT_VERSION_ONLY_LEAFS:
            return [node for node in self.projects if not node.has_modules]
        return list(self.projects)

    def graph(self, scope: ScopeStrategy) -> ArtifactGraph:
        nodes = self.in_scope(scope)
        logger.debug(f"Building graph for {len(nodes)} project(s) with scope {scope.value}")
        return ArtifactGraph(nodes)


def _resolve_pom(path: Path) -> Path:
    return path / POM_FILE if path.is_dir() else path


def discover_projects(root_pom: Union[str, Path]) -> List[ArtifactNode]:
    """Read the root descriptor and every module it lists, depth first.

    A <module> entry may name a folder (holding pom.xml) or a descriptor file.

    Raises:
        IOFailure: If a descriptor cannot be read
        GraphError: If a module is listed twice or lacks coordinates
    """
    projects: List[ArtifactNode] = []
    seen: Set[Path] = set()

    def visit(pom: Path) -> None:
        pom = _resolve_pom(pom).resolve()
        if pom in seen:
            raise GraphError("Module is listed more than once in the reactor", path=pom)
        seen.add(pom)

        descriptor = read_descriptor(pom)
        artifact = descriptor.artifact_id()
        modules = descriptor.modules
        node = ArtifactNode(
            artifact=artifact,
            folder=pom.parent,
            descriptor_path=pom,
            has_modules=bool(modules),
            descriptor=descriptor,
            sites=extract_reference_sites(descriptor, artifact),
        )
        projects.append(node)
        for module in modules:
            visit(pom.parent / module)

    visit(Path(root_pom))
    logger.info(f"Discovered {len(projects)} project(s) in reactor {projects[0].artifact}")
    return projects


def load_reactor(project_dir: Union[str, Path]) -> Reactor:
    """Discover the reactor whose root descriptor lives in project_dir."""
    projects = discover_projects(_resolve_pom(Path(project_dir)))
    return Reactor(root=projects[0], projects=projects)
