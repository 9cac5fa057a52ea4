"""Loading a project: reactor, in-scope graph and version intents"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from releaseos.core.config import VersioningConfig
from releaseos.core.graph import ArtifactGraph, Reactor, load_reactor
from releaseos.core.intent import AggregatedIntents, load_intents

logger = logging.getLogger(__name__)


@dataclass
class ProjectContext:
    project_dir: Path
    config: VersioningConfig
    reactor: Reactor
    graph: ArtifactGraph

    @property
    def versioning_dir(self) -> Path:
        return self.config.versioning_dir(self.project_dir)

    def load_intents(self) -> AggregatedIntents:
        return load_intents(self.versioning_dir, self.config.identifier, self.reactor.root_group)


def open_project(project_dir: Union[str, Path], config: VersioningConfig) -> ProjectContext:
    project_dir = Path(project_dir).resolve()
    reactor = load_reactor(project_dir)
    graph = reactor.graph(config.scope)
    if not len(graph):
        logger.warning("No projects found in scope")
    return ProjectContext(project_dir=project_dir, config=config, reactor=reactor, graph=graph)
