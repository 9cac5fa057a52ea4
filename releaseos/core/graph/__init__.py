"""Artifact graph - Maven modules, their descriptors and version references"""

from releaseos.core.graph.artifact import (
    ArtifactId,
    ArtifactIdentifier,
    format_key,
    parse_key,
)
from releaseos.core.graph.descriptor import (
    ProjectDescriptor,
    extract_reference_sites,
    locate_version_node,
    read_descriptor,
    render_descriptor,
    write_descriptor,
)
from releaseos.core.graph.model import (
    ArtifactGraph,
    ArtifactNode,
    ReferenceCategory,
    ReferenceSite,
    ScopeStrategy,
)
from releaseos.core.graph.reactor import Reactor, discover_projects, load_reactor

__all__ = [
    "ArtifactId",
    "ArtifactIdentifier",
    "format_key",
    "parse_key",
    "ProjectDescriptor",
    "extract_reference_sites",
    "locate_version_node",
    "read_descriptor",
    "render_descriptor",
    "write_descriptor",
    "ArtifactGraph",
    "ArtifactNode",
    "ReferenceCategory",
    "ReferenceSite",
    "ScopeStrategy",
    "Reactor",
    "discover_projects",
    "load_reactor",
]
