"""Graph workflow: the in-scope dependency graph as a JSON-ready mapping"""

import os
from pathlib import Path
from typing import Any, Dict, Union

from releaseos.core.config import GraphOutput, VersioningConfig
from releaseos.core.graph import ArtifactNode
from releaseos.core.workflows.project import open_project


def _folder(node: ArtifactNode, root: Path, relative: bool) -> str:
    if not relative:
        return str(node.folder)
    path = os.path.relpath(node.folder, root)
    return "." if path in ("", ".") else Path(path).as_posix()


def build_graph_view(project_dir: Union[str, Path], config: VersioningConfig) -> Dict[str, Any]:
    """Map each in-scope artifact to its folder and in-scope dependencies.

    Nodes are listed dependencies first.
    """
    project = open_project(project_dir, config)
    graph = project.graph
    output = config.graph.output
    relative = config.graph.relative_paths

    def describe(node: ArtifactNode) -> Any:
        folder = _folder(node, project.project_dir, relative)
        if output is GraphOutput.ARTIFACT_ONLY:
            return str(node.artifact)
        if output is GraphOutput.FOLDER_ONLY:
            return folder
        return {"artifact": str(node.artifact), "folder": folder}

    view: Dict[str, Any] = {}
    for artifact in graph.topological_order():
        node = graph.node(artifact)
        entry: Dict[str, Any] = {}
        if output is not GraphOutput.FOLDER_ONLY:
            entry["artifact"] = str(artifact)
        if output is not GraphOutput.ARTIFACT_ONLY:
            entry["folder"] = _folder(node, project.project_dir, relative)
        entry["dependencies"] = [describe(graph.node(dep)) for dep in graph.dependencies_of(artifact)]
        view[str(artifact)] = entry
    return view
