from __future__ import annotations

from pathlib import Path

from releaseos.core.config import GraphOutput, VersioningConfig
from releaseos.core.graph import ScopeStrategy
from releaseos.core.workflows import build_graph_view


def config_for(output: GraphOutput, relative: bool = True, **kwargs) -> VersioningConfig:
    return VersioningConfig(graph={"output": output, "relative_paths": relative}, **kwargs)


def test_artifact_and_folder(chain_project: Path) -> None:
    view = build_graph_view(chain_project, VersioningConfig())

    assert list(view) == ["com.example:parent", "com.example:a", "com.example:b", "com.example:c"]
    assert view["com.example:parent"] == {"artifact": "com.example:parent", "folder": ".", "dependencies": []}
    assert view["com.example:c"] == {
        "artifact": "com.example:c",
        "folder": "c",
        "dependencies": [
            {"artifact": "com.example:b", "folder": "b"},
            {"artifact": "com.example:parent", "folder": "."},
        ],
    }


def test_artifact_only(chain_project: Path) -> None:
    view = build_graph_view(chain_project, config_for(GraphOutput.ARTIFACT_ONLY))
    assert view["com.example:b"] == {
        "artifact": "com.example:b",
        "dependencies": ["com.example:a", "com.example:parent"],
    }


def test_folder_only_with_absolute_paths(chain_project: Path) -> None:
    view = build_graph_view(chain_project, config_for(GraphOutput.FOLDER_ONLY, relative=False))
    root = chain_project.resolve()
    assert view["com.example:a"] == {
        "folder": str(root / "a"),
        "dependencies": [str(root)],
    }


def test_leaf_scope_hides_parent(chain_project: Path) -> None:
    view = build_graph_view(chain_project, VersioningConfig(scope=ScopeStrategy.PROJECT_VERSION_ONLY_LEAFS))
    assert list(view) == ["com.example:a", "com.example:b", "com.example:c"]
    assert view["com.example:a"]["dependencies"] == []
