from __future__ import annotations

import pytest

from releaseos.core.errors import GraphError
from releaseos.core.graph import ArtifactId, ScopeStrategy, load_reactor

A = ArtifactId("com.example", "a")
B = ArtifactId("com.example", "b")
C = ArtifactId("com.example", "c")
PARENT = ArtifactId("com.example", "parent")


def test_dependents_and_dependencies(chain_project) -> None:
    graph = load_reactor(chain_project).graph(ScopeStrategy.PROJECT_VERSION)

    assert graph.dependencies_of(B) == [A, PARENT]
    assert graph.dependents_of(A) == [B]
    assert graph.dependents_of(PARENT) == [A, B, C]
    assert graph.dependents_of(C) == []


def test_topological_order_puts_dependencies_first(chain_project) -> None:
    graph = load_reactor(chain_project).graph(ScopeStrategy.PROJECT_VERSION)
    assert graph.topological_order() == [PARENT, A, B, C]


def test_literal_sites_targeting(chain_project) -> None:
    graph = load_reactor(chain_project).graph(ScopeStrategy.PROJECT_VERSION)
    sites = graph.literal_sites_targeting(A)
    assert [(site.owner, site.version_text) for site in sites] == [(B, "1.2.3")]


def test_unknown_node_raises(chain_project) -> None:
    graph = load_reactor(chain_project).graph(ScopeStrategy.PROJECT_VERSION)
    with pytest.raises(GraphError):
        graph.node(ArtifactId("com.example", "missing"))


def test_cycle_is_rejected(write_pom, tmp_path) -> None:
    write_pom(".", "com.example", "parent", "1.0.0", modules=["a", "b"])
    write_pom("a", "com.example", "a", "1.0.0", dependencies=[("com.example", "b", "1.0.0")])
    write_pom("b", "com.example", "b", "1.0.0", dependencies=[("com.example", "a", "1.0.0")])
    graph = load_reactor(tmp_path).graph(ScopeStrategy.PROJECT_VERSION)

    with pytest.raises(GraphError, match="cycle"):
        graph.topological_order()


def test_duplicate_artifacts_rejected(write_pom, tmp_path) -> None:
    write_pom(".", "com.example", "parent", "1.0.0", modules=["a", "b"])
    write_pom("a", "com.example", "same", "1.0.0")
    write_pom("b", "com.example", "same", "1.0.0")

    with pytest.raises(GraphError, match="Duplicate"):
        load_reactor(tmp_path).graph(ScopeStrategy.PROJECT_VERSION)


def test_self_references_are_not_edges(write_pom, tmp_path) -> None:
    write_pom(".", "com.example", "solo", "1.0.0", managed=[("com.example", "solo", "1.0.0")])
    graph = load_reactor(tmp_path).graph(ScopeStrategy.PROJECT_VERSION)
    solo = ArtifactId("com.example", "solo")
    assert graph.dependencies_of(solo) == []
    assert graph.literal_sites_targeting(solo) == []
