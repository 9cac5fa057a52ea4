from __future__ import annotations

import pytest

from releaseos.core.engine import Provenance, resolve_bumps
from releaseos.core.graph import ArtifactId, ScopeStrategy, load_reactor
from releaseos.core.version import BumpKind

A = ArtifactId("com.example", "a")
B = ArtifactId("com.example", "b")
C = ArtifactId("com.example", "c")
PARENT = ArtifactId("com.example", "parent")


@pytest.fixture
def graph(chain_project):
    return load_reactor(chain_project).graph(ScopeStrategy.PROJECT_VERSION)


def kinds(resolved):
    return {artifact: bump.kind for artifact, bump in resolved.items()}


def test_direct_intent_propagates_to_dependents(graph) -> None:
    resolved = resolve_bumps(graph, {A: BumpKind.MINOR})

    assert kinds(resolved) == {
        PARENT: BumpKind.NONE,
        A: BumpKind.MINOR,
        B: BumpKind.PATCH,
        C: BumpKind.PATCH,
    }
    assert resolved[A].provenance is Provenance.DIRECT
    assert resolved[B].provenance is Provenance.PROPAGATED
    assert resolved[C].provenance is Provenance.PROPAGATED
    assert resolved[PARENT].provenance is Provenance.NONE


def test_propagation_never_lowers_a_direct_intent(graph) -> None:
    resolved = resolve_bumps(graph, {A: BumpKind.PATCH, C: BumpKind.MAJOR})
    assert resolved[C].kind is BumpKind.MAJOR
    assert resolved[C].provenance is Provenance.DIRECT


def test_resolution_is_monotone(graph) -> None:
    intents = {A: BumpKind.PATCH, B: BumpKind.MINOR}
    base = resolve_bumps(graph, intents)

    for artifact in graph.artifacts:
        for kind in BumpKind:
            raised = dict(intents)
            raised[artifact] = BumpKind.max(raised.get(artifact), kind)
            result = resolve_bumps(graph, raised)
            assert all(result[a].kind >= base[a].kind for a in graph.artifacts)


def test_parent_change_reaches_every_child(graph) -> None:
    resolved = resolve_bumps(graph, {PARENT: BumpKind.MAJOR})
    assert kinds(resolved) == {
        PARENT: BumpKind.MAJOR,
        A: BumpKind.PATCH,
        B: BumpKind.PATCH,
        C: BumpKind.PATCH,
    }


def test_no_intents_means_no_change(graph) -> None:
    resolved = resolve_bumps(graph, {})
    assert not any(bump.changed for bump in resolved.values())


def test_forced_bump_applies_everywhere(graph) -> None:
    resolved = resolve_bumps(graph, {A: BumpKind.PATCH}, forced=BumpKind.MINOR)

    assert set(kinds(resolved).values()) == {BumpKind.MINOR}
    assert resolved[A].provenance is Provenance.DIRECT
    assert resolved[B].provenance is Provenance.FORCED


def test_intents_outside_graph_are_ignored(graph) -> None:
    resolved = resolve_bumps(graph, {ArtifactId("org.other", "x"): BumpKind.MAJOR})
    assert ArtifactId("org.other", "x") not in resolved
    assert not any(bump.changed for bump in resolved.values())
