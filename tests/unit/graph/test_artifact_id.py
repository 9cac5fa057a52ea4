from __future__ import annotations

import pytest

from releaseos.core.errors import FormatError
from releaseos.core.graph import ArtifactId, ArtifactIdentifier, format_key, parse_key


def test_parse_and_format() -> None:
    artifact = ArtifactId.parse("com.example:core")
    assert artifact == ArtifactId("com.example", "core")
    assert str(artifact) == "com.example:core"


@pytest.mark.parametrize("text", ["core", "a:b:c", ":core", "com.example:", ""])
def test_parse_rejects_malformed(text: str) -> None:
    with pytest.raises(FormatError):
        ArtifactId.parse(text)


def test_ordering_by_group_then_name() -> None:
    ids = [ArtifactId("org.b", "a"), ArtifactId("org.a", "z"), ArtifactId("org.a", "b")]
    assert sorted(ids) == [ArtifactId("org.a", "b"), ArtifactId("org.a", "z"), ArtifactId("org.b", "a")]


def test_artifact_only_keys_use_implied_group() -> None:
    artifact = parse_key("core", ArtifactIdentifier.ONLY_ARTIFACT_ID, group="com.example")
    assert artifact == ArtifactId("com.example", "core")
    assert format_key(artifact, ArtifactIdentifier.ONLY_ARTIFACT_ID) == "core"
    assert format_key(artifact) == "com.example:core"


def test_artifact_only_keys_reject_coordinates() -> None:
    with pytest.raises(FormatError):
        parse_key("com.example:core", ArtifactIdentifier.ONLY_ARTIFACT_ID, group="com.example")
    with pytest.raises(FormatError):
        parse_key("core", ArtifactIdentifier.ONLY_ARTIFACT_ID)
