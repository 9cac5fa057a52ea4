from __future__ import annotations

from datetime import date

import pytest

from releaseos.core.config import ChangelogHeaders
from releaseos.core.engine import DEPENDENCY_BUMP_MESSAGE, ChangelogRenderer, VersionChange
from releaseos.core.errors import FormatError
from releaseos.core.graph import ArtifactId
from releaseos.core.intent import AggregatedIntents, parse_document
from releaseos.core.version import BumpKind

CORE = ArtifactId("com.example", "core")
TODAY = date(2024, 5, 1)
CHANGE = VersionChange(CORE, "1.2.3", "1.3.0", BumpKind.MINOR)


@pytest.fixture
def renderer() -> ChangelogRenderer:
    return ChangelogRenderer(ChangelogHeaders(), today=TODAY)


def test_new_section_inserted_after_title(renderer) -> None:
    existing = "# Changelog\n\n## 1.2.3 - 2024-04-02\n\nOlder entry.\n"
    documents = [parse_document("---\ncom.example:core: minor\n---\n\nNew feature.")]

    merged = renderer.merge(existing, renderer.entry(CHANGE, documents))

    assert merged == (
        "# Changelog\n\n"
        "## 1.3.0 - 2024-05-01\n\n"
        "### Minor\n\n"
        "New feature.\n\n"
        "## 1.2.3 - 2024-04-02\n\n"
        "Older entry.\n"
    )


def test_groups_follow_bump_order(renderer) -> None:
    documents = [
        parse_document("---\ncom.example:core: patch\n---\nA fix."),
        parse_document("---\ncom.example:core: major\n---\nBreaking."),
        parse_document("---\ncom.example:core: none\n---\nChore."),
        parse_document("---\ncom.example:core: minor\n---\nFeature one."),
        parse_document("---\ncom.example:core: minor\n---\nFeature two."),
    ]

    entry = renderer.entry(CHANGE, documents)

    assert [(g.label, g.bodies) for g in entry.groups] == [
        ("Major", ("Breaking.",)),
        ("Minor", ("Feature one.", "Feature two.")),
        ("Patch", ("A fix.",)),
        ("Other", ("Chore.",)),
    ]


def test_missing_changelog_gets_title(renderer) -> None:
    merged = renderer.merge(None, renderer.entry(CHANGE, []))
    assert merged == (
        "# Changelog\n\n"
        "## 1.3.0 - 2024-05-01\n\n"
        "### Other\n\n"
        f"{DEPENDENCY_BUMP_MESSAGE}\n"
    )
    assert renderer.merge("", renderer.entry(CHANGE, [])) == merged


def test_changelog_without_title_is_rejected(renderer) -> None:
    with pytest.raises(FormatError, match="Changelog must start with a single H1 heading with the text 'Changelog'"):
        renderer.merge("## 1.0.0\n\ntext\n", renderer.entry(CHANGE, []))


def test_custom_headers() -> None:
    headers = ChangelogHeaders(
        changelog="Release notes",
        version="v{version} ({date#d MMMM yyyy})",
        minor="Features",
    )
    renderer = ChangelogRenderer(headers, today=TODAY)
    documents = [parse_document("---\ncom.example:core: minor\n---\nShiny.")]

    merged = renderer.merge("# Release notes\n", renderer.entry(CHANGE, documents))

    assert merged == "# Release notes\n\n## v1.3.0 (1 May 2024)\n\n### Features\n\nShiny.\n"


def test_merge_change_uses_documents_for_artifact(renderer) -> None:
    document = parse_document("---\ncom.example:core: minor\ncom.example:api: patch\n---\nShared text.")
    intents = AggregatedIntents.aggregate([document])

    merged = renderer.merge_change(CHANGE, intents, None)
    api_change = VersionChange(ArtifactId("com.example", "api"), "0.1.0", "0.1.1", BumpKind.PATCH)

    assert "### Minor\n\nShared text." in merged
    assert "### Patch\n\nShared text." in renderer.merge_change(api_change, intents, None)


def test_environment_is_built_once(renderer) -> None:
    assert renderer.env is renderer.env


def test_existing_hard_line_breaks_are_kept(renderer) -> None:
    existing = "# Changelog\n\n## 1.2.3 - 2024-04-02\n\nLine one  \nLine two\n"
    merged = renderer.merge(existing, renderer.entry(CHANGE, []))
    assert merged.endswith("## 1.2.3 - 2024-04-02\n\nLine one  \nLine two\n")
