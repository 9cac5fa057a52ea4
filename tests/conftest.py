from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Iterable, Optional, Sequence, Tuple

import pytest

Coordinates = Tuple[str, str, str]

POM_NAMESPACE = "http://maven.apache.org/POM/4.0.0"


def _references(tag: str, items: Iterable[Coordinates]) -> str:
    return "".join(
        f"""
      <{tag}>
        <groupId>{group}</groupId>
        <artifactId>{artifact}</artifactId>
        <version>{version}</version>
      </{tag}>"""
        for group, artifact, version in items
    )


def render_pom(
    group: Optional[str],
    artifact: str,
    version: Optional[str] = None,
    parent: Optional[Coordinates] = None,
    dependencies: Sequence[Coordinates] = (),
    managed: Sequence[Coordinates] = (),
    plugins: Sequence[Coordinates] = (),
    plugin_management: Sequence[Coordinates] = (),
    modules: Sequence[str] = (),
    properties: Optional[Dict[str, str]] = None,
    namespace: bool = True,
) -> str:
    lines = ['<?xml version="1.0" encoding="UTF-8"?>']
    lines.append(f'<project xmlns="{POM_NAMESPACE}">' if namespace else "<project>")
    lines.append("  <modelVersion>4.0.0</modelVersion>")
    if parent:
        lines.append(
            f"  <parent>\n    <groupId>{parent[0]}</groupId>\n"
            f"    <artifactId>{parent[1]}</artifactId>\n    <version>{parent[2]}</version>\n  </parent>"
        )
    if group:
        lines.append(f"  <groupId>{group}</groupId>")
    lines.append(f"  <artifactId>{artifact}</artifactId>")
    if version:
        lines.append(f"  <version>{version}</version>")
    if properties:
        body = "".join(f"\n    <{k}>{v}</{k}>" for k, v in properties.items())
        lines.append(f"  <properties>{body}\n  </properties>")
    if modules:
        body = "".join(f"\n    <module>{m}</module>" for m in modules)
        lines.append(f"  <modules>{body}\n  </modules>")
    if managed:
        lines.append(
            f"  <dependencyManagement>\n    <dependencies>{_references('dependency', managed)}\n"
            f"    </dependencies>\n  </dependencyManagement>"
        )
    if dependencies:
        lines.append(f"  <dependencies>{_references('dependency', dependencies)}\n  </dependencies>")
    if plugins or plugin_management:
        build = ["  <build>"]
        if plugin_management:
            build.append(
                f"    <pluginManagement>\n      <plugins>{_references('plugin', plugin_management)}\n"
                f"      </plugins>\n    </pluginManagement>"
            )
        if plugins:
            build.append(f"    <plugins>{_references('plugin', plugins)}\n    </plugins>")
        build.append("  </build>")
        lines.append("\n".join(build))
    lines.append("</project>")
    return "\n".join(lines) + "\n"


@pytest.fixture
def write_pom(tmp_path: Path) -> Callable[..., Path]:
    """Write a pom.xml into tmp_path/<folder> and return its path."""

    def _write(folder: str = ".", *args, **kwargs) -> Path:
        path = tmp_path / folder / "pom.xml"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(render_pom(*args, **kwargs), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_intent(tmp_path: Path) -> Callable[..., Path]:
    """Write a version Markdown file into tmp_path/.versioning."""

    def _write(name: str, bumps: Dict[str, str], body: str = "Some change.") -> Path:
        path = tmp_path / ".versioning" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        header = "\n".join(f"{key}: {value}" for key, value in bumps.items())
        path.write_text(f"---\n{header}\n---\n\n{body}\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def chain_project(tmp_path: Path, write_pom) -> Path:
    """Reactor com.example:parent with modules a <- b <- c.

    b depends on a with a literal version, c depends on b with a literal
    version, and every module references the parent.
    """
    parent = ("com.example", "parent", "1.0.0")
    write_pom(".", "com.example", "parent", "1.0.0", modules=["a", "b", "c"])
    write_pom("a", None, "a", "1.2.3", parent=parent)
    write_pom("b", None, "b", "2.0.0", parent=parent, dependencies=[("com.example", "a", "1.2.3")])
    write_pom("c", None, "c", "3.1.0", parent=parent, dependencies=[("com.example", "b", "2.0.0")])
    return tmp_path
