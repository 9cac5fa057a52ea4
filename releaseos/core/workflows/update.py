"""
Update workflow

Resolves bumps, rewrites descriptors and changelogs in memory, and only then
writes everything (or logs it in dry-run mode). Scripts run once per changed
module after all files are written; consumed version Markdown files are
deleted after a file based run that changed at least one module.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional, Union

from releaseos.core.config import BumpStrategy, VersioningConfig
from releaseos.core.engine import (
    CHANGELOG_FILE,
    ChangelogRenderer,
    VersionChange,
    apply_bumps,
    check_scope,
    resolve_bumps,
)
from releaseos.core.errors import IOFailure
from releaseos.core.graph import render_descriptor, write_descriptor
from releaseos.core.utils.atomic_write import atomic_write, backup_file, delete_files
from releaseos.core.utils.process import git_add, git_commit, run_script
from releaseos.core.workflows.project import open_project

logger = logging.getLogger(__name__)


@dataclass
class UpdateResult:
    changes: List[VersionChange] = field(default_factory=list)
    written: List[Path] = field(default_factory=list)
    deleted: List[Path] = field(default_factory=list)
    dry_run: bool = False
    committed: bool = False


def _read_changelog(path: Path) -> Optional[str]:
    if not path.exists():
        return None
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise IOFailure(f"Unable to read changelog: {e}", path=path) from e
    logger.info(f"Read {len(text.splitlines())} lines from {path}")
    return text


def run_update(
    project_dir: Union[str, Path],
    config: VersioningConfig,
    today: Optional[date] = None,
) -> UpdateResult:
    """Run a full update of the project.

    Raises:
        ReleaseError: On any failure; nothing is written if resolution fails
    """
    today = today or date.today()
    project = open_project(project_dir, config)
    graph = project.graph

    intents = project.load_intents()
    check_scope(graph, intents.bumps)

    resolved = resolve_bumps(graph, intents.bumps, config.bump.forced)
    applied = apply_bumps(graph, resolved, config.scope)
    result = UpdateResult(changes=applied.changes, dry_run=config.dry_run)
    if not applied.changes:
        logger.info("No project versions changed")

    renderer = ChangelogRenderer(config.headers, today)
    changelogs: Dict[Path, str] = {}
    for change in applied.changes:
        path = graph.node(change.artifact).folder / CHANGELOG_FILE
        changelogs[path] = renderer.merge_change(change, intents, _read_changelog(path), path)

    if config.dry_run:
        for node in applied.dirty:
            logger.info(f"Dry-run: new file at {node.descriptor_path}:\n{render_descriptor(node.descriptor)}")
        for path, content in changelogs.items():
            logger.info(f"Dry-run: new file at {path}:\n{content}")
    else:
        for node in applied.dirty:
            result.written.append(write_descriptor(node.descriptor, backup=config.backup))
        for path, content in changelogs.items():
            if config.backup and path.exists():
                backup_file(path)
            result.written.append(atomic_write(path, content))

    execution_date = today.isoformat()
    for change in applied.changes:
        folder = graph.node(change.artifact).folder
        for script in config.scripts:
            run_script(
                script,
                folder,
                change.old_version,
                change.new_version,
                dry_run=config.dry_run,
                stash=config.git.is_stash,
                execution_date=execution_date,
            )

    if config.dry_run:
        return result

    if config.git.is_stash:
        git_add(result.written, cwd=project.project_dir)

    if applied.changes and config.bump is BumpStrategy.FILE_BASED:
        result.deleted = delete_files(intents.paths)
        if config.git.is_stash:
            git_add(result.deleted, cwd=project.project_dir)

    if config.git.is_commit and applied.changes:
        git_commit(config.format_commit_message(len(applied.changes)), cwd=project.project_dir)
        result.committed = True

    return result
