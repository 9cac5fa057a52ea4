"""
External process helpers

Functions:
    - git_add: stage files
    - git_commit: commit staged files
    - git_status: show the working tree status
    - run_script: run an update hook for one changed module
    - open_editor: capture free text with the user's editor
"""

import logging
import os
import subprocess
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Union

import click

from releaseos.core.errors import ProcessFailure

logger = logging.getLogger(__name__)


def _run(
    cmd: Sequence[str],
    cwd: Union[str, Path, None] = None,
    env: Optional[Dict[str, str]] = None,
) -> subprocess.CompletedProcess:
    logger.debug(f"Running: {' '.join(cmd)}")
    try:
        result = subprocess.run(
            list(cmd),
            cwd=str(cwd) if cwd is not None else None,
            env=env,
            capture_output=True,
            text=True,
        )
    except OSError as e:
        raise ProcessFailure(f"Unable to start process: {e}", command=cmd, path=cwd) from e

    for line in result.stdout.splitlines():
        logger.info(line)
    for line in result.stderr.splitlines():
        logger.warning(line)

    if result.returncode != 0:
        raise ProcessFailure(
            f"Process exited with code {result.returncode}",
            command=cmd,
            path=cwd,
        )
    return result


def git_add(files: Iterable[Union[str, Path]], cwd: Union[str, Path, None] = None) -> List[str]:
    """Stage files with `git add`. Nothing is run for an empty list."""
    paths = [str(f) for f in files]
    if not paths:
        return paths
    _run(["git", "add", *paths], cwd=cwd)
    return paths


def git_commit(message: str, cwd: Union[str, Path, None] = None) -> None:
    _run(["git", "commit", "-m", message], cwd=cwd)


def git_status(cwd: Union[str, Path, None] = None) -> str:
    return _run(["git", "status"], cwd=cwd).stdout


def run_script(
    script: Union[str, Path],
    cwd: Union[str, Path],
    current_version: str,
    new_version: str,
    dry_run: bool,
    stash: bool,
    execution_date: str,
) -> None:
    """Run an update script for one module.

    The script runs in the module folder and gets the version change in its
    environment.

    Raises:
        ProcessFailure: If the script cannot be started or exits non-zero
    """
    env = dict(os.environ)
    env.update(
        {
            "CURRENT_VERSION": current_version,
            "NEW_VERSION": new_version,
            "DRY_RUN": str(dry_run).lower(),
            "GIT_STASH": str(stash).lower(),
            "EXECUTION_DATE": execution_date,
        }
    )
    script_path = Path(script).resolve()
    logger.info(f"Running script {script_path} in {cwd} ({current_version} -> {new_version})")
    _run([str(script_path)], cwd=cwd, env=env)


def open_editor(text: str = "", extension: str = ".md") -> str:
    """Open $VISUAL/$EDITOR on the text and return what was saved.

    Returns an empty string when the editor exits without saving.
    """
    try:
        edited = click.edit(text, extension=extension, require_save=True)
    except click.ClickException as e:
        raise ProcessFailure(f"Unable to open editor: {e.format_message()}") from e
    return edited or ""


__all__ = [
    "git_add",
    "git_commit",
    "git_status",
    "run_script",
    "open_editor",
]
