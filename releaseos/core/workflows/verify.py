"""Verify workflow: checks version Markdown files against the project scope"""

import logging
from pathlib import Path
from typing import Union

from releaseos.core.config import GitMode, VersioningConfig
from releaseos.core.engine import verify_intents
from releaseos.core.intent import AggregatedIntents
from releaseos.core.utils.process import git_status
from releaseos.core.workflows.project import open_project

logger = logging.getLogger(__name__)


def run_verify(project_dir: Union[str, Path], config: VersioningConfig) -> AggregatedIntents:
    """Verify intents; returns them when the policy holds.

    Raises:
        VerificationFailure: If the policy is violated
    """
    project = open_project(project_dir, config)
    intents = project.load_intents()
    verify_intents(
        project.graph,
        intents.bumps,
        config.verification.mode,
        config.verification.consistent,
    )
    if config.git is not GitMode.NO_GIT:
        git_status(cwd=project.project_dir)
    return intents
