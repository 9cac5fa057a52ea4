"""Workflows behind the create, update, verify and graph commands"""

from releaseos.core.workflows.create import (
    SELECTABLE_BUMPS,
    create_intent,
    list_candidates,
    parse_bump_option,
)
from releaseos.core.workflows.graph import build_graph_view
from releaseos.core.workflows.project import ProjectContext, open_project
from releaseos.core.workflows.update import UpdateResult, run_update
from releaseos.core.workflows.verify import run_verify

__all__ = [
    "SELECTABLE_BUMPS",
    "create_intent",
    "list_candidates",
    "parse_bump_option",
    "build_graph_view",
    "ProjectContext",
    "open_project",
    "UpdateResult",
    "run_update",
    "run_verify",
]
