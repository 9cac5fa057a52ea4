from __future__ import annotations

from pathlib import Path

import pytest

from releaseos.core.config import GitMode, VersioningConfig
from releaseos.core.engine import VerificationMode
from releaseos.core.errors import InconsistentBumpsError, ScopeViolationError
from releaseos.core.version import BumpKind
from releaseos.core.workflows import run_verify
from releaseos.core.workflows import verify as verify_module


def config_for(mode: VerificationMode, consistent: bool = False, **kwargs) -> VersioningConfig:
    return VersioningConfig(verification={"mode": mode, "consistent": consistent}, **kwargs)


def test_verify_returns_aggregated_intents(chain_project: Path, write_intent) -> None:
    write_intent("versioning-1.md", {"com.example:a": "patch"})
    write_intent("versioning-2.md", {"com.example:a": "minor", "com.example:b": "patch"})

    intents = run_verify(chain_project, config_for(VerificationMode.AT_LEAST_ONE_PROJECT))

    assert {str(a): b for a, b in intents.bumps.items()} == {
        "com.example:a": BumpKind.MINOR,
        "com.example:b": BumpKind.PATCH,
    }
    assert [p.name for p in intents.paths] == ["versioning-1.md", "versioning-2.md"]


def test_missing_versioning_directory(chain_project: Path) -> None:
    assert run_verify(chain_project, VersioningConfig()).is_empty
    with pytest.raises(ScopeViolationError):
        run_verify(chain_project, config_for(VerificationMode.AT_LEAST_ONE_PROJECT))


def test_dependent_projects_mode(chain_project: Path, write_intent) -> None:
    write_intent("versioning-1.md", {"com.example:b": "minor"})
    with pytest.raises(ScopeViolationError, match="com.example:c"):
        run_verify(chain_project, config_for(VerificationMode.DEPENDENT_PROJECTS))

    write_intent("versioning-2.md", {"com.example:c": "patch"})
    run_verify(chain_project, config_for(VerificationMode.DEPENDENT_PROJECTS))


def test_consistent_bumps(chain_project: Path, write_intent) -> None:
    write_intent("versioning-1.md", {"com.example:b": "minor", "com.example:c": "patch"})
    with pytest.raises(InconsistentBumpsError):
        run_verify(chain_project, config_for(VerificationMode.NONE, consistent=True))


def test_git_status_shown_when_git_enabled(chain_project: Path, monkeypatch) -> None:
    calls = []
    monkeypatch.setattr(verify_module, "git_status", lambda cwd=None: calls.append(cwd) or "")

    run_verify(chain_project, config_for(VerificationMode.NONE))
    assert calls == []

    run_verify(chain_project, config_for(VerificationMode.NONE, git=GitMode.STASH))
    assert calls == [chain_project.resolve()]
