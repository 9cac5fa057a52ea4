"""Options shared by the releaseos commands"""

from typing import Any, Dict

import click

from releaseos.core.config import GitMode, VersioningConfig, load_config
from releaseos.core.graph import ArtifactIdentifier, ScopeStrategy


def enum_choice(enum_cls) -> click.Choice:
    return click.Choice([member.value for member in enum_cls], case_sensitive=False)


_COMMON_OPTIONS = (
    click.option("--scope", type=enum_choice(ScopeStrategy), help="Which modules are versioned [default: project-version]"),
    click.option(
        "--identifier",
        type=enum_choice(ArtifactIdentifier),
        help="How artifacts are written in version Markdown files [default: group-and-artifact]",
    ),
    click.option("--directory", help="Folder with version Markdown files [default: .versioning]"),
    click.option("--git", "git_mode", type=enum_choice(GitMode), help="Stage or commit changed files [default: no-git]"),
)


def common_options(func):
    """Add --scope, --identifier, --directory and --git to a command."""
    for option in reversed(_COMMON_OPTIONS):
        func = option(func)
    return func


def load_settings(ctx: click.Context, **overrides: Any) -> VersioningConfig:
    """Load the configuration for the current project with CLI overrides.

    Raises:
        ConfigurationError: If the configuration is invalid
    """
    obj: Dict[str, Any] = ctx.find_root().obj or {}
    return load_config(
        obj.get("project_dir", "."),
        config_path=obj.get("config_path"),
        overrides=overrides,
    )


def common_overrides(scope, identifier, directory, git_mode) -> Dict[str, Any]:
    return {
        "scope": scope,
        "identifier": identifier,
        "directory": directory,
        "git": git_mode,
    }
