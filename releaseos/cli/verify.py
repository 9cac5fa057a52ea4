"""CLI verify command"""

import click
from rich.console import Console

from releaseos.cli.options import enum_choice, common_options, common_overrides, load_settings
from releaseos.cli.terminal import fail
from releaseos.core.engine import VerificationMode
from releaseos.core.errors import ReleaseError
from releaseos.core.workflows import run_verify

console = Console()


@click.command()
@common_options
@click.option("--mode", type=enum_choice(VerificationMode), help="Which projects need a version Markdown [default: none]")
@click.option(
    "--consistent/--no-consistent",
    default=None,
    help="Require the same bump for every artifact [default: no-consistent]",
)
@click.pass_context
def verify_cmd(ctx, scope, identifier, directory, git_mode, mode, consistent):
    """Verify version Markdown files against the project scope"""
    try:
        config = load_settings(
            ctx,
            **common_overrides(scope, identifier, directory, git_mode),
            verification={"mode": mode, "consistent": consistent},
        )
        intents = run_verify(ctx.find_root().obj["project_dir"], config)
    except ReleaseError as e:
        fail(e)

    console.print(
        f"✅ [green]Verification passed[/green] ({config.verification.mode.value}, "
        f"{len(intents.bumps)} artifact(s) with version Markdown)"
    )
