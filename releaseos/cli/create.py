"""CLI create command"""

import click
from rich.console import Console
from rich.markup import escape

from releaseos.cli.options import common_options, common_overrides, load_settings
from releaseos.cli.terminal import choose_bump, choose_projects, fail, read_message
from releaseos.core.errors import ReleaseError
from releaseos.core.workflows import create_intent, list_candidates, open_project, parse_bump_option

console = Console()


@click.command()
@common_options
@click.option(
    "--bump",
    "bump_options",
    multiple=True,
    metavar="ARTIFACT=KIND",
    help="Artifact and bump (patch, minor, major); repeatable. Prompts when omitted.",
)
@click.option("--message", "-m", help="Changelog text. Prompts when omitted.")
@click.pass_context
def create_cmd(ctx, scope, identifier, directory, git_mode, bump_options, message):
    """Create a version Markdown file describing an upcoming change"""
    try:
        config = load_settings(ctx, **common_overrides(scope, identifier, directory, git_mode))
        project_dir = ctx.find_root().obj["project_dir"]

        if bump_options:
            group = open_project(project_dir, config).reactor.root_group
            bumps = dict(parse_bump_option(text, config.identifier, group) for text in bump_options)
        else:
            candidates = list_candidates(project_dir, config)
            if not candidates:
                raise click.UsageError("No projects found in scope")
            bumps = {artifact: choose_bump(artifact) for artifact in choose_projects(candidates)}

        if message is None:
            message = read_message()

        path = create_intent(project_dir, config, bumps, message)
    except ReleaseError as e:
        fail(e)

    console.print(f"✅ Created [cyan]{escape(str(path))}[/cyan]")
    for artifact, bump in bumps.items():
        console.print(f"  • {escape(str(artifact))}: [green]{bump}[/green]")
