"""CLI graph command"""

import json

import click

from releaseos.cli.options import enum_choice, common_options, common_overrides, load_settings
from releaseos.cli.terminal import fail
from releaseos.core.config import GraphOutput
from releaseos.core.errors import ReleaseError
from releaseos.core.workflows import build_graph_view


@click.command()
@common_options
@click.option("--output", type=enum_choice(GraphOutput), help="Node details to print [default: artifact-and-folder]")
@click.option(
    "--relative-paths/--absolute-paths",
    default=None,
    help="Print folders relative to the project directory [default: relative]",
)
@click.pass_context
def graph_cmd(ctx, scope, identifier, directory, git_mode, output, relative_paths):
    """Print the dependency graph of the projects in scope as JSON"""
    try:
        config = load_settings(
            ctx,
            **common_overrides(scope, identifier, directory, git_mode),
            graph={"output": output, "relative_paths": relative_paths},
        )
        view = build_graph_view(ctx.find_root().obj["project_dir"], config)
    except ReleaseError as e:
        fail(e)

    click.echo(json.dumps(view, indent=2))
