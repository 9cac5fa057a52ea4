"""CLI main entry point"""

import logging
from pathlib import Path

import click

from releaseos import __version__


@click.group()
@click.version_option(version=__version__, prog_name="releaseos")
@click.option(
    "--project-dir",
    "-p",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    show_default=True,
    help="Directory holding the root pom.xml",
)
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Configuration file [default: .releaseos.yaml]")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, project_dir, config_path, verbose):
    """releaseos - semantic versioning and changelogs for Maven reactors"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["project_dir"] = Path(project_dir)
    ctx.obj["config_path"] = config_path


# Import subcommands
from releaseos.cli.create import create_cmd
from releaseos.cli.graph import graph_cmd
from releaseos.cli.update import update_cmd
from releaseos.cli.verify import verify_cmd

cli.add_command(create_cmd, name="create")
cli.add_command(update_cmd, name="update")
cli.add_command(verify_cmd, name="verify")
cli.add_command(graph_cmd, name="graph")


if __name__ == "__main__":
    cli()
