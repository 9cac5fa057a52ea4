"""CLI update command"""

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from releaseos.cli.options import enum_choice, common_options, common_overrides, load_settings
from releaseos.cli.terminal import fail
from releaseos.core.config import BumpStrategy
from releaseos.core.errors import ReleaseError
from releaseos.core.workflows import run_update

console = Console()


@click.command()
@common_options
@click.option("--bump", "bump", type=enum_choice(BumpStrategy), help="Bump strategy [default: file-based]")
@click.option("--dry-run", is_flag=True, help="Log the new file contents instead of writing them")
@click.option("--backup", is_flag=True, help="Keep <file>.backup copies of overwritten files")
@click.option(
    "--script",
    "scripts",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Script run once per changed module; repeatable",
)
@click.option("--commit-message", help="Commit message template, may use {numberOfProjects}")
@click.option("--changelog-header", help="Title of the changelog [default: Changelog]")
@click.option("--version-header", help="Version heading template [default: {version} - {date#yyyy-MM-dd}]")
@click.option("--major-header", help="Heading for major changes [default: Major]")
@click.option("--minor-header", help="Heading for minor changes [default: Minor]")
@click.option("--patch-header", help="Heading for patch changes [default: Patch]")
@click.option("--other-header", help="Heading for other changes [default: Other]")
@click.pass_context
def update_cmd(
    ctx,
    scope,
    identifier,
    directory,
    git_mode,
    bump,
    dry_run,
    backup,
    scripts,
    commit_message,
    changelog_header,
    version_header,
    major_header,
    minor_header,
    patch_header,
    other_header,
):
    """Bump project versions and merge version Markdown files into changelogs"""
    try:
        config = load_settings(
            ctx,
            **common_overrides(scope, identifier, directory, git_mode),
            bump=bump,
            dry_run=dry_run or None,
            backup=backup or None,
            scripts=list(scripts) or None,
            commit_message=commit_message,
            headers={
                "changelog": changelog_header,
                "version": version_header,
                "major": major_header,
                "minor": minor_header,
                "patch": patch_header,
                "other": other_header,
            },
        )
        result = run_update(ctx.find_root().obj["project_dir"], config)
    except ReleaseError as e:
        fail(e)

    if not result.changes:
        console.print("ℹ️  No project versions changed")
        return

    table = Table(title="Dry-run: version changes" if result.dry_run else "Version changes")
    table.add_column("Artifact", style="cyan")
    table.add_column("Old")
    table.add_column("New", style="green")
    table.add_column("Bump")
    table.add_column("Reason")
    for change in result.changes:
        table.add_row(
            escape(str(change.artifact)),
            change.old_version,
            change.new_version,
            str(change.bump),
            change.provenance.value,
        )
    console.print(table)

    if result.deleted:
        console.print(f"🗑️  Removed {len(result.deleted)} version Markdown file(s)")
    if result.committed:
        console.print("✅ [green]Changes committed[/green]")
