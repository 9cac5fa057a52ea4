"""
Terminal interaction for the create command

Prompts for the projects to bump, the bump per project, and the changelog
text. The text prompt ends after two consecutive empty lines; an empty first
line opens the user's editor instead.
"""

from typing import IO, List, NoReturn, Optional, Sequence

import click
from rich.console import Console
from rich.markup import escape

from releaseos.core.graph import ArtifactId
from releaseos.core.utils.process import open_editor
from releaseos.core.version import BumpKind
from releaseos.core.workflows import SELECTABLE_BUMPS

console = Console()


def fail(error: Exception) -> NoReturn:
    """Print an error line and exit with status 1."""
    console.print(f"[red]Error:[/red] {escape(str(error))}")
    click.get_current_context().exit(1)


def parse_selection(text: str, count: int) -> List[int]:
    """Parse '1, 3' into zero-based indexes.

    Raises:
        click.BadParameter: If an entry is not a number between 1 and count
    """
    indexes: List[int] = []
    for part in text.replace(" ", ",").split(","):
        if not part:
            continue
        if not part.isdigit() or not 1 <= int(part) <= count:
            raise click.BadParameter(f"'{part}' is not a number between 1 and {count}")
        index = int(part) - 1
        if index not in indexes:
            indexes.append(index)
    if not indexes:
        raise click.BadParameter("Select at least one project")
    return indexes


def choose_projects(candidates: Sequence[ArtifactId]) -> List[ArtifactId]:
    console.print("[bold]Projects in scope:[/bold]")
    for number, artifact in enumerate(candidates, start=1):
        console.print(f"  {number}. [cyan]{escape(str(artifact))}[/cyan]")
    while True:
        answer = click.prompt("Select projects to bump (comma separated numbers)")
        try:
            return [candidates[i] for i in parse_selection(answer, len(candidates))]
        except click.BadParameter as e:
            console.print(f"[red]{escape(e.format_message())}[/red]")


def choose_bump(artifact: ArtifactId) -> BumpKind:
    answer = click.prompt(
        f"Version bump for {artifact}",
        type=click.Choice([kind.value for kind in SELECTABLE_BUMPS], case_sensitive=False),
        default=BumpKind.PATCH.value,
    )
    return BumpKind.parse(answer)


def read_message(stream: Optional[IO[str]] = None) -> str:
    """Read changelog text from the terminal.

    Input ends after two consecutive empty lines or end of input. If the
    first line is empty the editor is opened.
    """
    stream = stream or click.get_text_stream("stdin")
    console.print("Enter the changelog text, end with two empty lines (empty first line opens the editor):")

    first = stream.readline()
    if not first:
        return ""
    if not first.strip():
        return open_editor().strip()

    lines = [first.rstrip("\n")]
    blanks = 0
    for line in iter(stream.readline, ""):
        line = line.rstrip("\n")
        if not line.strip():
            blanks += 1
            if blanks == 2:
                break
        else:
            blanks = 0
        lines.append(line)
    return "\n".join(lines).strip()
