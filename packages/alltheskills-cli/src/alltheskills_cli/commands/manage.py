"""Commands that change skills on disk: init, remove."""
from __future__ import annotations

from pathlib import Path

import typer
from alltheskills import scaffold_skill
from alltheskills.utils import remove_path
from alltheskills_core import AllSkillsError
from rich.panel import Panel

from alltheskills_cli.commands.common import (
    build_reader,
    console,
    err_console,
    find_or_exit,
)


def init_command(
    name: str = typer.Argument(..., help="Name for the new skill"),
    skill_type: str = typer.Option(
        "claude", "--type", "-T", help="Platform layout to generate (claude, cline, cursor, ...)",
    ),
    path: Path | None = typer.Option(
        None, "--path", help="Parent directory (defaults to the working directory)",
    ),
) -> None:
    """Scaffold a new skill directory with boilerplate files."""
    try:
        skill_dir = scaffold_skill(name, skill_type, path)
    except AllSkillsError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1) from exc

    files = "\n".join(f"  {p.name}" for p in sorted(skill_dir.iterdir()))
    console.print(Panel(
        f"[bold]Created:[/bold] {skill_dir}\n{files}\n\n"
        "Edit the generated files, then check them with:\n\n"
        f"  alltheskills validate {skill_dir}\n"
        f"  alltheskills install {skill_dir}",
        title=f"New {skill_type} skill: {name}",
        border_style="green",
    ))


def remove_command(
    name: str = typer.Argument(..., help="Name or id of the skill to delete"),
    force: bool = typer.Option(False, "--force", "-f", help="Do not ask for confirmation"),
) -> None:
    """Delete an installed skill's files."""
    skill = find_or_exit(build_reader(), name)

    if not force and not typer.confirm(
        f"Remove '{skill.name or skill.id}' at {skill.path}?", default=False,
    ):
        console.print("Removal cancelled.")
        raise typer.Exit(0)

    if not skill.path.exists():
        console.print(f"[yellow]Skill path does not exist:[/yellow] {skill.path}")
        raise typer.Exit(1)
    try:
        remove_path(skill.path)
    except OSError as exc:
        err_console.print(f"[red]Error:[/red] cannot remove {skill.path}: {exc}")
        raise typer.Exit(1) from exc
    console.print(f"[green]Removed[/green] {skill.name or skill.id} from {skill.path}")
