from __future__ import annotations

from pathlib import Path

import typer
from alltheskills import KnownSources
from alltheskills_core import config_path
from alltheskills_core.config import CONFIG_FILENAME
from rich.syntax import Syntax
from rich.table import Table

from alltheskills_cli.commands.common import console, load_config


def config_command(
    show_path: bool = typer.Option(
        False, "--path", help="Only print where the config files are looked up",
    ),
) -> None:
    """Show the effective configuration and the detected skill directories."""
    global_path = config_path()
    project_path = Path.cwd() / CONFIG_FILENAME

    if show_path:
        typer.echo(f"global:  {global_path}")
        typer.echo(f"project: {project_path}")
        return

    for label, path in (("Global", global_path), ("Project", project_path)):
        if path.exists():
            console.print(f"[bold]{label}[/bold] ({path}):")
            console.print(Syntax(path.read_text(encoding="utf-8"), "toml", theme="monokai"))
            console.print()

    config = load_config()
    console.print(f"[bold]Install dir:[/bold]     {config.install_dir}")
    console.print(f"[bold]Default scope:[/bold]   {config.default_scope}")
    console.print(f"[bold]Max concurrency:[/bold] {config.max_concurrency}")

    if config.sources:
        table = Table(title="Configured sources", header_style="bold cyan")
        table.add_column("Name", style="bold")
        table.add_column("Type")
        table.add_column("Path")
        table.add_column("Enabled", justify="center")
        table.add_column("Priority", justify="right")
        for source in config.sources:
            table.add_row(
                source.name,
                source.source_type,
                source.path or "-",
                "yes" if source.enabled else "no",
                str(source.priority),
            )
        console.print(table)

    detected = KnownSources().known_directories()
    if not detected:
        console.print("\n[yellow]No platform skill directories detected.[/yellow]")
        return
    console.print("\n[bold]Detected skill directories:[/bold]")
    for name, path in detected:
        console.print(f"  {name}: {path}")
