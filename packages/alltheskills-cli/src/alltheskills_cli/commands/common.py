"""Helpers shared by the CLI commands."""
from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

import typer
from alltheskills import SkillReader, default_providers
from alltheskills_core import AllSkillsConfig, AllSkillsError
from rich.console import Console

if TYPE_CHECKING:
    from collections.abc import Coroutine

    from alltheskills import Skill

T = TypeVar("T")

console = Console()
err_console = Console(stderr=True)


def run(coro: Coroutine[Any, Any, T]) -> T:
    """Run a library coroutine, turning library errors into exit code 1."""
    try:
        return asyncio.run(coro)
    except AllSkillsError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1) from exc


def load_config() -> AllSkillsConfig:
    try:
        return AllSkillsConfig.load()
    except AllSkillsError as exc:
        err_console.print(f"[red]Configuration error:[/red] {exc}")
        raise typer.Exit(1) from exc


def build_reader(config: AllSkillsConfig | None = None) -> SkillReader:
    """A reader with every built-in provider registered.

    Cursor project rules come from the working directory.
    """
    config = config or load_config()
    reader = SkillReader(config)
    for provider in default_providers(config=config, project_dir=Path.cwd()):
        reader.add_provider(provider)
    return reader


def find_or_exit(reader: SkillReader, name: str) -> Skill:
    skill = run(reader.find(name))
    if skill is None:
        console.print(f"[red]Skill not found:[/red] '{name}'")
        console.print("[dim]Run `alltheskills list` to see what is installed.[/dim]")
        raise typer.Exit(1)
    return skill


def source_label(skill: Skill) -> str:
    return skill.source_type.value
