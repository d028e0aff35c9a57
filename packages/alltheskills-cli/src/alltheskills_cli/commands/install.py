"""``alltheskills install``: copy or clone a skill into the install directory."""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import typer
from alltheskills import (
    GitHubSource,
    LocalSource,
    RemoteSource,
    default_providers,
    parse_source,
    parse_source_type,
)
from alltheskills.providers import GitHubProvider, LocalProvider
from alltheskills.utils import sanitize_filename

from alltheskills_cli.commands.common import console, load_config, run

if TYPE_CHECKING:
    from alltheskills import SkillProvider, SkillSource
    from alltheskills_core import AllSkillsConfig


def _pick_provider(
    source: SkillSource, provider_type: str | None, config: AllSkillsConfig,
) -> SkillProvider:
    github = GitHubProvider()
    if github.can_handle(source):
        return github
    if not provider_type:
        return LocalProvider()
    wanted = parse_source_type(provider_type)
    for provider in default_providers(config=config):
        if provider.source_type == wanted:
            return provider
    console.print(f"[red]Unknown provider:[/red] '{provider_type}'")
    raise typer.Exit(1)


def _default_name(source: GitHubSource | LocalSource) -> str:
    if isinstance(source, GitHubSource):
        return source.subdir.rstrip("/").rsplit("/", 1)[-1] if source.subdir else source.repo
    return source.path.resolve().name


def install_command(
    source: str = typer.Argument(..., help="Local path or https://github.com/<owner>/<repo>[/<subdir>]"),
    target: Path | None = typer.Option(
        None, "--target", "-t", help="Directory to install into",
    ),
    branch: str | None = typer.Option(
        None, "--branch", "-b", help="Branch to clone (GitHub sources only)",
    ),
    provider: str | None = typer.Option(
        None, "--provider", "-p", help="Platform whose layout the skill uses",
    ),
) -> None:
    """Install a skill from a local directory or a GitHub repository."""
    config = load_config()
    try:
        parsed = parse_source(source)
    except ValueError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1) from exc

    if isinstance(parsed, RemoteSource):
        console.print(
            "[red]Error:[/red] only local paths and GitHub repositories can be installed"
        )
        raise typer.Exit(1)
    if isinstance(parsed, GitHubSource) and branch:
        parsed = GitHubSource(parsed.owner, parsed.repo, parsed.subdir, branch)
    if isinstance(parsed, LocalSource) and not parsed.path.is_dir():
        console.print(f"[red]Error:[/red] not a directory: {parsed.path}")
        raise typer.Exit(1)

    chosen = _pick_provider(parsed, provider, config)
    destination = target or Path(config.install_dir) / sanitize_filename(_default_name(parsed))

    console.print(f"Installing with [bold]{chosen.name}[/bold] into {destination}")
    skill = run(chosen.install(parsed, destination))
    console.print(
        f"[green]Installed[/green] {skill.name or skill.id}"
        f"{' ' + skill.version if skill.version else ''} at {skill.path}"
    )
