"""Read-only skill commands: list, search, info, show, deps, validate."""
from __future__ import annotations

import json
from pathlib import Path

import typer
from alltheskills import (
    DependencyResolver,
    SkillValidator,
    matches_query,
    parse_source_type,
)
from alltheskills_core import DependencyCycleError
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from alltheskills_cli.commands.common import (
    build_reader,
    console,
    find_or_exit,
    run,
    source_label,
)

_PREVIEW_LIMIT = 2000


def _skills_table(skills: list, title: str) -> Table:
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Name", style="bold")
    table.add_column("Source")
    table.add_column("Version", justify="center")
    table.add_column("Description")
    for skill in skills:
        table.add_row(
            skill.name or skill.id,
            source_label(skill),
            skill.version or "-",
            skill.description,
        )
    return table


def list_command(
    as_json: bool = typer.Option(False, "--json", help="Print skills as JSON"),
    source: str | None = typer.Option(
        None, "--source", "-s", help="Only show skills from this source type",
    ),
) -> None:
    """List every skill the known platforms can see."""
    reader = build_reader()
    report = run(reader.list_all_detailed())
    skills = report.skills
    if source:
        wanted = parse_source_type(source)
        skills = [s for s in skills if s.source_type == wanted]

    if as_json:
        typer.echo(json.dumps([s.to_dict() for s in skills], indent=2))
        return

    for failure in report.errors:
        console.print(f"[yellow]Warning:[/yellow] {failure.provider}: {failure.error}")

    if not skills:
        console.print("[yellow]No skills found.[/yellow]")
        console.print("Install one with `alltheskills install <source>`.")
        raise typer.Exit(0)

    console.print(_skills_table(skills, "Installed Skills"))
    console.print(f"\n[dim]{len(skills)} skill(s) found.[/dim]")


def search_command(
    query: str = typer.Argument(..., help="Text to look for in name, description or tags"),
) -> None:
    """Search skills by name, description or tag."""
    reader = build_reader()
    skills = run(reader.search(lambda skill: matches_query(skill, query)))
    if not skills:
        console.print(f"[yellow]No skills match[/yellow] '{query}'")
        raise typer.Exit(0)
    console.print(_skills_table(skills, f"Skills matching '{query}'"))


def info_command(
    name: str = typer.Argument(..., help="Name or id of the skill"),
) -> None:
    """Show the metadata of one skill."""
    skill = find_or_exit(build_reader(), name)
    meta = skill.metadata

    lines = [
        f"[bold]Name:[/bold]        {skill.name}",
        f"[bold]Id:[/bold]          {skill.id}",
        f"[bold]Description:[/bold] {skill.description or '-'}",
        f"[bold]Version:[/bold]     {skill.version or '-'}",
        f"[bold]Source:[/bold]      {source_label(skill)}",
        f"[bold]Format:[/bold]      {skill.format.value}",
        f"[bold]Path:[/bold]        {skill.path}",
    ]
    if meta.author:
        lines.append(f"[bold]Author:[/bold]      {meta.author}")
    if meta.tags:
        lines.append(f"[bold]Tags:[/bold]        {', '.join(meta.tags)}")
    if meta.homepage:
        lines.append(f"[bold]Homepage:[/bold]    {meta.homepage}")
    if meta.repository:
        lines.append(f"[bold]Repository:[/bold]  {meta.repository}")
    if meta.license:
        lines.append(f"[bold]License:[/bold]     {meta.license}")
    if meta.dependencies:
        deps = ", ".join(
            f"{d.name}{'@' + d.version_req if d.version_req else ''}"
            f"{' (optional)' if d.optional else ''}"
            for d in meta.dependencies
        )
        lines.append(f"[bold]Depends on:[/bold]  {deps}")

    console.print(Panel("\n".join(lines), title=f"Skill: {skill.name or skill.id}", border_style="cyan"))


def show_command(
    name: str = typer.Argument(..., help="Name or id of the skill"),
    raw: bool = typer.Option(False, "--raw", help="Print the content unformatted"),
) -> None:
    """Print the main instructions file of a skill."""
    reader = build_reader()
    skill = find_or_exit(reader, name)
    content = run(reader.read(skill))

    if raw:
        typer.echo(content)
        return

    preview = content
    if len(preview) > _PREVIEW_LIMIT:
        preview = preview[:_PREVIEW_LIMIT] + "\n\n... (truncated, use --raw)"
    console.print(Panel(
        Syntax(preview, "markdown", theme="monokai", word_wrap=True),
        title=skill.name or skill.id,
        border_style="dim",
    ))


def deps_command(
    name: str = typer.Argument(..., help="Name or id of the skill"),
) -> None:
    """Check a skill's declared dependencies against what is installed."""
    reader = build_reader()
    skills = run(reader.list_all())
    skill = next(
        (s for s in skills if name.lower() in (s.name.lower(), s.id.lower())), None,
    )
    if skill is None:
        console.print(f"[red]Skill not found:[/red] '{name}'")
        raise typer.Exit(1)

    if not skill.metadata.dependencies:
        console.print(f"'{skill.name}' declares no dependencies.")
        return

    resolver = DependencyResolver(installed=[s for s in skills if s is not skill])
    try:
        missing = resolver.resolve_dependencies(skill)
    except DependencyCycleError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1) from exc

    table = Table(title=f"Dependencies of {skill.name}", header_style="bold cyan")
    table.add_column("Name", style="bold")
    table.add_column("Requirement")
    table.add_column("Optional", justify="center")
    table.add_column("Status")
    for dep in skill.metadata.dependencies:
        satisfied = resolver.is_satisfied(dep)
        status = "[green]satisfied[/green]" if satisfied else "[red]missing[/red]"
        table.add_row(
            dep.name, dep.version_req or "*", "yes" if dep.optional else "no", status,
        )
    console.print(table)

    if missing:
        console.print("\n[bold]To install:[/bold]")
        for dep in missing:
            hint = f"  ({dep.source})" if dep.source else ""
            console.print(f"  - {dep.name}{hint}")
        raise typer.Exit(1)


def validate_command(
    path: Path | None = typer.Argument(
        None, help="Skill directory to check (defaults to every installed skill)",
    ),
) -> None:
    """Validate one skill directory, or every installed skill."""
    validator = SkillValidator()

    if path is not None:
        report = validator.check_directory(path)
        console.print(f"Validating skill at: {path}\n")
        for manifest in report.manifests:
            console.print(f"[green]Found manifest:[/green] {manifest}")
        for warning in report.warnings:
            console.print(f"[yellow]Warning:[/yellow] {warning}")
        for error in report.errors:
            console.print(f"[red]Error:[/red] {error}")
        if not report.ok:
            raise typer.Exit(1)
        console.print("\n[green]Skill structure is valid.[/green]")
        return

    skills = run(build_reader().list_all())
    invalid = 0
    for skill in skills:
        problems = validator.validate(skill)
        if problems:
            invalid += 1
            console.print(f"[red]x[/red] {skill.name or skill.id}: {'; '.join(problems)}")
        else:
            console.print(f"[green]ok[/green] {skill.name}")

    console.print(
        f"\nValidation complete: {len(skills) - invalid} valid, {invalid} invalid"
    )
    if invalid:
        raise typer.Exit(1)
