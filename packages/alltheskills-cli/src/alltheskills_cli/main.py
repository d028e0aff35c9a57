from __future__ import annotations

import typer
from alltheskills_core import __version__, setup_from_config, setup_logging

from alltheskills_cli.commands.common import console, load_config
from alltheskills_cli.commands.config import config_command
from alltheskills_cli.commands.install import install_command
from alltheskills_cli.commands.manage import init_command, remove_command
from alltheskills_cli.commands.skills import (
    deps_command,
    info_command,
    list_command,
    search_command,
    show_command,
    validate_command,
)

app = typer.Typer(
    name="alltheskills",
    help="Discover and manage AI assistant skills across platforms",
    no_args_is_help=True,
)

app.command("list")(list_command)
app.command("search")(search_command)
app.command("info")(info_command)
app.command("show")(show_command)
app.command("deps")(deps_command)
app.command("validate")(validate_command)
app.command("install")(install_command)
app.command("init")(init_command)
app.command("remove")(remove_command)
app.command("config")(config_command)


@app.callback()
def _configure(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log debug output to stderr",
    ),
) -> None:
    """Set up logging before any command runs."""
    if verbose:
        setup_logging("DEBUG")
    else:
        setup_from_config(load_config().logging)


@app.command()
def version() -> None:
    """Show the alltheskills version."""
    console.print(f"alltheskills {__version__}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
