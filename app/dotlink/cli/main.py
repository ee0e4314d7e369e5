"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer

from dotlink import __version__
from dotlink.cli.commands import components, init, install, remove, verify

# Create main Typer app
app = typer.Typer(
    name="dotlink",
    help="Symlink a dotfiles repository into place.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"dotlink version {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool, quiet: bool) -> None:
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
    root: Annotated[
        Path | None,
        typer.Option(
            "--root",
            "-r",
            help="Dotfiles directory (overrides settings).",
        ),
    ] = None,
) -> None:
    """dotlink - Symlink a dotfiles repository into place.

    Each subdirectory of the dotfiles repository is a component. Components
    are detected against the installed software and their files are
    symlinked into the home directory (or wherever their metadata says).
    """
    _configure_logging(verbose, quiet)

    # Store options in context for commands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["root"] = root


# Register commands
app.command(name="list")(components.list_components)
app.command(name="install")(install.install_components)
app.command(name="remove")(remove.remove_components)
app.command(name="verify")(verify.verify_components)
app.command(name="init")(init.init_settings)


if __name__ == "__main__":
    app()
