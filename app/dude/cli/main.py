"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from dude import __version__
from dude.cli.commands import auto, config, listing, prune, tui
from dude.cli.common import setup_logging

# Create main Typer app
app = typer.Typer(
    name="dude",
    help="Find and remove orphan pacman packages.",
    no_args_is_help=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"dude version {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
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
            help="Enable debug logging.",
        ),
    ] = False,
    keep: Annotated[
        str | None,
        typer.Option(
            "--keep",
            metavar="PATTERN",
            help="Keep packages whose name matches this regular expression.",
        ),
    ] = None,
    nosave: Annotated[
        bool,
        typer.Option(
            "--nosave",
            help="Also remove configuration files (pacman -Rns).",
        ),
    ] = False,
    hook: Annotated[
        bool,
        typer.Option(
            "--hook",
            help="Stay silent when there is nothing to do.",
        ),
    ] = False,
) -> None:
    """dude - find and remove orphan pacman packages.

    Without a command, opens the interactive selection.
    """
    setup_logging(verbose)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["keep"] = keep
    ctx.obj["nosave"] = nosave
    ctx.obj["hook"] = hook

    if ctx.invoked_subcommand is None:
        tui.run_interactive_removal(ctx)


# Register commands
app.add_typer(listing.app, name="list")
app.add_typer(tui.app, name="tui")
app.add_typer(prune.app, name="prune")
app.add_typer(auto.app, name="auto")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
