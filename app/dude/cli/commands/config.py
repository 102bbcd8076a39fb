"""Config inspection commands.

Shows where configuration lives, prints the effective merged settings
and writes a starter user config.
"""

from typing import Annotated

import tomli_w
import typer

from dude.core.config import DudeConfig, config_to_dict, load_config, save_config
from dude.core.errors import ConfigError
from dude.core.paths import get_last_run_path, get_system_config_path, get_user_config_path
from dude.utils.formatting import console, print_error, print_success, print_warning

app = typer.Typer(
    help="Inspect and initialize configuration.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def path() -> None:
    """Show configuration and state file locations."""
    entries = [
        ("System config", get_system_config_path()),
        ("User config", get_user_config_path()),
        ("Last run", get_last_run_path()),
    ]
    for label, location in entries:
        marker = "" if location.exists() else " [muted](missing)[/]"
        console.print(f"{label + ':':<15} {location}{marker}", highlight=False, soft_wrap=True)


@app.command()
def show() -> None:
    """Print the effective configuration as TOML."""
    config = load_config()
    console.print(tomli_w.dumps(config_to_dict(config)), markup=False, highlight=False, end="")


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing user config.",
        ),
    ] = False,
) -> None:
    """Write a starter user config."""
    config_path = get_user_config_path()
    if config_path.exists() and not force:
        print_warning(f"Config already exists: {config_path}")
        print_warning("Use --force to overwrite.")
        raise typer.Exit(code=1)

    try:
        saved = save_config(DudeConfig(), config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")
