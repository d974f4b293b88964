"""Settings commands.

Shows, locates and initializes the hdfsprune settings file.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table
from rich.text import Text

from hdfsprune.core.config import ConfigError, PruneSettings, load_settings, save_settings
from hdfsprune.core.paths import get_config_path
from hdfsprune.utils.formatting import console, print_error, print_success

app = typer.Typer(
    help="Manage prune defaults.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def show(
    config_path: Annotated[
        Path | None,
        typer.Option("--config", help="Settings file to read."),
    ] = None,
) -> None:
    """Show the effective prune defaults."""
    path = config_path or get_config_path()
    try:
        settings = load_settings(path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    source = str(path) if path.exists() else "built-in defaults"
    table = Table(
        title=f"Prune Settings ({source})",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Setting", style="bold", no_wrap=True)
    table.add_column("Value")
    table.add_column("Description", style="muted")

    for name, field in PruneSettings.model_fields.items():
        value = getattr(settings, name)
        shown = ", ".join(value) if isinstance(value, list) else str(value)
        table.add_row(name, Text(shown), field.description or "")

    console.print(table)


@app.command()
def path() -> None:
    """Print the location of the settings file."""
    console.print(str(get_config_path()), markup=False, highlight=False, soft_wrap=True)


@app.command()
def init(
    config_path: Annotated[
        Path | None,
        typer.Option("--config", help="Settings file to create."),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing settings file."),
    ] = False,
) -> None:
    """Write a settings file populated with the built-in defaults."""
    target = config_path or get_config_path()
    if target.exists() and not force:
        print_error(f"Settings file already exists: {target}")
        console.print("[dim]Use --force to overwrite.[/dim]")
        raise typer.Exit(code=1)

    try:
        written = save_settings(PruneSettings(), target if config_path else None)
    except (ConfigError, RuntimeError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Settings written to {written}")
