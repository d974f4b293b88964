"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from hdfsprune import __version__
from hdfsprune.cli.commands import config, prune, rules
from hdfsprune.utils.formatting import setup_logging

# Create main Typer app
app = typer.Typer(
    name="hdfsprune",
    help="Prune aged files from HDFS directory trees.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"hdfsprune version {__version__}")
        raise typer.Exit()


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
) -> None:
    """hdfsprune - Prune aged files from HDFS directory trees.

    Lists files with `hadoop fs -ls -R`, selects those older than a given
    age and prints (or runs) the `hadoop fs -rm` commands to delete them.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    setup_logging(verbose=verbose, quiet=quiet)


# Register commands
app.command(name="prune")(prune.prune)
app.add_typer(rules.app, name="rules")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
