"""Safety rule commands.

Shows the hardcoded exclusions that protect HDFS locations from pruning
and checks which of them, if any, applies to a given path.
"""

from typing import Annotated

import typer
from rich.table import Table
from rich.text import Text

from hdfsprune.pruner.safety import SAFETY_RULES, match_safety_rule
from hdfsprune.utils.formatting import console

app = typer.Typer(
    help="Inspect the hardcoded safety exclusions.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command("list")
def list_rules() -> None:
    """List the safety rules applied to every prune run."""
    table = Table(
        title="Safety Exclusions",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Rule", style="bold", no_wrap=True)
    table.add_column("Pattern", style="protected")
    table.add_column("Description", style="muted")

    for rule in SAFETY_RULES:
        table.add_row(rule.name, Text(rule.pattern.pattern), rule.description)

    console.print(table)
    console.print("\n[dim]Patterns are case-insensitive and match anywhere in the path.[/dim]")


@app.command()
def check(
    paths: Annotated[
        list[str],
        typer.Argument(help="HDFS paths to check against the safety rules."),
    ],
) -> None:
    """Show which safety rule, if any, protects each path."""
    table = Table(
        title="Safety Check",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Path", no_wrap=True)
    table.add_column("Status", width=10)
    table.add_column("Rule", style="muted")

    for path in paths:
        rule = match_safety_rule(path)
        if rule is None:
            table.add_row(Text(path), "[success]prunable[/]", "-")
        else:
            table.add_row(Text(path), "[protected]protected[/]", rule.name)

    console.print(table)
