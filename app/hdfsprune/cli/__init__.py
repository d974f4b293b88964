"""CLI package for hdfsprune.

This package contains the Typer application and all subcommands.
"""

from hdfsprune.cli.main import app

__all__ = ["app"]
