"""CLI commands for hdfsprune.

This package contains all subcommand implementations.
"""

from hdfsprune.cli.commands import config, prune, rules

__all__ = ["config", "prune", "rules"]
