"""Prune command implementation.

Lists HDFS files older than a given age and prints (default) or runs
the `hadoop fs -rm` commands that delete them.
"""

import logging
import subprocess
import time
from pathlib import Path
from typing import Annotated

import typer

from hdfsprune.core.config import ConfigError, load_settings
from hdfsprune.pruner.batching import make_batch_strategy
from hdfsprune.pruner.classifier import EntryClassifier
from hdfsprune.pruner.errors import (
    CommandTooLongError,
    ConfigurationError,
    DeletionInterruptedError,
    PruneError,
)
from hdfsprune.pruner.listing import HdfsLister
from hdfsprune.pruner.models import AgeThreshold, DeleteResult, PruneStats
from hdfsprune.pruner.operator import HdfsDeleteOperator
from hdfsprune.pruner.runner import Pruner
from hdfsprune.pruner.validation import (
    collect_root_paths,
    compile_pattern,
    validate_batch_size,
    validate_hadoop_bin,
)
from hdfsprune.utils.formatting import (
    err_console,
    print_command,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from hdfsprune.utils.shell import find_executable

logger = logging.getLogger(__name__)

# Exit codes
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130


def prune(
    paths: Annotated[
        list[str] | None,
        typer.Argument(help="HDFS root paths to prune (default: /tmp).", show_default=False),
    ] = None,
    path_options: Annotated[
        list[str] | None,
        typer.Option("--path", "-p", help="HDFS root path, may be repeated."),
    ] = None,
    days: Annotated[
        float,
        typer.Option("--days", "-d", help="Number of days after which to delete files."),
    ] = 0,
    hours: Annotated[
        float,
        typer.Option("--hours", "-H", help="Number of hours after which to delete files."),
    ] = 0,
    mins: Annotated[
        float,
        typer.Option("--mins", "-m", help="Number of minutes after which to delete files."),
    ] = 0,
    include: Annotated[
        str | None,
        typer.Option("--include", "-i", help="Only delete files matching this regex."),
    ] = None,
    exclude: Annotated[
        str | None,
        typer.Option(
            "--exclude",
            "-e",
            help="Never delete files matching this regex, takes priority over --include.",
        ),
    ] = None,
    rm: Annotated[
        bool,
        typer.Option(
            "--rm",
            help=(
                "Actually run the hadoop fs -rm commands instead of printing them. "
                "Review the printed list first, otherwise you may lose data."
            ),
        ),
    ] = False,
    skip_trash: Annotated[
        bool | None,
        typer.Option(
            "--skip-trash/--use-trash",
            help="Bypass the HDFS trash and reclaim space immediately.",
            show_default=False,
        ),
    ] = None,
    hadoop_bin: Annotated[
        str | None,
        typer.Option("--hadoop-bin", help="Path to the 'hadoop' command if not in $PATH."),
    ] = None,
    batch: Annotated[
        int | None,
        typer.Option(
            "--batch",
            "-b",
            help="Delete in groups of N files (max 1500); 0 or 1 deletes each file as found.",
        ),
    ] = None,
    heap_mb: Annotated[
        int | None,
        typer.Option("--xmx", min=1, help="Max heap for the hadoop client in MB."),
    ] = None,
    timeout: Annotated[
        int | None,
        typer.Option(
            "--timeout",
            "-t",
            min=1,
            max=86400,
            help="Time limit in seconds for the whole run, listing and deletions included.",
        ),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", help="Settings file (default: ~/.config/hdfsprune/config.toml)."),
    ] = None,
) -> None:
    """Print or delete HDFS files older than the given days, hours and mins.

    By default only the hadoop fs -rm commands are printed. Directories,
    and locations protected by the hardcoded safety rules, are never removed.

    Examples:
        hdfsprune prune -d 7                     # Files in /tmp older than a week
        hdfsprune prune -d 1 /tmp /user/etl/tmp  # Several roots
        hdfsprune prune -H 12 -i '\\.log$'        # Only log files
        hdfsprune prune -d 30 -b 500 --rm        # Delete in groups of 500
    """
    try:
        settings = load_settings(config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=EXIT_USAGE) from e

    try:
        threshold = AgeThreshold(days=days, hours=hours, mins=mins)
        roots = collect_root_paths([*(path_options or []), *(paths or [])], settings.default_path)
        include_re = compile_pattern(include, "include")
        exclude_re = compile_pattern(exclude, "exclude")
        batch_size = validate_batch_size(batch if batch is not None else settings.batch_size)
        requested_bin = hadoop_bin or settings.hadoop_bin
        resolved_bin = validate_hadoop_bin(
            find_executable(requested_bin, settings.extra_bin_dirs), requested_bin
        )
    except ConfigurationError as e:
        print_error(str(e))
        err_console.print("[muted]See 'hdfsprune prune --help' for usage.[/]")
        raise typer.Exit(code=EXIT_USAGE) from e

    heap = heap_mb or settings.heap_mb
    limit = timeout or settings.timeout_seconds
    deadline = time.monotonic() + limit
    trash_bypass = settings.skip_trash if skip_trash is None else skip_trash

    logger.debug("rm: %s", rm)
    logger.debug("skipTrash: %s", trash_bypass)
    logger.debug("hadoop path: %s", resolved_bin)
    logger.debug("Xmx (Max Heap MB): %s", heap)

    operator = HdfsDeleteOperator(
        resolved_bin,
        dry_run=not rm,
        skip_trash=trash_bypass,
        heap_mb=heap,
        deadline=deadline,
    )
    pruner = Pruner(
        lister=HdfsLister(resolved_bin, heap_mb=heap, deadline=deadline),
        classifier=EntryClassifier(threshold, include=include_re, exclude=exclude_re),
        strategy=make_batch_strategy(batch_size, operator, on_result=_print_result),
    )

    stats = _run(pruner, roots, limit)
    if stats.unparsed_lines:
        print_warning(f"{_plural(stats.unparsed_lines, 'listing line')} could not be parsed")
    print_success(_summary(stats, threshold, executed=rm))
    if not rm and stats.accepted:
        print_info("Dry run, nothing was deleted. Re-run with --rm to delete these files.")


# === Private helper functions ===


def _run(pruner: Pruner, roots: list[str], limit: int) -> PruneStats:
    """Run the pruner, translating fatal errors into exit codes."""
    try:
        return pruner.run(roots)
    except DeletionInterruptedError as e:
        print_error(str(e))
        raise typer.Exit(code=EXIT_INTERRUPTED) from e
    except CommandTooLongError as e:
        err_console.print("Here is the would-be command:\n", markup=False)
        err_console.print(e.command, markup=False, highlight=False, soft_wrap=True)
        print_error(str(e))
        raise typer.Exit(code=EXIT_FAILURE) from e
    except PruneError as e:
        print_error(str(e))
        raise typer.Exit(code=EXIT_FAILURE) from e
    except subprocess.TimeoutExpired as e:
        print_error(f"run timed out after {limit} seconds")
        raise typer.Exit(code=EXIT_FAILURE) from e
    except OSError as e:
        print_error(f"Failed to run hadoop: {e}")
        raise typer.Exit(code=EXIT_FAILURE) from e


def _print_result(result: DeleteResult) -> None:
    """Print dry-run commands to stdout; executed ones are only logged."""
    if result.executed:
        logger.info("Removed %d file(s)", len(result.paths))
        return
    print_command(result.command)


def _summary(stats: PruneStats, threshold: AgeThreshold, executed: bool) -> str:
    """Build the end-of-run report line."""
    msg = f"hdfsprune complete - {_plural(stats.files_checked, 'file')} checked, "
    msg += f"{stats.excluded} excluded, "
    if stats.safety_excluded:
        msg += f"{stats.safety_excluded} hardcoded excluded for safety, "
    msg += f"{_plural(stats.accepted, 'file')} older than {threshold.describe()}"
    if executed:
        msg += " removed"
    return msg


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"
