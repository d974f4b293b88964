"""HDFS deletion operator.

Builds `hadoop fs -rm` commands for groups of paths and either renders
them (dry-run) or executes them, with command-length validation against
the operating system's ARG_MAX.
"""

import logging
import shlex
import signal

from hdfsprune.pruner.errors import (
    CommandTooLongError,
    DeletionError,
    DeletionInterruptedError,
)
from hdfsprune.pruner.models import DeleteResult
from hdfsprune.utils.shell import run_command, run_interactive, time_left

logger = logging.getLogger(__name__)

# Ceiling from `xargs --show-limits`; larger values still fail with
# "Argument list too long" in practice.
ARG_MAX_CEILING = 131072

# Allowance for the environment block plus a safety margin
ENV_ALLOWANCE = 2000
SAFETY_MARGIN = 2000

# Exit statuses meaning the client was stopped with Control-C
_INTERRUPT_CODES = frozenset({128 + signal.SIGINT, -signal.SIGINT})


def get_arg_max() -> int:
    """Return the effective command-line length limit.

    Uses `getconf ARG_MAX`, capped at ARG_MAX_CEILING. Falls back to the
    ceiling when getconf is unavailable or prints something unexpected.
    """
    try:
        result = run_command(["getconf", "ARG_MAX"], timeout=10.0)
    except (FileNotFoundError, OSError) as e:
        logger.warning("Could not run getconf ARG_MAX (%s), using %d", e, ARG_MAX_CEILING)
        return ARG_MAX_CEILING

    value = result.stdout.strip()
    if not result.success or not value.isdigit():
        logger.warning("getconf ARG_MAX returned %r, using %d", value, ARG_MAX_CEILING)
        return ARG_MAX_CEILING

    arg_max = int(value)
    if arg_max > ARG_MAX_CEILING:
        logger.debug("Overriding ARG_MAX %d with %d", arg_max, ARG_MAX_CEILING)
        return ARG_MAX_CEILING
    return arg_max


class HdfsDeleteOperator:
    """Issues `hadoop fs -rm` commands for groups of HDFS paths.

    In dry-run mode (the default) commands are only rendered, never run.
    A failed deletion is fatal and is never retried.

    Attributes:
        hadoop_bin: Path to the `hadoop` executable.
        dry_run: If True, render commands without executing them.
        skip_trash: If True, pass -skipTrash so space is reclaimed immediately.
        heap_mb: Optional client heap size, exported as HADOOP_HEAPSIZE.
        deadline: Optional `time.monotonic()` value by which the whole run
            must finish; each deletion gets only the time that remains.

    Example:
        >>> operator = HdfsDeleteOperator("/usr/bin/hadoop", dry_run=True)
        >>> operator.render_command(["/tmp/old.log"])
        '/usr/bin/hadoop fs -rm /tmp/old.log'
    """

    def __init__(
        self,
        hadoop_bin: str,
        dry_run: bool = True,
        skip_trash: bool = False,
        heap_mb: int | None = None,
        arg_max: int | None = None,
        deadline: float | None = None,
    ) -> None:
        self.hadoop_bin = hadoop_bin
        self._dry_run = dry_run
        self.skip_trash = skip_trash
        self.heap_mb = heap_mb
        self.deadline = deadline
        self._arg_max = arg_max

    @property
    def dry_run(self) -> bool:
        """Check if operator is in dry-run mode."""
        return self._dry_run

    @property
    def arg_max(self) -> int:
        """Effective command-line length limit, looked up once on first use."""
        if self._arg_max is None:
            self._arg_max = get_arg_max()
        return self._arg_max

    def build_command(self, paths: list[str]) -> list[str]:
        """Build the deletion argv for a group of paths."""
        args = [self.hadoop_bin, "fs", "-rm"]
        if self.skip_trash:
            args.append("-skipTrash")
        args.extend(paths)
        return args

    def render_command(self, paths: list[str], with_heap: bool = False) -> str:
        """Render the deletion command as shell text.

        Args:
            paths: Paths to delete.
            with_heap: Prefix the HADOOP_HEAPSIZE assignment when a heap
                size is configured.

        Returns:
            A command line that can be pasted into a POSIX shell.
        """
        text = shlex.join(self.build_command(paths))
        if with_heap and self.heap_mb:
            text = f"HADOOP_HEAPSIZE='{self.heap_mb}' {text}"
        return text

    def check_length(self, command: str) -> None:
        """Verify a rendered command fits within the command-line limit.

        Raises:
            CommandTooLongError: If length plus allowances reaches ARG_MAX.
        """
        allowance = ENV_ALLOWANCE + SAFETY_MARGIN
        if len(command) + allowance >= self.arg_max:
            raise CommandTooLongError(command, len(command), self.arg_max, allowance)
        logger.debug("command length: %d  ARG_MAX: %d", len(command), self.arg_max)

    def delete(self, paths: list[str], with_heap: bool = False) -> DeleteResult:
        """Delete a group of paths with a single client invocation.

        Args:
            paths: Paths to delete, in listing order.
            with_heap: Forward the heap size hint to this invocation.

        Returns:
            DeleteResult describing the command.

        Raises:
            CommandTooLongError: If the command exceeds the length limit.
            DeletionInterruptedError: If the client was stopped with Control-C.
            DeletionError: If the client exited with any other failure status.
            subprocess.TimeoutExpired: If the run deadline passes first.
        """
        command = self.render_command(paths, with_heap=with_heap)
        self.check_length(command)

        if self._dry_run:
            logger.debug("Dry-run: would delete %d file(s)", len(paths))
            return DeleteResult(paths=tuple(paths), command=command)

        env = {"HADOOP_HEAPSIZE": str(self.heap_mb)} if with_heap and self.heap_mb else None
        logger.info("Deleting %d file(s)", len(paths))
        argv = self.build_command(paths)
        returncode = run_interactive(argv, env=env, timeout=time_left(self.deadline, argv))

        if returncode in _INTERRUPT_CODES:
            msg = "Control-C"
            raise DeletionInterruptedError(msg)
        if returncode != 0:
            raise DeletionError(returncode)

        return DeleteResult(
            paths=tuple(paths),
            command=command,
            executed=True,
            returncode=returncode,
        )
