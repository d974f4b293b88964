"""Shell execution utilities.

Provides subprocess execution for the external hadoop client: captured
runs, streamed output and terminal-inheriting runs.
"""

import logging
import os
import shutil
import subprocess
import threading
import time
from collections.abc import Iterator
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result of a shell command execution.

    Attributes:
        stdout: Standard output from the command.
        stderr: Standard error from the command.
        returncode: Exit code of the command.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if command executed successfully."""
        return self.returncode == 0


def run_command(
    args: list[str],
    *,
    check: bool = False,
    timeout: float | None = 60.0,
    env: dict[str, str] | None = None,
) -> CommandResult:
    """Execute a command and return its captured output.

    Args:
        args: Command and arguments to execute.
        check: If True, raise CalledProcessError on non-zero exit.
        timeout: Maximum time in seconds to wait for command.
        env: Additional environment variables (merged with current env).

    Returns:
        CommandResult with stdout, stderr, and returncode.

    Raises:
        subprocess.CalledProcessError: If check=True and command fails.
        subprocess.TimeoutExpired: If command exceeds timeout.
        FileNotFoundError: If command executable is not found.
    """
    result = subprocess.run(
        args,
        capture_output=True,
        text=True,
        check=check,
        timeout=timeout,
        env={**os.environ, **(env or {})},
    )
    return CommandResult(
        stdout=result.stdout,
        stderr=result.stderr,
        returncode=result.returncode,
    )


def time_left(deadline: float | None, args: list[str]) -> float | None:
    """Return the seconds remaining before a run deadline.

    Args:
        deadline: Absolute `time.monotonic()` value, or None for no limit.
        args: Command about to be started, reported if the deadline has passed.

    Returns:
        Remaining seconds, or None if there is no deadline.

    Raises:
        subprocess.TimeoutExpired: If the deadline has already passed.
    """
    if deadline is None:
        return None
    remaining = deadline - time.monotonic()
    if remaining <= 0:
        raise subprocess.TimeoutExpired(args, 0)
    return remaining


def find_executable(name: str, extra_dirs: list[str] | None = None) -> str | None:
    """Locate an executable on PATH, falling back to extra directories.

    Args:
        name: Command name or path to check.
        extra_dirs: Directories searched after the entries of PATH.

    Returns:
        Absolute path to the executable, or None if not found.
    """
    search_path = os.environ.get("PATH", os.defpath)
    if extra_dirs:
        search_path = os.pathsep.join([search_path, *extra_dirs])
    return shutil.which(name, path=search_path)


def stream_lines(
    args: list[str],
    *,
    timeout: float | None = None,
    env: dict[str, str] | None = None,
) -> Iterator[str]:
    """Execute a command and yield its stdout line by line as it is produced.

    Standard error is inherited so client diagnostics reach the terminal.
    A non-zero exit status is logged but not raised: callers decide
    whether partial output is usable.

    Args:
        args: Command and arguments to execute.
        timeout: Maximum runtime in seconds; the process is killed on expiry.
        env: Additional environment variables (merged with current env).

    Yields:
        Output lines without trailing newline characters.

    Raises:
        subprocess.TimeoutExpired: If the command exceeds timeout.
        FileNotFoundError: If command executable is not found.
    """
    process = subprocess.Popen(
        args,
        stdout=subprocess.PIPE,
        text=True,
        env={**os.environ, **(env or {})},
    )
    expired = threading.Event()

    def _kill() -> None:
        expired.set()
        process.kill()

    timer = threading.Timer(timeout, _kill) if timeout else None
    if timer is not None:
        timer.daemon = True
        timer.start()

    try:
        if process.stdout is None:
            msg = "stdout pipe was not created"
            raise RuntimeError(msg)
        for line in process.stdout:
            yield line.rstrip("\r\n")
        returncode = process.wait()
    finally:
        if timer is not None:
            timer.cancel()
        if process.poll() is None:
            process.kill()
            process.wait()
        if process.stdout is not None:
            process.stdout.close()

    if expired.is_set():
        raise subprocess.TimeoutExpired(args, timeout)  # type: ignore[arg-type]
    if returncode != 0:
        logger.warning("%s exited with status %d", " ".join(args[:4]), returncode)


def run_interactive(
    args: list[str],
    *,
    env: dict[str, str] | None = None,
    timeout: float | None = None,
) -> int:
    """Execute a command interactively, inheriting the terminal.

    Unlike run_command(), this does NOT capture stdout/stderr, so the
    client's own progress and error messages reach the user directly.

    Args:
        args: Command and arguments to execute.
        env: Additional environment variables (merged with current env).
        timeout: Maximum time in seconds to wait for command.

    Returns:
        Exit code of the command.

    Raises:
        FileNotFoundError: If command executable is not found.
        subprocess.TimeoutExpired: If command exceeds timeout.
        OSError: If command cannot be executed.
    """
    full_env = {**os.environ, **(env or {})}
    result = subprocess.run(
        args,
        check=False,
        env=full_env,
        timeout=timeout,
    )
    return result.returncode
