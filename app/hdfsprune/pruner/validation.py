"""Validation of user-supplied pruning options.

Every check here runs before any external command is invoked and
raises ConfigurationError on failure.
"""

import re
from pathlib import PurePosixPath

from hdfsprune.pruner.errors import ConfigurationError

# Maximum batch size; larger batches hit "Argument list too long"
MAX_BATCH_SIZE = 1500

_ROOT_PATH_RE = re.compile(r"^[\w\s/.:,*()=%?+@-]+$")


def validate_root_path(path: str) -> str:
    """Validate a root path given on the command line.

    Args:
        path: HDFS path or URI (e.g. /tmp, hdfs://nn:8020/tmp).

    Returns:
        The path, stripped of surrounding whitespace.

    Raises:
        ConfigurationError: If the path is empty or contains characters
            outside the accepted filename grammar.
    """
    stripped = path.strip()
    if not stripped or not _ROOT_PATH_RE.match(stripped):
        msg = f"invalid path '{path}' given"
        raise ConfigurationError(msg)
    return stripped


def collect_root_paths(paths: list[str], default_path: str) -> list[str]:
    """Validate root paths, dropping duplicates and keeping first-seen order.

    Args:
        paths: Paths from --path options and positional arguments.
        default_path: Path used when none are given.

    Returns:
        Non-empty list of validated root paths.
    """
    if not paths:
        return [validate_root_path(default_path)]
    return list(dict.fromkeys(validate_root_path(p) for p in paths))


def compile_pattern(pattern: str | None, name: str) -> re.Pattern[str] | None:
    """Compile an optional user regex.

    Args:
        pattern: Regex source, or None.
        name: Option name used in error messages ("include" or "exclude").

    Returns:
        Compiled pattern, or None if no pattern was given.

    Raises:
        ConfigurationError: If the pattern is empty or not a valid regex.
    """
    if pattern is None:
        return None
    if not pattern:
        msg = f"{name} regex cannot be empty"
        raise ConfigurationError(msg)
    try:
        return re.compile(pattern)
    except re.error as e:
        msg = f"invalid {name} regex '{pattern}': {e}"
        raise ConfigurationError(msg) from e


def validate_batch_size(batch_size: int) -> int:
    """Check a batch size lies within 0-1500."""
    if not (0 <= batch_size <= MAX_BATCH_SIZE):
        msg = f"batch size must be between 0 and {MAX_BATCH_SIZE}, got {batch_size}"
        raise ConfigurationError(msg)
    return batch_size


def validate_hadoop_bin(resolved: str | None, requested: str) -> str:
    """Check the located client binary exists and is named 'hadoop'.

    Args:
        resolved: Result of the executable lookup, None if not found.
        requested: Name or path the user asked for.

    Returns:
        Absolute path to the hadoop executable.

    Raises:
        ConfigurationError: If the binary was not found or is misnamed.
    """
    if resolved is None:
        msg = f"'{requested}' command not found in $PATH, specify the client with --hadoop-bin"
        raise ConfigurationError(msg)
    if PurePosixPath(resolved).name != "hadoop":
        msg = f"invalid hadoop program '{resolved}' given, should be called hadoop!"
        raise ConfigurationError(msg)
    return resolved
