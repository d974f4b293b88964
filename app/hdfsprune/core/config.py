"""Persistent settings for hdfsprune.

Defaults for the prune command are read from ~/.config/hdfsprune/config.toml.
Command-line options always take precedence over these values.
"""

import tomllib
from pathlib import Path
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from hdfsprune.core.paths import ensure_config_dir, get_config_path


class PruneSettings(BaseModel):
    """Defaults applied to every prune run.

    Attributes:
        hadoop_bin: Name or path of the hadoop client.
        extra_bin_dirs: Directories searched for the client after $PATH.
        default_path: Root path pruned when none is given.
        batch_size: Files per deletion command (0 or 1 = immediate).
        skip_trash: Bypass the HDFS trash by default.
        heap_mb: Client heap size in MB, exported as HADOOP_HEAPSIZE.
        timeout_seconds: Time limit for a whole run, listing and deletions included.
    """

    model_config = ConfigDict(extra="forbid")

    hadoop_bin: Annotated[
        str,
        Field(min_length=1, description="Name or path of the hadoop client"),
    ] = "hadoop"
    extra_bin_dirs: Annotated[
        list[str],
        Field(description="Directories searched for the client after $PATH"),
    ] = ["/opt/hadoop/bin", "/usr/local/hadoop/bin"]
    default_path: Annotated[
        str,
        Field(min_length=1, description="Root path pruned when none is given"),
    ] = "/tmp"
    batch_size: Annotated[
        int,
        Field(ge=0, le=1500, description="Files per deletion command (0-1500)"),
    ] = 0
    skip_trash: Annotated[
        bool,
        Field(description="Bypass the HDFS trash"),
    ] = False
    heap_mb: Annotated[
        int | None,
        Field(gt=0, description="Client heap size in MB"),
    ] = None
    timeout_seconds: Annotated[
        int,
        Field(ge=1, le=86400, description="Time limit in seconds for a whole run (1-86400)"),
    ] = 1800


class ConfigError(Exception):
    """Raised when the settings file cannot be read, parsed or validated."""


def load_settings(path: Path | None = None) -> PruneSettings:
    """Load settings from a TOML file.

    A missing file is not an error: built-in defaults are returned.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Validated PruneSettings object.

    Raises:
        ConfigError: If the file cannot be read, is not valid TOML, or
            does not match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        return PruneSettings()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read {config_path}: {e}") from e

    # Settings may live at the top level or under a [prune] table
    section = data.get("prune", data)
    try:
        return PruneSettings.model_validate(section)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {config_path}: {e}") from e


def save_settings(settings: PruneSettings, path: Path | None = None) -> Path:
    """Write settings to a TOML file under a [prune] table.

    Args:
        settings: Settings to persist.
        path: Destination file. If None, uses the default path.

    Returns:
        Path the settings were written to.

    Raises:
        ConfigError: If the file cannot be written.
    """
    if path is None:
        ensure_config_dir()
        path = get_config_path()

    data = {"prune": settings.model_dump(exclude_none=True)}
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "wb") as f:
            tomli_w.dump(data, f)
    except OSError as e:
        raise ConfigError(f"Failed to write {path}: {e}") from e
    return path
