"""Domain models for the HDFS pruning workflow.

This module defines the data structures that flow through a pruning run:
listing entries, the age threshold, classification verdicts, per-run
counters and deletion results.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from hdfsprune.pruner.errors import ConfigurationError

# Bounds for the age components, inclusive
MAX_DAYS = 3650
MAX_HOURS = 23
MAX_MINS = 59

# Anything at or below five minutes is refused outright
MIN_THRESHOLD_SECONDS = 300


class EntryType(str, Enum):
    """Type of an HDFS listing entry.

    Attributes:
        FILE: Regular file (listing flag "-").
        DIRECTORY: Directory (listing flag "d").
    """

    FILE = "file"
    DIRECTORY = "directory"


class Verdict(str, Enum):
    """Classification outcome for a single file entry.

    Attributes:
        ACCEPTED: Older than the threshold and not excluded by any rule.
        TOO_RECENT: Not older than the threshold.
        SAFETY_EXCLUDED: Matched a hardcoded safety rule.
        EXCLUDED: Matched the user exclude pattern.
        NOT_INCLUDED: An include pattern is set and did not match.
    """

    ACCEPTED = "accepted"
    TOO_RECENT = "too_recent"
    SAFETY_EXCLUDED = "safety_excluded"
    EXCLUDED = "excluded"
    NOT_INCLUDED = "not_included"


@dataclass(frozen=True, slots=True)
class FileEntry:
    """A single entry parsed from `hadoop fs -ls -R` output.

    Attributes:
        path: Path exactly as printed by the listing.
        modified_at: Local modification time (minute precision).
        entry_type: File or directory.
    """

    path: str
    modified_at: datetime
    entry_type: EntryType

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)

    @property
    def is_directory(self) -> bool:
        """Check if this entry is a directory."""
        return self.entry_type == EntryType.DIRECTORY

    def age_seconds(self, now: datetime) -> float:
        """Return how many seconds before ``now`` this entry was modified."""
        return (now - self.modified_at).total_seconds()


@dataclass(frozen=True, slots=True)
class AgeThreshold:
    """Minimum age a file must exceed to be eligible for deletion.

    Components may be fractional. The combined threshold must be strictly
    greater than five minutes.

    Attributes:
        days: Days component (0-3650).
        hours: Hours component (0-23).
        mins: Minutes component (0-59).

    Raises:
        ConfigurationError: If a component is out of range or the total
            threshold is five minutes or less.
    """

    days: float = 0
    hours: float = 0
    mins: float = 0

    def __post_init__(self) -> None:
        """Validate the threshold components."""
        for name, value, upper in (
            ("days", self.days, MAX_DAYS),
            ("hours", self.hours, MAX_HOURS),
            ("mins", self.mins, MAX_MINS),
        ):
            if not (0 <= value <= upper):
                msg = f"{name} must be between 0 and {upper}, got {value:g}"
                raise ConfigurationError(msg)
        if self.seconds <= MIN_THRESHOLD_SECONDS:
            msg = "must specify a total max age > 5 minutes"
            raise ConfigurationError(msg)

    @property
    def seconds(self) -> float:
        """Total threshold in seconds."""
        return self.days * 86400 + self.hours * 3600 + self.mins * 60

    def is_exceeded_by(self, age_seconds: float) -> bool:
        """Check if an age is strictly older than this threshold."""
        return age_seconds > self.seconds

    def describe(self) -> str:
        """Human-readable form used in run summaries."""
        return f"{self.days:g} days {self.hours:g} hours {self.mins:g} mins"


@dataclass(slots=True)
class PruneStats:
    """Counters accumulated over one pruning run.

    Attributes:
        files_checked: File entries parsed from the listing (directories excluded).
        accepted: Files handed to the batch strategy for deletion.
        too_recent: Files not older than the threshold.
        excluded: Files matching the user exclude pattern.
        safety_excluded: Files matching a hardcoded safety rule.
        not_included: Files not matching the user include pattern.
        unparsed_lines: Listing lines that did not match the grammar.
        batches: Deletion commands issued (printed or executed).
    """

    files_checked: int = 0
    accepted: int = 0
    too_recent: int = 0
    excluded: int = 0
    safety_excluded: int = 0
    not_included: int = 0
    unparsed_lines: int = 0
    batches: int = 0

    def record(self, verdict: Verdict) -> None:
        """Increment the counter matching a classification verdict."""
        if verdict == Verdict.ACCEPTED:
            self.accepted += 1
        elif verdict == Verdict.TOO_RECENT:
            self.too_recent += 1
        elif verdict == Verdict.EXCLUDED:
            self.excluded += 1
        elif verdict == Verdict.SAFETY_EXCLUDED:
            self.safety_excluded += 1
        else:
            self.not_included += 1


@dataclass(frozen=True, slots=True)
class DeleteResult:
    """Outcome of one `hadoop fs -rm` invocation or its dry-run rendering.

    Attributes:
        paths: Paths covered by the command, in listing order.
        command: Shell rendering of the command.
        executed: Whether the command was actually run.
        returncode: Exit status when executed, None for dry-run.
    """

    paths: tuple[str, ...]
    command: str
    executed: bool = False
    returncode: int | None = None
