"""HDFS recursive listing via the hadoop command-line client.

Runs `hadoop fs -ls -R` over the root paths and parses each output line
into a FileEntry.
"""

import logging
import re
from collections.abc import Generator
from datetime import datetime

from hdfsprune.pruner.errors import ListingParseError, TimestampError
from hdfsprune.pruner.models import EntryType, FileEntry
from hdfsprune.utils.shell import stream_lines, time_left

logger = logging.getLogger(__name__)

# Characters accepted in HDFS paths, both on the command line and in listing output
FILENAME_CHARS = r"[\w\s/.:,*()=%?+@'\"`$~&\[\]{}#!-]+"

_PERMISSIONS = r"[r-][w-][xsStT-][r-][w-][xsStT-][r-][w-][xtT-]"

# {type}{perms}[+] {replication|-} {owner} {group} {size} {date} {time} {path}
LISTING_LINE_RE = re.compile(
    rf"^([d-]){_PERMISSIONS}\+?\s+(?:\d+|-)\s+[\w.@-]+\s+[\w.@-]+\s+\d+\s+"
    rf"(\d{{4}})-(\d{{2}})-(\d{{2}})\s+(\d{{2}}):(\d{{2}})\s+({FILENAME_CHARS})$"
)

SUMMARY_LINE_RE = re.compile(r"^Found\s\d+\sitems")


def parse_listing_line(line: str) -> FileEntry | None:
    """Parse a single line of `hadoop fs -ls -R` output.

    Args:
        line: One output line, without the trailing newline.

    Returns:
        FileEntry for a file or directory line, None for the
        "Found N items" summary line and blank lines.

    Raises:
        ListingParseError: If the line does not match the listing grammar.
        TimestampError: If the date or time fields are not a valid local time.
    """
    if not line.strip() or SUMMARY_LINE_RE.match(line):
        return None

    match = LISTING_LINE_RE.match(line)
    if match is None:
        raise ListingParseError(line)

    flag, year, month, day, hour, minute, path = match.groups()
    try:
        modified_at = datetime(int(year), int(month), int(day), int(hour), int(minute))
    except ValueError as e:
        msg = f"Failed to convert timestamp {year}-{month}-{day} {hour}:{minute} for comparison"
        raise TimestampError(msg) from e

    return FileEntry(
        path=path,
        modified_at=modified_at,
        entry_type=EntryType.DIRECTORY if flag == "d" else EntryType.FILE,
    )


class HdfsLister:
    """Streams recursive listings from the hadoop client.

    Attributes:
        hadoop_bin: Path to the `hadoop` executable.
        heap_mb: Optional client heap size, exported as HADOOP_HEAPSIZE.
        deadline: Optional `time.monotonic()` value by which the whole run
            must finish; the listing is killed when it is reached.
    """

    def __init__(
        self,
        hadoop_bin: str,
        heap_mb: int | None = None,
        deadline: float | None = None,
    ) -> None:
        self.hadoop_bin = hadoop_bin
        self.heap_mb = heap_mb
        self.deadline = deadline

    def build_command(self, paths: list[str]) -> list[str]:
        """Build the recursive listing command for the given roots."""
        return [self.hadoop_bin, "fs", "-ls", "-R", *paths]

    def lines(self, paths: list[str]) -> Generator[str, None, None]:
        """Yield listing output lines as the client produces them.

        Args:
            paths: Root paths to list recursively.

        Yields:
            Raw output lines.

        Raises:
            subprocess.TimeoutExpired: If the deadline passes before the
                listing completes.
            FileNotFoundError: If the hadoop executable cannot be run.
        """
        env = {"HADOOP_HEAPSIZE": str(self.heap_mb)} if self.heap_mb else None
        command = self.build_command(paths)
        logger.info("Listing %s", " ".join(paths))
        timeout = time_left(self.deadline, command)
        yield from stream_lines(command, timeout=timeout, env=env)
