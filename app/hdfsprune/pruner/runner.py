"""Pruning run orchestration.

Streams the recursive listing, classifies each file entry and hands
accepted paths to the batch strategy. Single-threaded and blocking:
each deletion completes before the next line or group is considered.
"""

import logging
from contextlib import closing

from hdfsprune.pruner.batching import BatchStrategy
from hdfsprune.pruner.classifier import EntryClassifier
from hdfsprune.pruner.errors import ListingParseError, NoFilesFoundError
from hdfsprune.pruner.listing import HdfsLister, parse_listing_line
from hdfsprune.pruner.models import PruneStats, Verdict

logger = logging.getLogger(__name__)


class Pruner:
    """Runs one listing-classify-delete pass over a set of root paths.

    Attributes:
        lister: Source of listing lines.
        classifier: Age and pattern rules applied to each file.
        strategy: Batching policy receiving accepted paths.
    """

    def __init__(
        self,
        lister: HdfsLister,
        classifier: EntryClassifier,
        strategy: BatchStrategy,
    ) -> None:
        self.lister = lister
        self.classifier = classifier
        self.strategy = strategy

    def run(self, paths: list[str]) -> PruneStats:
        """Prune aged files under the given root paths.

        Args:
            paths: Validated root paths to list recursively.

        Returns:
            PruneStats with the counters of this run.

        Raises:
            NoFilesFoundError: If the listing contained no file entries.
            TimestampError: If a listing line carries an invalid timestamp.
            PruneError: Any fatal deletion error raised by the operator.
        """
        stats = PruneStats()

        logger.info("processing file list")
        # Closing the listing stops the client if a fatal error aborts the loop
        with closing(self.lister.lines(paths)) as lines:
            for line in lines:
                logger.debug("output: %s", line)
                try:
                    entry = parse_listing_line(line)
                except ListingParseError as e:
                    stats.unparsed_lines += 1
                    logger.warning("%s", e)
                    continue

                # Directories are never removed: that would need a recursive -rm
                if entry is None or entry.is_directory:
                    continue

                stats.files_checked += 1
                verdict = self.classifier.classify(entry)
                stats.record(verdict)

                if verdict == Verdict.ACCEPTED:
                    self.strategy.add(entry.path)
                elif verdict == Verdict.SAFETY_EXCLUDED:
                    logger.debug("hardcoded safety exclusion: %s", entry.path)

        if stats.files_checked == 0:
            msg = "No files found in HDFS"
            raise NoFilesFoundError(msg)

        self.strategy.finish()
        stats.batches = self.strategy.batches
        return stats
