"""Unit tests for the Pruner orchestration."""

import re
from collections.abc import Iterator
from datetime import datetime
from unittest.mock import MagicMock, patch

import pytest
from hdfsprune.pruner.batching import GroupedBatchStrategy, ImmediateBatchStrategy
from hdfsprune.pruner.classifier import EntryClassifier
from hdfsprune.pruner.errors import DeletionError, NoFilesFoundError, TimestampError
from hdfsprune.pruner.listing import HdfsLister
from hdfsprune.pruner.models import AgeThreshold, DeleteResult
from hdfsprune.pruner.operator import HdfsDeleteOperator
from hdfsprune.pruner.runner import Pruner


def _mock_lister(output: str) -> MagicMock:
    """Create a mock lister yielding the given listing output."""
    lister = MagicMock(spec=HdfsLister)
    lister.lines.return_value = (line for line in output.splitlines())
    return lister


def _make_pruner(
    output: str,
    now: datetime,
    batch_size: int = 0,
    include: str | None = None,
    exclude: str | None = None,
) -> tuple[Pruner, list[DeleteResult], MagicMock]:
    """Build a dry-run pruner whose deletions are collected into a list."""
    results: list[DeleteResult] = []
    operator = HdfsDeleteOperator("/usr/bin/hadoop", dry_run=True, arg_max=131072)
    if batch_size < 2:
        strategy = ImmediateBatchStrategy(operator, on_result=results.append)
    else:
        strategy = GroupedBatchStrategy(operator, batch_size, on_result=results.append)
    classifier = EntryClassifier(
        AgeThreshold(days=1),
        include=re.compile(include) if include else None,
        exclude=re.compile(exclude) if exclude else None,
        now=now,
    )
    lister = _mock_lister(output)
    return Pruner(lister, classifier, strategy), results, lister


class TestPrunerRun:
    """Tests for Pruner.run."""

    def test_counts_and_deletions(self, mock_listing_output: str, now: datetime) -> None:
        """Old files are deleted; recent, protected and directory entries are not."""
        pruner, results, lister = _make_pruner(mock_listing_output, now)

        stats = pruner.run(["/tmp"])

        lister.lines.assert_called_once_with(["/tmp"])
        assert stats.files_checked == 4
        assert stats.accepted == 2
        assert stats.too_recent == 1
        assert stats.safety_excluded == 1
        assert stats.batches == 2
        assert [r.paths for r in results] == [
            ("/tmp/logs/app.log",),
            ("/tmp/staging/part-00000",),
        ]

    def test_dry_run_never_invokes_client(
        self, mock_listing_output: str, now: datetime, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Dry-run issues no deletion subprocess."""
        mock_run = MagicMock()
        monkeypatch.setattr("hdfsprune.pruner.operator.run_interactive", mock_run)
        pruner, results, _ = _make_pruner(mock_listing_output, now, batch_size=10)

        pruner.run(["/tmp"])

        mock_run.assert_not_called()
        assert len(results) == 1
        assert results[0].executed is False

    def test_grouped_flush_after_listing(self, mock_listing_output: str, now: datetime) -> None:
        """Grouped batches are issued once, after the listing."""
        pruner, results, _ = _make_pruner(mock_listing_output, now, batch_size=10)

        stats = pruner.run(["/tmp"])

        assert stats.batches == 1
        assert results[0].paths == ("/tmp/logs/app.log", "/tmp/staging/part-00000")

    def test_exclude_counted(self, mock_listing_output: str, now: datetime) -> None:
        """Excluded files are counted and not deleted."""
        pruner, results, _ = _make_pruner(mock_listing_output, now, exclude=r"staging")

        stats = pruner.run(["/tmp"])

        assert stats.excluded == 1
        assert [r.paths for r in results] == [("/tmp/logs/app.log",)]

    def test_include_filters(self, mock_listing_output: str, now: datetime) -> None:
        """Only files matching the include pattern are deleted."""
        pruner, results, _ = _make_pruner(mock_listing_output, now, include=r"\.log$")

        stats = pruner.run(["/tmp"])

        assert stats.not_included == 1
        assert [r.paths for r in results] == [("/tmp/logs/app.log",)]

    def test_directories_only_is_fatal(
        self, mock_directories_only_output: str, now: datetime
    ) -> None:
        """A listing with no file entries raises NoFilesFoundError."""
        pruner, _, _ = _make_pruner(mock_directories_only_output, now)

        with pytest.raises(NoFilesFoundError, match="No files found"):
            pruner.run(["/tmp"])

    def test_empty_listing_is_fatal(self, now: datetime) -> None:
        """An empty listing raises NoFilesFoundError."""
        pruner, _, _ = _make_pruner("", now)

        with pytest.raises(NoFilesFoundError):
            pruner.run(["/tmp"])

    def test_no_qualifying_files_is_not_fatal(self, now: datetime) -> None:
        """Files that are all too recent still count as found."""
        output = "-rw-r--r--   3 etl hadoop 1 2024-06-15 11:59 /tmp/new.log"
        pruner, results, _ = _make_pruner(output, now)

        stats = pruner.run(["/tmp"])

        assert stats.files_checked == 1
        assert stats.accepted == 0
        assert results == []

    def test_grouped_not_flushed_when_no_files(
        self, mock_directories_only_output: str, now: datetime
    ) -> None:
        """The no-files check happens before any grouped deletion."""
        pruner, results, _ = _make_pruner(mock_directories_only_output, now, batch_size=5)

        with pytest.raises(NoFilesFoundError):
            pruner.run(["/tmp"])

        assert results == []

    def test_unparsed_lines_are_warnings(
        self, mock_malformed_output: str, now: datetime, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Unmatched lines are logged, counted and skipped."""
        pruner, results, _ = _make_pruner(mock_malformed_output, now)

        with caplog.at_level("WARNING"):
            stats = pruner.run(["/tmp"])

        assert stats.unparsed_lines == 2
        assert stats.files_checked == 1
        assert len(results) == 1
        assert "failed to match line" in caplog.text

    def test_invalid_timestamp_is_fatal(self, now: datetime) -> None:
        """A malformed timestamp aborts the run."""
        output = "-rw-r--r--   3 etl hadoop 1 2024-02-30 10:00 /tmp/a"
        pruner, _, _ = _make_pruner(output, now)

        with pytest.raises(TimestampError):
            pruner.run(["/tmp"])

    def test_each_old_file_in_exactly_one_batch(self, now: datetime) -> None:
        """Every qualifying file appears in exactly one batch."""
        lines = [
            f"-rw-r--r--   3 etl hadoop 1 2024-05-01 10:00 /tmp/data/f{i}" for i in range(7)
        ]
        pruner, results, _ = _make_pruner("\n".join(lines), now, batch_size=3)

        pruner.run(["/tmp"])

        deleted = [p for r in results for p in r.paths]
        assert sorted(deleted) == sorted(f"/tmp/data/f{i}" for i in range(7))
        assert len(deleted) == len(set(deleted))
        assert [len(r.paths) for r in results] == [3, 3, 1]

    def test_listing_closed_on_fatal_error(self, now: datetime) -> None:
        """A failed deletion stops the listing client instead of leaving it running."""
        closed: list[bool] = []

        def _listing() -> Iterator[str]:
            try:
                yield "-rw-r--r--   3 etl hadoop 1 2024-05-01 10:00 /tmp/a"
                yield "-rw-r--r--   3 etl hadoop 1 2024-05-01 10:00 /tmp/b"
            finally:
                closed.append(True)

        lister = MagicMock(spec=HdfsLister)
        lister.lines.return_value = _listing()
        operator = HdfsDeleteOperator("/usr/bin/hadoop", dry_run=False, arg_max=131072)
        pruner = Pruner(
            lister,
            EntryClassifier(AgeThreshold(days=1), now=now),
            ImmediateBatchStrategy(operator),
        )

        with (
            patch("hdfsprune.pruner.operator.run_interactive", return_value=1),
            pytest.raises(DeletionError),
        ):
            pruner.run(["/tmp"])

        assert closed == [True]
