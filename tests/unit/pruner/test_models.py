"""Unit tests for pruner domain models."""

from datetime import datetime, timedelta

import pytest
from hdfsprune.pruner.errors import ConfigurationError
from hdfsprune.pruner.models import (
    AgeThreshold,
    EntryType,
    FileEntry,
    PruneStats,
    Verdict,
)


class TestFileEntry:
    """Tests for FileEntry dataclass."""

    def test_create_file_entry(self) -> None:
        """Can create a file entry."""
        entry = FileEntry(
            path="/tmp/a.log",
            modified_at=datetime(2024, 1, 1, 10, 30),
            entry_type=EntryType.FILE,
        )

        assert entry.path == "/tmp/a.log"
        assert entry.is_directory is False

    def test_directory_entry(self) -> None:
        """Directory entries report is_directory."""
        entry = FileEntry(
            path="/tmp/dir",
            modified_at=datetime(2024, 1, 1),
            entry_type=EntryType.DIRECTORY,
        )

        assert entry.is_directory is True

    def test_empty_path_raises(self) -> None:
        """Empty path raises ValueError."""
        with pytest.raises(ValueError, match="Path cannot be empty"):
            FileEntry(path="", modified_at=datetime(2024, 1, 1), entry_type=EntryType.FILE)

    def test_age_seconds(self) -> None:
        """Age is measured against the given reference time."""
        entry = FileEntry(
            path="/tmp/a", modified_at=datetime(2024, 1, 1, 0, 0), entry_type=EntryType.FILE
        )

        assert entry.age_seconds(datetime(2024, 1, 1, 1, 0)) == 3600

    def test_is_immutable(self) -> None:
        """FileEntry is frozen."""
        entry = FileEntry(path="/tmp/a", modified_at=datetime(2024, 1, 1), entry_type=EntryType.FILE)

        with pytest.raises(AttributeError):
            entry.path = "/tmp/b"  # type: ignore[misc]


class TestAgeThreshold:
    """Tests for AgeThreshold validation and comparison."""

    def test_seconds_combines_components(self) -> None:
        """days*86400 + hours*3600 + mins*60."""
        threshold = AgeThreshold(days=1, hours=2, mins=3)

        assert threshold.seconds == 86400 + 7200 + 180

    def test_fractional_days_allowed(self) -> None:
        """Components may be fractional."""
        threshold = AgeThreshold(days=0.5)

        assert threshold.seconds == 43200

    def test_five_minutes_rejected(self) -> None:
        """Exactly five minutes is not enough."""
        with pytest.raises(ConfigurationError, match="> 5 minutes"):
            AgeThreshold(mins=5)

    def test_six_minutes_accepted(self) -> None:
        """Anything above five minutes is accepted."""
        assert AgeThreshold(mins=6).seconds == 360

    def test_zero_rejected(self) -> None:
        """No age at all is rejected."""
        with pytest.raises(ConfigurationError):
            AgeThreshold()

    @pytest.mark.parametrize(
        ("kwargs", "name"),
        [
            ({"days": 3651}, "days"),
            ({"days": -1}, "days"),
            ({"days": 1, "hours": 24}, "hours"),
            ({"days": 1, "mins": 60}, "mins"),
        ],
    )
    def test_out_of_range_components(self, kwargs: dict[str, float], name: str) -> None:
        """Components outside their ranges are rejected."""
        with pytest.raises(ConfigurationError, match=name):
            AgeThreshold(**kwargs)

    def test_upper_bounds_inclusive(self) -> None:
        """Upper bounds are inclusive."""
        threshold = AgeThreshold(days=3650, hours=23, mins=59)

        assert threshold.seconds == 3650 * 86400 + 23 * 3600 + 59 * 60

    def test_is_exceeded_by_is_strict(self) -> None:
        """An age equal to the threshold does not exceed it."""
        threshold = AgeThreshold(hours=1)

        assert threshold.is_exceeded_by(3601) is True
        assert threshold.is_exceeded_by(3600) is False
        assert threshold.is_exceeded_by(timedelta(minutes=59).total_seconds()) is False

    def test_describe(self) -> None:
        """describe() renders all three components."""
        assert AgeThreshold(days=7.0).describe() == "7 days 0 hours 0 mins"


class TestPruneStats:
    """Tests for PruneStats counters."""

    def test_defaults_are_zero(self) -> None:
        """All counters start at zero."""
        stats = PruneStats()

        assert stats.files_checked == 0
        assert stats.accepted == 0
        assert stats.batches == 0

    def test_record_each_verdict(self) -> None:
        """record() increments the matching counter."""
        stats = PruneStats()

        for verdict in Verdict:
            stats.record(verdict)
        stats.record(Verdict.ACCEPTED)

        assert stats.accepted == 2
        assert stats.too_recent == 1
        assert stats.excluded == 1
        assert stats.safety_excluded == 1
        assert stats.not_included == 1
