"""Age and pattern classification of listing entries."""

import re
from datetime import datetime

from hdfsprune.pruner.models import AgeThreshold, FileEntry, Verdict
from hdfsprune.pruner.safety import is_safety_excluded


class EntryClassifier:
    """Decides whether a file entry is eligible for deletion.

    Order of checks: age, hardcoded safety rules, user exclude pattern,
    user include pattern. The exclude pattern always overrides the
    include pattern, and safety rules override both.

    Attributes:
        threshold: Minimum age a file must exceed.
        include: Optional regex a path must match to be accepted.
        exclude: Optional regex that rejects matching paths.
        now: Reference time for age computation, fixed for the whole run.
    """

    def __init__(
        self,
        threshold: AgeThreshold,
        include: re.Pattern[str] | None = None,
        exclude: re.Pattern[str] | None = None,
        now: datetime | None = None,
    ) -> None:
        self.threshold = threshold
        self.include = include
        self.exclude = exclude
        self.now = now or datetime.now()

    def classify(self, entry: FileEntry) -> Verdict:
        """Classify a single file entry.

        Args:
            entry: Parsed listing entry (directories are expected to be
                filtered out by the caller).

        Returns:
            The Verdict for the entry.
        """
        if not self.threshold.is_exceeded_by(entry.age_seconds(self.now)):
            return Verdict.TOO_RECENT

        if is_safety_excluded(entry.path):
            return Verdict.SAFETY_EXCLUDED

        if self.exclude is not None and self.exclude.search(entry.path):
            return Verdict.EXCLUDED

        if self.include is not None and not self.include.search(entry.path):
            return Verdict.NOT_INCLUDED

        return Verdict.ACCEPTED
