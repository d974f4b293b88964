"""Aged-file pruning for HDFS directory trees.

This module provides listing parsing, classification against age and
safety rules, batching strategies and the deletion operator.
"""

from hdfsprune.pruner.batching import (
    BatchStrategy,
    GroupedBatchStrategy,
    ImmediateBatchStrategy,
    make_batch_strategy,
)
from hdfsprune.pruner.classifier import EntryClassifier
from hdfsprune.pruner.errors import (
    CommandTooLongError,
    ConfigurationError,
    DeletionError,
    DeletionInterruptedError,
    ListingParseError,
    NoFilesFoundError,
    PruneError,
    TimestampError,
)
from hdfsprune.pruner.listing import HdfsLister, parse_listing_line
from hdfsprune.pruner.models import (
    AgeThreshold,
    DeleteResult,
    EntryType,
    FileEntry,
    PruneStats,
    Verdict,
)
from hdfsprune.pruner.operator import HdfsDeleteOperator
from hdfsprune.pruner.runner import Pruner
from hdfsprune.pruner.safety import SAFETY_RULES, SafetyRule, is_safety_excluded

__all__ = [
    "SAFETY_RULES",
    "AgeThreshold",
    "BatchStrategy",
    "CommandTooLongError",
    "ConfigurationError",
    "DeleteResult",
    "DeletionError",
    "DeletionInterruptedError",
    "EntryClassifier",
    "EntryType",
    "FileEntry",
    "GroupedBatchStrategy",
    "HdfsDeleteOperator",
    "HdfsLister",
    "ImmediateBatchStrategy",
    "ListingParseError",
    "NoFilesFoundError",
    "PruneError",
    "PruneStats",
    "Pruner",
    "SafetyRule",
    "TimestampError",
    "Verdict",
    "is_safety_excluded",
    "make_batch_strategy",
    "parse_listing_line",
]
