"""Batching strategies for submitting deletions.

A batch size of 0 or 1 deletes each accepted file as soon as it is
found. A batch size of 2 or more accumulates every accepted file and
deletes them in consecutive groups once the listing has completed.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator

from hdfsprune.pruner.models import DeleteResult
from hdfsprune.pruner.operator import HdfsDeleteOperator
from hdfsprune.pruner.validation import validate_batch_size

logger = logging.getLogger(__name__)

ResultCallback = Callable[[DeleteResult], None]


def chunked(paths: list[str], size: int) -> Iterator[list[str]]:
    """Split paths into consecutive groups of ``size``; the last may be shorter."""
    for start in range(0, len(paths), size):
        yield paths[start : start + size]


class BatchStrategy(ABC):
    """Abstract base class for deletion batching policies.

    Attributes:
        operator: Operator that renders or executes each deletion.
        on_result: Optional callback invoked after every deletion command.
        batches: Number of deletion commands issued so far.
    """

    def __init__(
        self,
        operator: HdfsDeleteOperator,
        on_result: ResultCallback | None = None,
    ) -> None:
        self.operator = operator
        self.on_result = on_result
        self.batches = 0

    @abstractmethod
    def add(self, path: str) -> None:
        """Accept a path that qualified for deletion."""

    @abstractmethod
    def finish(self) -> None:
        """Flush any pending paths once the listing has completed."""

    def _submit(self, paths: list[str], with_heap: bool) -> None:
        result = self.operator.delete(paths, with_heap=with_heap)
        self.batches += 1
        if self.on_result is not None:
            self.on_result(result)


class ImmediateBatchStrategy(BatchStrategy):
    """Deletes every accepted file straight away, one command per file.

    The heap hint is not forwarded: a single-file command never needs it.
    """

    def add(self, path: str) -> None:
        self._submit([path], with_heap=False)

    def finish(self) -> None:
        """Nothing is ever pending."""


class GroupedBatchStrategy(BatchStrategy):
    """Accumulates accepted files and deletes them in groups of ``size``.

    Groups preserve listing order and each group is length-checked by
    the operator before it is printed or executed.
    """

    def __init__(
        self,
        operator: HdfsDeleteOperator,
        size: int,
        on_result: ResultCallback | None = None,
    ) -> None:
        if size < 2:
            msg = f"Grouped batches need a size of at least 2, got {size}"
            raise ValueError(msg)
        super().__init__(operator, on_result)
        self.size = size
        self._pending: list[str] = []

    @property
    def pending(self) -> int:
        """Number of accepted paths waiting for finish()."""
        return len(self._pending)

    def add(self, path: str) -> None:
        self._pending.append(path)

    def finish(self) -> None:
        if not self._pending:
            return
        logger.info(
            "%d files %s",
            len(self._pending),
            "matching" if self.operator.dry_run else "to be deleted",
        )
        for start, group in zip(
            range(0, len(self._pending), self.size),
            chunked(self._pending, self.size),
            strict=True,
        ):
            logger.info("file batch %d - %d", start + 1, start + len(group))
            self._submit(group, with_heap=True)
        self._pending = []


def make_batch_strategy(
    batch_size: int,
    operator: HdfsDeleteOperator,
    on_result: ResultCallback | None = None,
) -> BatchStrategy:
    """Pick the batching policy for a batch size.

    Args:
        batch_size: 0 or 1 for immediate deletion, 2-1500 for grouped.
        operator: Operator performing the deletions.
        on_result: Optional callback invoked after every deletion command.

    Returns:
        The matching BatchStrategy instance.

    Raises:
        ConfigurationError: If batch_size is outside 0-1500.
    """
    validate_batch_size(batch_size)
    if batch_size < 2:
        return ImmediateBatchStrategy(operator, on_result)
    return GroupedBatchStrategy(operator, batch_size, on_result)
