from __future__ import annotations

import logging
from dataclasses import dataclass

from bulkbear.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Batch:
    """A contiguous run of accumulated rows, `[start, stop)`, sent as one statement."""
    index: int
    start: int
    stop: int

    @property
    def row_count(self) -> int:
        return self.stop - self.start

    def value_slice(self, values_per_row: int) -> slice:
        """Slice of the flattened value list that belongs to this batch."""
        return slice(self.start * values_per_row, self.stop * values_per_row)


def rows_per_batch(values_per_row: int, placeholder_limit: int) -> int:
    """Largest number of whole rows whose values fit under `placeholder_limit`."""
    if values_per_row < 1:
        raise ConfigurationError(f'values_per_row must be at least 1, got {values_per_row}')
    if placeholder_limit < 1:
        raise ConfigurationError(f'placeholder_limit must be at least 1, got {placeholder_limit}')
    n = placeholder_limit // values_per_row
    if n < 1:
        raise ConfigurationError(
            f'a single row needs {values_per_row} placeholders, more than the limit of {placeholder_limit}'
        )
    return n


def plan_batches(row_count: int, values_per_row: int, placeholder_limit: int) -> list[Batch]:
    """Split `row_count` rows into batches that each stay within `placeholder_limit`.

    Rows are never split across batches and keep their order. When the total
    value count is below the limit everything goes in a single batch;
    otherwise each batch holds ``placeholder_limit // values_per_row`` rows and
    the last batch takes whatever remains.
    """
    per_batch = rows_per_batch(values_per_row, placeholder_limit)
    if row_count < 0:
        raise ValueError('row_count must be a non-negative integer')
    if row_count == 0:
        return []

    total = row_count * values_per_row
    if total < placeholder_limit:
        logger.debug('%d values fit in a single statement (limit %d)', total, placeholder_limit)
        return [Batch(0, 0, row_count)]

    batch_count = -(-row_count // per_batch)
    batches = []
    for i in range(batch_count):
        start = i * per_batch
        # last batch takes the remainder
        stop = row_count if i == batch_count - 1 else start + per_batch
        batches.append(Batch(i, start, stop))
    logger.debug(
        'split %d rows (%d values) into %d batches of up to %d rows (limit %d)',
        row_count, total, batch_count, per_batch, placeholder_limit,
    )
    return batches
