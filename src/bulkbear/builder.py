from __future__ import annotations

import logging
from itertools import chain
from typing import Any, Iterable, Sequence

import polars as pl

from bulkbear.config import DEFAULT_PLACEHOLDER_LIMIT
from bulkbear.errors import ArityMismatch, ConfigurationError, ExecuteFailure, PrepareFailure
from bulkbear.executor import Executor
from bulkbear.placeholders import PLACEHOLDER, placeholder_group, placeholder_rows
from bulkbear.planner import Batch, plan_batches
from bulkbear.statement import assemble, statement_prefix

logger = logging.getLogger(__name__)


class BulkInsert:
    """Accumulate rows for one table and insert them as multi-row statements.

    Rows are collected with `add_row` (or `add_rows` / `add_frame`) and written
    with `insert`, which splits them into as few ``INSERT ... VALUES (?,..),(?,..)``
    statements as the placeholder limit allows. Batches run one after another;
    a failing batch stops the run and earlier batches are not rolled back.

    Not thread-safe: a builder belongs to a single bulk operation.

    Parameters:
        table_name : str
            Target table, used verbatim in the statement.
        columns : Sequence[str]
            Column names in the order row values are supplied.
        placeholder_limit : int
            Maximum number of bound parameters per statement for the target database.
        placeholder : str, default "?"
            Positional marker the driver expects, e.g. "%s" for pymysql or psycopg
            (see `DbapiExecutor.placeholder`).
    """

    def __init__(
            self,
            table_name: str,
            columns: Sequence[str],
            *,
            placeholder_limit: int = DEFAULT_PLACEHOLDER_LIMIT,
            placeholder: str = PLACEHOLDER,
    ):
        if isinstance(columns, str):
            raise TypeError('columns must be a sequence of column names, not a string')
        if placeholder_limit < 1:
            raise ConfigurationError(f'placeholder_limit must be at least 1, got {placeholder_limit}')
        self._table_name = table_name
        self._columns = tuple(columns)
        self._placeholder_limit = placeholder_limit
        # raises ConfigurationError for an empty column list
        self._placeholder_group = placeholder_group(len(self._columns), placeholder)
        self._prefix = statement_prefix(table_name, self._columns)
        self._rows: list[tuple[Any, ...]] = []

    @property
    def table_name(self) -> str:
        return self._table_name

    @property
    def columns(self) -> list[str]:
        return list(self._columns)

    @property
    def values_per_row(self) -> int:
        return len(self._columns)

    @property
    def placeholder_limit(self) -> int:
        return self._placeholder_limit

    @property
    def statement_prefix(self) -> str:
        return self._prefix

    @property
    def placeholder_group(self) -> str:
        return self._placeholder_group

    @property
    def row_count(self) -> int:
        return len(self._rows)

    @property
    def values(self) -> list[Any]:
        """All accumulated values, row after row, in submission order."""
        return list(chain.from_iterable(self._rows))

    @property
    def placeholder_text(self) -> str:
        """One placeholder group per accumulated row, trailing separator included."""
        return self._placeholder_group * len(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def _check_row(self, values: Sequence[Any]) -> tuple[Any, ...]:
        row = tuple(values)
        if len(row) != self.values_per_row:
            raise ArityMismatch(len(row), self.values_per_row)
        return row

    def add_row(self, values: Sequence[Any]) -> None:
        """Append one row; its values must line up with `columns`.

        Raises ArityMismatch, leaving the builder untouched, when the number of
        values differs from the number of columns.
        """
        self._rows.append(self._check_row(values))

    def add_rows(self, rows: Iterable[Sequence[Any]]) -> int:
        """Append many rows. Either every row is appended or, on a bad row, none are."""
        checked = [self._check_row(r) for r in rows]
        self._rows.extend(checked)
        return len(checked)

    def add_frame(self, df: pl.DataFrame) -> int:
        """Append every row of a polars DataFrame, taking values from `columns` by name."""
        missing = [c for c in self._columns if c not in df.columns]
        if missing:
            raise KeyError(f"Columns {missing!r} not found in frame. Available: {sorted(df.columns)}")
        if df.height == 0:
            return 0
        return self.add_rows(df.select(self.columns).iter_rows())

    def clear(self) -> None:
        """Drop accumulated rows so the builder can be reused for the same table."""
        self._rows.clear()

    def plan(self) -> list[Batch]:
        return plan_batches(len(self._rows), self.values_per_row, self._placeholder_limit)

    def _assemble(self, batch: Batch, upsert: bool) -> str:
        text = placeholder_rows(self._placeholder_group, batch.row_count)
        return assemble(self._prefix, text, self._columns, upsert)

    def statements(self, upsert: bool = False) -> list[tuple[str, list[Any]]]:
        """Statement text and values for every batch, without running anything."""
        values = self.values
        return [
            (self._assemble(b, upsert), values[b.value_slice(self.values_per_row)])
            for b in self.plan()
        ]

    def insert(self, executor: Executor, upsert: bool = False) -> int:
        """Prepare and execute every batch in order.

        Parameters:
            executor : Executor
                Object with ``prepare(text)`` and ``execute(statement, values)``,
                e.g. `DbapiExecutor` or `DryRunExecutor`.
            upsert : bool, default False
                Append ``ON DUPLICATE KEY UPDATE col=VALUES(col),...`` covering every column.

        Returns the number of rows submitted. Raises PrepareFailure or ExecuteFailure
        for the first batch that fails; batches after it are not attempted.
        """
        batches = self.plan()
        if not batches:
            logger.debug('nothing to insert into %s', self._table_name)
            return 0

        values = self.values
        submitted = 0
        for batch in batches:
            sql = self._assemble(batch, upsert)
            batch_values = values[batch.value_slice(self.values_per_row)]
            try:
                stmt = executor.prepare(sql)
            except Exception as exc:
                raise PrepareFailure(batch.index, sql, exc) from exc
            try:
                executor.execute(stmt, batch_values)
            except Exception as exc:
                raise ExecuteFailure(batch.index, sql, exc) from exc
            submitted += batch.row_count
            logger.debug(
                'batch %d/%d: %d rows into %s', batch.index + 1, len(batches), batch.row_count, self._table_name
            )

        logger.info('inserted %d rows into %s in %d statement(s)', submitted, self._table_name, len(batches))
        return submitted
