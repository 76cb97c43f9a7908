from __future__ import annotations

from typing import Sequence

import polars as pl
import sqlalchemy as sa

from bulkbear.builder import BulkInsert
from bulkbear.config import UPSERT_DIALECTS, placeholder_limit_for
from bulkbear.executor import DbapiExecutor


def bulk_insert_frame(
        conn: sa.Connection,
        df: pl.DataFrame,
        table_name: str,
        columns: Sequence[str] | None = None,
        *,
        upsert: bool = False,
        placeholder_limit: int | None = None,
) -> int:
    """Insert a polars DataFrame with multi-row statements over `conn`.

    Parameters:
        conn : sqlalchemy.Connection
            Open connection; commit/rollback stays with the caller's transaction.
        df : polars.DataFrame
            Rows to insert.
        table_name : str
            Target table, e.g. "heroes" or "dbo.heroes".
        columns : Sequence[str] | None
            Columns to insert; defaults to every column of `df`.
        upsert : bool, default False
            Update existing rows on duplicate keys (MySQL/MariaDB only).
        placeholder_limit : int | None
            Parameters per statement; derived from the connection's dialect when omitted.
    """
    dialect = conn.dialect.name
    driver = getattr(conn.dialect, 'driver', '')  # e.g. 'pysqlite', 'pymysql'

    if upsert and dialect not in UPSERT_DIALECTS:
        raise NotImplementedError(f'ON DUPLICATE KEY UPDATE is not available for {dialect}+{driver}')

    # raises NotImplementedError for drivers without positional parameters
    executor = DbapiExecutor(conn)

    if placeholder_limit is None:
        placeholder_limit = placeholder_limit_for(dialect)

    bulk = BulkInsert(table_name, list(columns) if columns is not None else df.columns,
                      placeholder_limit=placeholder_limit, placeholder=executor.placeholder)
    bulk.add_frame(df)
    return bulk.insert(executor, upsert=upsert)
