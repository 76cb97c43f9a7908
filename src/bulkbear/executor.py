from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, Sequence

import sqlalchemy as sa

from bulkbear.placeholders import PARAMSTYLE_PLACEHOLDERS


class Executor(Protocol):
    """Anything that can compile a statement with positional placeholders and run it."""

    def prepare(self, text: str) -> Any:
        ...

    def execute(self, statement: Any, values: Sequence[Any]) -> Any:
        ...


@dataclass
class PreparedStatement:
    text: str
    cursor: Any


class DbapiExecutor:
    """Run batches on the DBAPI connection underneath a sqlalchemy connection.

    The driver must bind a plain sequence of values: qmark (`?`: sqlite3, pyodbc,
    teradatasql) or format/pyformat (`%s`: pymysql, mysqlclient, psycopg).
    Build statements with `placeholder` as the marker.

    A sqlalchemy transaction is begun on the first batch if the connection has
    none yet, so the caller's ``conn.commit()`` or ``engine.begin()`` block
    decides whether the rows are kept.
    """

    def __init__(self, conn: sa.Connection):
        dialect = conn.dialect
        paramstyle = dialect.paramstyle
        if paramstyle not in PARAMSTYLE_PLACEHOLDERS:
            driver = getattr(dialect, 'driver', '')
            raise NotImplementedError(
                f'No positional placeholder for {dialect.name}+{driver} (paramstyle {paramstyle!r})'
            )
        self._conn = conn
        self.paramstyle = paramstyle
        self.placeholder = PARAMSTYLE_PLACEHOLDERS[paramstyle]

    def prepare(self, text: str) -> PreparedStatement:
        if self.placeholder not in text:
            raise ValueError(f'statement has no {self.placeholder!r} placeholders for paramstyle {self.paramstyle!r}')
        if not self._conn.in_transaction():
            self._conn.begin()
        raw = self._conn.connection  # DBAPI connection
        return PreparedStatement(text, raw.cursor())

    def execute(self, statement: PreparedStatement, values: Sequence[Any]) -> int:
        cur = statement.cursor
        try:
            cur.execute(statement.text, tuple(values))
            return cur.rowcount
        finally:
            cur.close()


@dataclass
class DryRunExecutor:
    """Collect statements and their values instead of running them."""
    executed: list[tuple[str, list[Any]]] = field(default_factory=list)

    def prepare(self, text: str) -> str:
        return text

    def execute(self, statement: str, values: Sequence[Any]) -> int:
        self.executed.append((statement, list(values)))
        return 0
