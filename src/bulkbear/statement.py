from __future__ import annotations

from typing import Sequence

UPSERT_KEYWORDS = ' ON DUPLICATE KEY UPDATE '
COLUMN_SEPARATOR = ', '


def statement_prefix(table_name: str, columns: Sequence[str]) -> str:
    """`INSERT INTO <table>(<columns>) VALUES `, ready for placeholder groups."""
    return f'INSERT INTO {table_name}({COLUMN_SEPARATOR.join(columns)}) VALUES '


def upsert_clause(columns: Sequence[str]) -> str:
    """Update every column from the row that collided, e.g. ``a=VALUES(a),b=VALUES(b)``."""
    return UPSERT_KEYWORDS + ','.join(f'{c}=VALUES({c})' for c in columns)


def assemble(prefix: str, placeholder_text: str, columns: Sequence[str], upsert: bool = False) -> str:
    sql = prefix + placeholder_text
    if upsert:
        sql += upsert_clause(columns)
    return sql
