from __future__ import annotations

# ceiling on bind parameters per statement; stays below mysql's hard 65535
DEFAULT_PLACEHOLDER_LIMIT = 60_000

# per-dialect bind parameter ceilings, keyed by sqlalchemy dialect name
PLACEHOLDER_LIMITS: dict[str, int] = {
    'mysql': 60_000,
    'mariadb': 60_000,
    'sqlite': 999,  # SQLITE_MAX_VARIABLE_NUMBER on builds older than 3.32
    'postgresql': 32_767,
    'mssql': 2_100,
    'oracle': 65_535,
}

# dialects that accept `ON DUPLICATE KEY UPDATE`
UPSERT_DIALECTS = frozenset({'mysql', 'mariadb'})


def placeholder_limit_for(dialect_name: str | None) -> int:
    """Return the placeholder limit for a dialect, or the default when it is unknown."""
    if not dialect_name:
        return DEFAULT_PLACEHOLDER_LIMIT
    return PLACEHOLDER_LIMITS.get(dialect_name.lower(), DEFAULT_PLACEHOLDER_LIMIT)
