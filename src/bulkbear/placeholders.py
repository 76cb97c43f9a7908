from __future__ import annotations

from bulkbear.errors import ConfigurationError

PLACEHOLDER = '?'
GROUP_SEPARATOR = ','

# positional marker for each DBAPI paramstyle that binds a plain sequence of values
PARAMSTYLE_PLACEHOLDERS = {
    'qmark': '?',
    'format': '%s',
    'pyformat': '%s',
}


def placeholder_group(values_per_row: int, placeholder: str = PLACEHOLDER) -> str:
    """Placeholder text for one row, including the trailing separator.

    For two values per row this is ``(?,?),``, or ``(%s,%s),`` with ``placeholder='%s'``.
    """
    if values_per_row < 1:
        raise ConfigurationError(f'values_per_row must be at least 1, got {values_per_row}')
    return '(' + GROUP_SEPARATOR.join(placeholder for _ in range(values_per_row)) + ')' + GROUP_SEPARATOR


def placeholder_rows(group: str, rows: int) -> str:
    """Repeat one row's placeholder `group` for `rows` rows, without a dangling separator."""
    if rows <= 0:
        return ''
    return (group * rows)[:-len(GROUP_SEPARATOR)]


def count_placeholders(text: str, placeholder: str = PLACEHOLDER) -> int:
    return text.count(placeholder)
