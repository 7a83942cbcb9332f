"""Row store interface.

A row store holds named tables of display strings. Row indices are 1-based
and row 1 is the header; data rows start at index 2.
"""

from __future__ import annotations

import logging
from typing import Iterable, Protocol, Sequence

from common.errors import StoreError

logger = logging.getLogger(__name__)

HEADER_ROW = 1


class RowStore(Protocol):
    def has_table(self, table: str) -> bool: ...

    def create_table(self, table: str, header: Sequence[str]) -> None: ...

    def read_values(self, table: str) -> list[list[str]]:
        """All rows (header included) as positional lists of display strings."""
        ...

    def read_all(self, table: str) -> list[dict[str, str]]:
        """Data rows as mappings keyed by header text."""
        ...

    def write_rows(self, table: str, start_row: int, rows: Sequence[Sequence[str]]) -> None: ...

    def append_rows(self, table: str, rows: Sequence[Sequence[str]]) -> None: ...

    def delete_row(self, table: str, row_index: int) -> None: ...

    def clear(self, table: str) -> None: ...


def column_index(header: Sequence[str], name: str, table: str = "") -> int:
    """Return the 0-based position of a column by its header text.

    Raises:
        StoreError: If the header has no such column.
    """
    try:
        return list(header).index(name)
    except ValueError:
        raise StoreError(f"Column '{name}' not found in table '{table}'") from None


def require_table(store: RowStore, table: str) -> None:
    """Raise StoreError if the table does not exist."""
    if not store.has_table(table):
        raise StoreError(f"Table '{table}' not found")


def delete_rows(store: RowStore, table: str, row_indices: Iterable[int]) -> list[int]:
    """Delete rows from the highest index to the lowest.

    Deleting a row shifts every row below it up by one, so deleting in
    ascending order would remove the wrong rows after the first delete.

    Returns:
        The indices in the order they were deleted.
    """
    ordered = sorted(set(row_indices), reverse=True)
    for row_index in ordered:
        if row_index <= HEADER_ROW:
            raise StoreError(f"Refusing to delete header or invalid row {row_index} in '{table}'")
        store.delete_row(table, row_index)
    logger.debug("Deleted %d rows from %s: %s", len(ordered), table, ordered)
    return ordered


def rows_to_dicts(values: list[list[str]]) -> list[dict[str, str]]:
    """Convert positional rows (header first) to header-keyed mappings."""
    if not values:
        return []
    header = values[0]
    results = []
    for row in values[1:]:
        padded = list(row) + [""] * (len(header) - len(row))
        results.append({column: padded[i] for i, column in enumerate(header)})
    return results
