"""In-memory row store, used by tests and dry runs."""

from __future__ import annotations

from typing import Sequence

from common.errors import StoreError
from row_store.base import rows_to_dicts


class MemoryRowStore:
    def __init__(self, tables: dict[str, list[list[str]]] | None = None) -> None:
        self.tables: dict[str, list[list[str]]] = {
            name: [list(map(str, row)) for row in rows] for name, rows in (tables or {}).items()
        }

    def _table(self, table: str) -> list[list[str]]:
        if table not in self.tables:
            raise StoreError(f"Table '{table}' not found")
        return self.tables[table]

    def has_table(self, table: str) -> bool:
        return table in self.tables

    def create_table(self, table: str, header: Sequence[str]) -> None:
        if table not in self.tables:
            self.tables[table] = [list(header)] if header else []

    def read_values(self, table: str) -> list[list[str]]:
        return [list(row) for row in self._table(table)]

    def read_all(self, table: str) -> list[dict[str, str]]:
        return rows_to_dicts(self._table(table))

    def write_rows(self, table: str, start_row: int, rows: Sequence[Sequence[str]]) -> None:
        if start_row < 1:
            raise StoreError(f"Row indices are 1-based, got {start_row}")
        data = self._table(table)
        while len(data) < start_row - 1:
            data.append([])
        for offset, row in enumerate(rows):
            position = start_row - 1 + offset
            values = [str(v) for v in row]
            if position < len(data):
                data[position] = values
            else:
                data.append(values)

    def append_rows(self, table: str, rows: Sequence[Sequence[str]]) -> None:
        self._table(table).extend([str(v) for v in row] for row in rows)

    def delete_row(self, table: str, row_index: int) -> None:
        data = self._table(table)
        if not 1 <= row_index <= len(data):
            raise StoreError(f"Row {row_index} out of range for table '{table}' ({len(data)} rows)")
        del data[row_index - 1]

    def clear(self, table: str) -> None:
        self._table(table).clear()
