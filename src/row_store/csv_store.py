"""Row store backed by one CSV file per table."""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import Sequence

from common.errors import StoreError
from common.local_io import write_text_atomic
from row_store.base import rows_to_dicts

logger = logging.getLogger(__name__)


class CsvRowStore:
    """Tables live in ``<directory>/<table>.csv``; every mutation rewrites the file atomically."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def _path(self, table: str) -> Path:
        return self.directory / f"{table}.csv"

    def _load(self, table: str) -> list[list[str]]:
        path = self._path(table)
        if not path.exists():
            raise StoreError(f"Table '{table}' not found at {path}")
        with path.open(newline="", encoding="utf-8") as f:
            return [row for row in csv.reader(f)]

    def _dump(self, table: str, rows: list[list[str]]) -> None:
        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerows(rows)
        write_text_atomic(self._path(table), buffer.getvalue())

    def has_table(self, table: str) -> bool:
        return self._path(table).exists()

    def create_table(self, table: str, header: Sequence[str]) -> None:
        if self.has_table(table):
            return
        logger.info("Creating table %s in %s", table, self.directory)
        self._dump(table, [list(header)] if header else [])

    def read_values(self, table: str) -> list[list[str]]:
        return self._load(table)

    def read_all(self, table: str) -> list[dict[str, str]]:
        return rows_to_dicts(self._load(table))

    def write_rows(self, table: str, start_row: int, rows: Sequence[Sequence[str]]) -> None:
        if start_row < 1:
            raise StoreError(f"Row indices are 1-based, got {start_row}")
        data = self._load(table)
        while len(data) < start_row - 1:
            data.append([])
        for offset, row in enumerate(rows):
            position = start_row - 1 + offset
            values = [str(v) for v in row]
            if position < len(data):
                data[position] = values
            else:
                data.append(values)
        self._dump(table, data)

    def append_rows(self, table: str, rows: Sequence[Sequence[str]]) -> None:
        data = self._load(table)
        data.extend([str(v) for v in row] for row in rows)
        self._dump(table, data)

    def delete_row(self, table: str, row_index: int) -> None:
        data = self._load(table)
        if not 1 <= row_index <= len(data):
            raise StoreError(f"Row {row_index} out of range for table '{table}' ({len(data)} rows)")
        del data[row_index - 1]
        self._dump(table, data)

    def clear(self, table: str) -> None:
        self._load(table)
        self._dump(table, [])
