"""Move consumed rows from the active table to the archive table."""

from __future__ import annotations

import logging
from typing import Sequence

from row_store.base import RowStore, delete_rows, require_table

logger = logging.getLogger(__name__)


def archive_rows(
    store: RowStore,
    table: str,
    old_table: str,
    row_indices: Sequence[int],
    rows_data: Sequence[Sequence[str]],
) -> int:
    """Append rows to the archive, then delete them from the active table.

    Only call this once the rows have been written into the outgoing
    document. The archive append happens first, so an interrupted run leaves
    a row duplicated in both tables rather than lost.

    Args:
        store: Row store holding both tables
        table: Active table name
        old_table: Archive table name
        row_indices: 1-based indices of the rows in the active table
        rows_data: The rows as read, appended to the archive verbatim

    Returns:
        Number of rows moved
    """
    if len(row_indices) != len(rows_data):
        raise ValueError(
            f"row_indices ({len(row_indices)}) and rows_data ({len(rows_data)}) must have the same length"
        )
    if not rows_data:
        logger.info("No rows to archive from %s", table)
        return 0

    require_table(store, table)
    require_table(store, old_table)

    store.append_rows(old_table, rows_data)
    delete_rows(store, table, row_indices)

    logger.info("Moved %d rows from %s to %s", len(rows_data), table, old_table)
    return len(rows_data)


def archived_links(store: RowStore, old_table: str, link_position: int = 2) -> set[str]:
    """Links already in the archive table, read by fixed column position.

    The archive can grow without bound, so the link column is read
    positionally rather than looked up by header on every row.
    """
    require_table(store, old_table)
    values = store.read_values(old_table)
    links = set()
    for row in values:
        if len(row) > link_position:
            link = str(row[link_position]).strip()
            if link:
                links.add(link)
    return links


def remove_archived_rows(
    store: RowStore,
    table: str,
    old_table: str,
    link_position: int = 2,
    exclude_title_patterns: Sequence[str] = (),
    title_position: int = 1,
) -> int:
    """Delete active rows whose link is already archived or whose title is excluded.

    Returns:
        Number of rows deleted
    """
    require_table(store, table)
    if not store.has_table(old_table):
        logger.warning("Archive table '%s' not found. No duplicates can be removed.", old_table)
        return 0

    old_links = archived_links(store, old_table, link_position)
    logger.info("Found %d unique links in %s to compare against", len(old_links), old_table)

    values = store.read_values(table)
    to_delete = []
    # Row 1 is the header
    for position, row in enumerate(values[1:], start=2):
        link = str(row[link_position]).strip() if len(row) > link_position else ""
        title = str(row[title_position]) if len(row) > title_position else ""
        if link in old_links or any(pattern in title for pattern in exclude_title_patterns):
            to_delete.append(position)

    delete_rows(store, table, to_delete)
    logger.info("Removed %d archived or excluded rows from %s", len(to_delete), table)
    return len(to_delete)
