"""Fetch the feed and refill the active table with new, unique posts."""

import logging
from datetime import datetime, timezone

from archive_rows.archive import archived_links
from classify_posts.classify_posts import classify_posts, flatten_rows
from common.config import ProfileConfig
from common.errors import FetchError, ParseError
from fetch_posts.fetch_feed import fetch_posts
from row_store.base import RowStore, require_table
from row_store.models import ACTIVE_HEADER, STATUS_HEADER, ActiveRow

logger = logging.getLogger(__name__)

FEED_ERROR_MESSAGE = "Error fetching or parsing RSS feed."


def collect_posts(store: RowStore, profile: ProfileConfig, timeout: int = 30) -> list[ActiveRow]:
    """Fetch, classify and write the active table for one profile.

    The archive table must exist before anything is touched. If the feed
    cannot be fetched or parsed, the active rows are left as they are and an
    error marker is written to the profile's status table.

    Returns:
        The rows written to the active table
    """
    require_table(store, profile.archive_table)
    store.create_table(profile.active_table, ACTIVE_HEADER)

    try:
        posts = fetch_posts(profile.feed_url, timeout=timeout)
    except (FetchError, ParseError) as e:
        logger.error("%s %s", FEED_ERROR_MESSAGE, e)
        write_error_marker(store, profile, str(e))
        raise

    grouped = classify_posts(
        posts,
        channels=profile.channels,
        archive_links=archived_links(store, profile.archive_table, profile.link_position),
        max_per_channel=profile.max_per_channel,
        exclude_title_patterns=profile.exclude_title_patterns,
    )
    rows = flatten_rows(grouped)

    store.clear(profile.active_table)
    store.write_rows(profile.active_table, 1, [ACTIVE_HEADER] + [row.to_values() for row in rows])
    if not rows:
        logger.info("No new posts found for %s", profile.name)

    logger.info("Wrote %d rows to %s", len(rows), profile.active_table)
    return rows


def write_error_marker(store: RowStore, profile: ProfileConfig, reason: str) -> None:
    """Append a visible error row to the status table without touching the active rows."""
    store.create_table(profile.status_table, STATUS_HEADER)
    store.append_rows(
        profile.status_table,
        [[datetime.now(timezone.utc).isoformat(), FEED_ERROR_MESSAGE, reason]],
    )
