"""Bucket posts by channel, cap each channel, and drop duplicate or archived links."""

import logging
from typing import Iterable, Sequence

from common.datetime import format_display_date
from fetch_posts.models import Post
from row_store.models import ActiveRow

logger = logging.getLogger(__name__)

DEFAULT_MAX_PER_CHANNEL = 10


def classify_posts(
    posts: Iterable[Post],
    channels: Sequence[str],
    archive_links: Iterable[str] = (),
    max_per_channel: int = DEFAULT_MAX_PER_CHANNEL,
    exclude_title_patterns: Sequence[str] = (),
) -> dict[str, list[Post]]:
    """
    Group posts by channel and deduplicate them by link.

    Args:
        posts: Posts from the feed, in any order
        channels: Channel catalog; its order decides which channel wins a shared link
        archive_links: Links already processed in earlier runs
        max_per_channel: Keep only the N newest posts per channel
        exclude_title_patterns: Posts whose title contains any of these are dropped

    Returns:
        Mapping of channel to its posts, newest first. A link appears under at
        most one channel; channels left empty are omitted.
    """
    archived = {str(link).strip() for link in archive_links}
    catalog = set(channels)

    by_channel: dict[str, list[Post]] = {channel: [] for channel in channels}
    for post in posts:
        if any(pattern in post.title for pattern in exclude_title_patterns):
            logger.debug("Excluding post by title: %s", post.title)
            continue
        matched = [category for category in post.categories if category in catalog]
        if not matched:
            logger.debug("No channel match for post: %s %s", post.link, sorted(post.categories))
            continue
        for channel in matched:
            by_channel[channel].append(post)

    emitted_links: set[str] = set()
    results: dict[str, list[Post]] = {}
    skipped_duplicates = 0
    skipped_archived = 0

    for channel in channels:
        latest = sorted(by_channel[channel], key=lambda p: p.published_at, reverse=True)
        latest = latest[:max_per_channel]

        kept = []
        for post in latest:
            if post.link in emitted_links:
                skipped_duplicates += 1
                continue
            emitted_links.add(post.link)
            if post.link.strip() in archived:
                skipped_archived += 1
                continue
            kept.append(post)

        if kept:
            results[channel] = kept

    logger.info(
        "Classified %d posts into %d channels (%d cross-channel duplicates, %d already archived)",
        sum(len(v) for v in results.values()),
        len(results),
        skipped_duplicates,
        skipped_archived,
    )
    return results


def flatten_rows(grouped: dict[str, list[Post]]) -> list[ActiveRow]:
    """Flatten grouped posts into active-table rows in channel insertion order."""
    rows = []
    for channel, posts in grouped.items():
        for post in posts:
            rows.append(
                ActiveRow(
                    channel=channel,
                    title=post.title,
                    link=post.link,
                    publication_date=format_display_date(post.published_at),
                )
            )
    return rows
