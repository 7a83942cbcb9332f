"""CLI for collecting the latest posts of a feed profile into the active table."""

from __future__ import annotations

import argparse
import logging
import sys

from dotenv import load_dotenv

from archive_rows.archive import remove_archived_rows
from classify_posts.collect import collect_posts
from common.cli_helpers import add_profile_args, resolve_profile, setup_logging
from common.errors import DigestError
from row_store.csv_store import CsvRowStore

load_dotenv()

logger = logging.getLogger(__name__)


def parse_collect_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for digest-collect."""
    parser = argparse.ArgumentParser(description="Fetch a blog feed into the active table.")
    add_profile_args(parser)
    parser.add_argument("--timeout", type=int, default=30, help="Feed request timeout in seconds")
    parser.add_argument(
        "--dedup-only",
        action="store_true",
        help="Only drop active rows that are already archived or excluded, without fetching the feed",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_collect_args(argv)
    setup_logging(args.verbose)

    config, profile = resolve_profile(args)
    store = CsvRowStore(config.store_dir)

    try:
        if args.dedup_only:
            removed = remove_archived_rows(
                store,
                profile.active_table,
                profile.archive_table,
                link_position=profile.link_position,
                exclude_title_patterns=profile.exclude_title_patterns,
            )
            logger.info("Removed %d rows from %s", removed, profile.active_table)
            return 0
        rows = collect_posts(store, profile, timeout=args.timeout)
    except DigestError as e:
        logger.error("Collect failed for %s: %s", profile.name, e)
        return 1

    logger.info("Collected %d new posts for %s", len(rows), profile.name)
    return 0


if __name__ == "__main__":
    sys.exit(main())
