"""CLI for uploading pending videos of a feed profile."""

from __future__ import annotations

import argparse
import logging
import sys

from dotenv import load_dotenv

from common.cli_helpers import add_profile_args, resolve_profile, setup_logging
from common.errors import DigestError
from common.local_io import save_jsonl_records_local
from publish_digest.youtube import YouTubePublisher
from row_store.csv_store import CsvRowStore
from summarize_articles.gemini import GeminiClient
from upload_videos.upload_videos import upload_pending_videos

load_dotenv()

logger = logging.getLogger(__name__)


def parse_videos_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for digest-videos."""
    parser = argparse.ArgumentParser(description="Upload pending MP4 videos to YouTube.")
    add_profile_args(parser)
    parser.add_argument("--source-dir", default=None, help="Override the profile's video source folder")
    parser.add_argument("--destination-dir", default=None, help="Override the profile's uploaded folder")
    parser.add_argument("--poll-interval", type=float, default=30.0, help="Seconds between processing checks")
    parser.add_argument("--max-polls", type=int, default=20, help="Processing checks before giving up")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_videos_args(argv)
    setup_logging(args.verbose)

    config, profile = resolve_profile(args)

    try:
        client = GeminiClient(config.summarizer)
        publisher = YouTubePublisher(
            privacy_status=profile.video_privacy,
            language=profile.video_language,
            poll_interval=args.poll_interval,
            max_polls=args.max_polls,
        )
        results = upload_pending_videos(
            CsvRowStore(config.store_dir),
            profile,
            client,
            publisher,
            source_dir=args.source_dir,
            destination_dir=args.destination_dir,
        )
    except DigestError as e:
        logger.error("Video upload failed for %s: %s", profile.name, e)
        return 1

    if results:
        save_jsonl_records_local(results, prefix=f"video_uploads_{profile.name}", output_dir=config.output_dir)
    return 0 if all(r.success for r in results) else 1


if __name__ == "__main__":
    sys.exit(main())
