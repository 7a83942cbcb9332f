"""CLI for running the daily digest of a feed profile."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from assemble_document.store import LocalDocumentStore
from classify_posts.collect import collect_posts
from common.cli_helpers import add_profile_args, resolve_profile, setup_logging
from common.errors import DigestError
from common.local_io import save_jsonl_records_local
from publish_digest.linkedin import LinkedInPublisher
from publish_digest.mailer import SmtpMailer
from publish_digest.youtube import YouTubePublisher
from row_store.csv_store import CsvRowStore
from run_digest.pipeline import run_digest
from summarize_articles.gemini import GeminiClient
from summarize_articles.summarize import GeminiSummarizer

load_dotenv()

logger = logging.getLogger(__name__)

TEST_RECIPIENTS_LIST = "Testing"


def parse_run_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for digest-run."""
    parser = argparse.ArgumentParser(
        description="Summarize the active table into a document, publish it and archive the rows."
    )
    add_profile_args(parser)
    parser.add_argument("--collect", action="store_true", help="Fetch the feed into the active table first")
    parser.add_argument("--upload-videos", action="store_true", help="Upload pending videos before publishing")
    parser.add_argument("--skip-email", action="store_true", help="Do not send the digest email")
    parser.add_argument("--skip-social", action="store_true", help="Do not post to LinkedIn")
    parser.add_argument(
        "--test-recipients",
        action="store_true",
        help=f"Email only the '{TEST_RECIPIENTS_LIST}' list, skip social and keep the active rows",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Build the document without publishing or archiving anything",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_run_args(argv)
    setup_logging(args.verbose)

    config, profile = resolve_profile(args)
    store = CsvRowStore(config.store_dir)
    publish_enabled = not args.dry_run

    try:
        if args.collect:
            collect_posts(store, profile)

        client = GeminiClient(config.summarizer)
        mailer = SmtpMailer.from_env() if publish_enabled and not args.skip_email else None
        social = None
        if publish_enabled and not args.skip_social and not args.test_recipients:
            social = LinkedInPublisher()
        video_publisher = None
        if publish_enabled and args.upload_videos:
            video_publisher = YouTubePublisher(privacy_status=profile.video_privacy, language=profile.video_language)

        report = run_digest(
            store,
            profile,
            GeminiSummarizer(client, platform=profile.platform_name),
            LocalDocumentStore(Path(config.output_dir) / "documents" / profile.name),
            mailer=mailer,
            social=social,
            phrase_generator=client,
            video_publisher=video_publisher,
            recipients_list=TEST_RECIPIENTS_LIST if args.test_recipients else None,
            state_path=config.state_path,
            archive=publish_enabled and not args.test_recipients,
            throttle_seconds=config.summarizer.throttle_seconds,
        )
    except DigestError as e:
        logger.error("Digest run failed for %s: %s", profile.name, e)
        return 1

    save_jsonl_records_local([report], prefix=f"run_report_{profile.name}", output_dir=config.output_dir)

    failed_publish = [a.channel for a in report.publish_attempts if not a.success]
    if failed_publish:
        logger.warning("Publish failed for: %s", ", ".join(failed_publish))
    return 0 if report.succeeded else 1


if __name__ == "__main__":
    sys.exit(main())
