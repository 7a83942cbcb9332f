"""CLI for deleting a LinkedIn post made by a digest run."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from common.cli_helpers import add_profile_args, resolve_profile, setup_logging
from common.errors import DigestError
from publish_digest.linkedin import LinkedInPublisher
from publish_digest.publish import forget_last_post, last_post_id

load_dotenv()

logger = logging.getLogger(__name__)


def parse_delete_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for digest-linkedin-delete."""
    parser = argparse.ArgumentParser(description="Delete a LinkedIn post by URN, or the last one posted.")
    add_profile_args(parser)
    parser.add_argument(
        "--urn",
        default=None,
        help="Post URN to delete (e.g. urn:li:share:123). Defaults to the last post of the profile.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_delete_args(argv)
    setup_logging(args.verbose)

    config, profile = resolve_profile(args)
    state_path = Path(config.state_path)

    try:
        urn = args.urn or last_post_id(state_path, profile.name)
        LinkedInPublisher().delete(urn)
    except DigestError as e:
        logger.error("Delete failed: %s", e)
        return 1

    if not args.urn:
        forget_last_post(state_path, profile.name)
    return 0


if __name__ == "__main__":
    sys.exit(main())
