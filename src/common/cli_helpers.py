"""Common CLI helper utilities."""

from __future__ import annotations

import argparse
import logging

from common.config import DigestConfig, ProfileConfig, load_config


def setup_logging(verbose: bool = False) -> None:
    """Configure standard logging format for CLI tools."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def add_profile_args(parser: argparse.ArgumentParser) -> None:
    """Add the --profile/--config/--verbose arguments every digest CLI accepts."""
    parser.add_argument(
        "--profile",
        required=True,
        help="Feed profile to run (e.g. gcp, gws).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Config name in configs/ or path to a YAML file (default: $DIGEST_CONFIG or prod).",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")


def resolve_profile(args: argparse.Namespace) -> tuple[DigestConfig, ProfileConfig]:
    """Load the config named by the CLI args and select the requested profile."""
    config = load_config(args.config)
    return config, config.profile(args.profile)

