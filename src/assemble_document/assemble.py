"""Summarize active rows channel by channel into a document."""

import logging
import time
from typing import Callable

from assemble_document.models import AssemblyResult, DocumentBuilder
from common.errors import DigestError
from row_store.models import COLUMN_CHANNEL, COLUMN_LINK
from summarize_articles.models import Summarizer

logger = logging.getLogger(__name__)

DEFAULT_CHANNEL = "General"
HEADING_PREFIX = "Noticias "


def group_links_by_channel(rows: list[dict[str, str]]) -> dict[str, list[str]]:
    """Group article links by channel, keeping row order within a channel.

    Rows whose link does not start with "http" are ignored; rows with no
    channel are filed under "General".
    """
    grouped: dict[str, list[str]] = {}
    for row in rows:
        link = (row.get(COLUMN_LINK) or "").strip()
        if not link.startswith("http"):
            continue
        channel = (row.get(COLUMN_CHANNEL) or "").strip() or DEFAULT_CHANNEL
        grouped.setdefault(channel, []).append(link)
    return grouped


def build_document(
    grouped: dict[str, list[str]],
    summarizer: Summarizer,
    builder: DocumentBuilder,
    title: str,
    throttle_seconds: float = 2.0,
    sleep: Callable[[float], None] = time.sleep,
) -> AssemblyResult:
    """
    Summarize every link into a document with one section per channel.

    A failed article becomes an inline error marker and the batch carries on.
    Errors that are not recoverable, such as a missing API key, abort the batch.

    Args:
        grouped: Channel to article links
        summarizer: Produces the title and summary for each link
        builder: Creates the document
        title: Document title
        throttle_seconds: Pause after each article to stay under provider rate limits
        sleep: Sleep function (injectable for tests)

    Returns:
        AssemblyResult with the unsaved document and per-link outcome
    """
    document = builder.create(title)
    result = AssemblyResult(document=document)

    for channel in sorted(grouped):
        document.add_heading(f"{HEADING_PREFIX}{channel}")
        logger.info("Processing channel: %s", channel)

        for link in grouped[channel]:
            try:
                summary = summarizer.summarize(link)
            except DigestError as e:
                if not e.recoverable:
                    raise
                logger.warning("Error summarizing %s: %s", link, e)
                document.add_error(link, str(e))
                result.failed_links.append(link)
            else:
                document.add_entry(summary.title or "Summary", link, summary.body)
                result.succeeded_links.append(link)
                logger.info("-- Summarized: %s", link)

            if throttle_seconds > 0:
                sleep(throttle_seconds)

    return result


def assemble_document(
    grouped: dict[str, list[str]],
    summarizer: Summarizer,
    builder: DocumentBuilder,
    title: str,
    throttle_seconds: float = 2.0,
    sleep: Callable[[float], None] = time.sleep,
) -> AssemblyResult:
    """Build the document and save it through the builder."""
    result = build_document(grouped, summarizer, builder, title, throttle_seconds, sleep)
    return save_document(result, builder)


def save_document(result: AssemblyResult, builder: DocumentBuilder) -> AssemblyResult:
    result.location = builder.save(result.document)
    logger.info(
        "Document saved to %s (%d summarized, %d failed)",
        result.location,
        len(result.succeeded_links),
        len(result.failed_links),
    )
    return result
