"""Summarize, assemble, publish and archive the active rows of one profile."""

from __future__ import annotations

import logging
import time
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Callable, Optional

from archive_rows.archive import archive_rows
from assemble_document.assemble import build_document, group_links_by_channel, save_document
from assemble_document.models import DocumentBuilder
from assemble_document.render import render_html
from common.config import ProfileConfig
from common.errors import DigestError
from publish_digest.email_body import latest_png
from publish_digest.models import InlineImage, Mailer, PublishAttempt, SocialPublisher, VideoPublisher
from publish_digest.publish import latest_video_info, publish
from publish_digest.recipients import get_email_list
from row_store.base import RowStore, column_index, require_table
from row_store.models import COLUMN_CHANNEL, COLUMN_LINK
from run_digest.models import RunReport, RunStage
from summarize_articles.gemini import GeminiClient
from summarize_articles.models import Summarizer
from upload_videos.upload_videos import upload_pending_videos

logger = logging.getLogger(__name__)


def select_rows(values: list[list[str]], table: str) -> tuple[list[int], list[list[str]], list[dict[str, str]]]:
    """Pick the data rows with an http link.

    Returns:
        (1-based row indices, the rows as read, the rows keyed by header)

    Raises:
        StoreError: If the Link or Channel column is missing.
    """
    header = values[0] if values else []
    link_index = column_index(header, COLUMN_LINK, table)
    column_index(header, COLUMN_CHANNEL, table)

    indices, rows_data, records = [], [], []
    for position, row in enumerate(values[1:], start=2):
        link = str(row[link_index]).strip() if len(row) > link_index else ""
        if not link.startswith("http"):
            continue
        indices.append(position)
        rows_data.append(list(row))
        padded = list(row) + [""] * (len(header) - len(row))
        records.append({column: padded[i] for i, column in enumerate(header)})
    return indices, rows_data, records


def run_digest(
    store: RowStore,
    profile: ProfileConfig,
    summarizer: Summarizer,
    builder: DocumentBuilder,
    mailer: Optional[Mailer] = None,
    social: Optional[SocialPublisher] = None,
    phrase_generator: Optional[GeminiClient] = None,
    video_publisher: Optional[VideoPublisher] = None,
    recipients_list: Optional[str] = None,
    inline_image: Optional[InlineImage] = None,
    state_path: Optional[str | Path] = None,
    archive: bool = True,
    throttle_seconds: float = 2.0,
    sleep: Callable[[float], None] = time.sleep,
    today: Optional[date] = None,
) -> RunReport:
    """
    Run one digest: FETCHED -> CLASSIFIED -> SUMMARIZED -> ASSEMBLED -> PUBLISHED -> ARCHIVED.

    Nothing is archived unless the document was saved. A failure before the
    document is saved marks the run FAILED and leaves every table untouched.
    Publish failures are recorded in the report and never stop archiving.

    Args:
        store: Row store holding the active, archive, video and recipients tables
        profile: Feed profile to run
        summarizer: Produces the title and summary of each article
        builder: Creates and saves the document
        mailer: Email transport (None skips email)
        social: Social publisher (None skips the social post)
        phrase_generator: Model client for the email phrases and video metadata
        video_publisher: When given, pending videos are uploaded before publishing
        recipients_list: Recipient list name (defaults to the profile's list)
        inline_image: Image for the email (defaults to the newest PNG in the video folder)
        state_path: JSON state file for the last social post id
        archive: Move processed rows to the archive table
        throttle_seconds: Pause after each article
        sleep: Sleep function (injectable for tests)
        today: Run date (defaults to today, UTC)

    Returns:
        The run report
    """
    today = today or datetime.now(timezone.utc).date()
    report = RunReport(profile=profile.name)
    logger.info("Starting digest run for %s", profile.name)

    try:
        require_table(store, profile.active_table)
        require_table(store, profile.archive_table)
        values = store.read_values(profile.active_table)
        indices, rows_data, records = select_rows(values, profile.active_table)
    except DigestError as e:
        logger.error("Could not read %s: %s", profile.active_table, e)
        report.fail(e)
        report.finish()
        return report
    report.advance(RunStage.FETCHED)

    if not records:
        logger.info("No new article links found for %s", profile.name)
        report.finish()
        return report
    logger.info("Found %d articles to process", len(records))

    grouped = group_links_by_channel(records)
    report.advance(RunStage.CLASSIFIED)

    title = f"{profile.document_title_prefix}{today.isoformat()}"
    try:
        result = build_document(grouped, summarizer, builder, title, throttle_seconds, sleep)
        report.advance(RunStage.SUMMARIZED)
        save_document(result, builder)
    except (DigestError, OSError) as e:
        logger.error("Failed to assemble document %s: %s", title, e)
        report.fail(e)
        report.finish()
        return report
    report.advance(RunStage.ASSEMBLED)
    report.document_location = result.location
    report.summarized = len(result.succeeded_links)
    report.failed_articles = list(result.failed_links)

    if video_publisher is not None:
        try:
            report.publish_attempts.extend(_upload_videos(store, profile, phrase_generator, video_publisher))
        except (DigestError, ValueError, OSError) as e:
            logger.error("Video upload step failed: %s", e)
            report.publish_attempts.append(PublishAttempt(channel="video", success=False, error=str(e)))

    if mailer is not None or social is not None:
        try:
            if inline_image is None and profile.video_source_dir:
                inline_image = latest_png(profile.video_source_dir)
            report.publish_attempts.extend(
                publish(
                    render_html(result.document),
                    get_email_list(store, profile.recipients_table, recipients_list or profile.recipients_list),
                    mailer,
                    profile,
                    video=latest_video_info(store, profile.video_table, profile),
                    social=social,
                    phrase_generator=phrase_generator,
                    inline_image=inline_image,
                    state_path=state_path,
                    today=today,
                )
            )
        except (DigestError, ValueError, OSError) as e:
            logger.error("Publish step failed before any channel was tried: %s", e)
            report.publish_attempts.append(PublishAttempt(channel="publish", success=False, error=str(e)))
    report.advance(RunStage.PUBLISHED)

    if not archive:
        logger.info("Archiving skipped. %d rows stay in %s", len(rows_data), profile.active_table)
        report.finish()
        return report

    if not profile.archive_failed_articles:
        failed = set(result.failed_links)
        keep = [i for i, row in enumerate(records) if row.get(COLUMN_LINK, "").strip() not in failed]
        indices = [indices[i] for i in keep]
        rows_data = [rows_data[i] for i in keep]
        if failed:
            logger.info("Leaving %d failed articles in %s for the next run", len(failed), profile.active_table)

    report.archived = archive_rows(store, profile.active_table, profile.archive_table, indices, rows_data)
    report.advance(RunStage.ARCHIVED)
    report.finish()
    logger.info(
        "Digest run for %s finished: %d summarized, %d failed, %d archived",
        profile.name,
        report.summarized,
        len(report.failed_articles),
        report.archived,
    )
    return report


def _upload_videos(
    store: RowStore,
    profile: ProfileConfig,
    client: Optional[GeminiClient],
    publisher: VideoPublisher,
) -> list[PublishAttempt]:
    if client is None:
        logger.warning("No model client for video metadata. Video upload skipped.")
        return [PublishAttempt(channel="video", success=False, error="no model client")]

    attempts = []
    for upload in upload_pending_videos(store, profile, client, publisher):
        attempts.append(
            PublishAttempt(
                channel="video",
                success=upload.success,
                error=upload.error,
                detail=upload.link or upload.file_name,
            )
        )
    return attempts
