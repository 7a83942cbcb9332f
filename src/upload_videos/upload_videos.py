"""Upload new local videos to YouTube and record them in the video overview table."""

from __future__ import annotations

import base64
import logging
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from common.config import ProfileConfig
from common.errors import DigestError, ModelError
from publish_digest.models import PollOutcome, VideoMetadata, VideoPublisher
from publish_digest.youtube import watch_url
from row_store.base import RowStore
from row_store.models import VIDEO_HEADER
from summarize_articles.gemini import GeminiClient
from summarize_articles.instructions import VIDEO_METADATA_INSTRUCTIONS
from upload_videos.models import VideoUploadResult

logger = logging.getLogger(__name__)

# Base64 adds about a third, keeping the request near 20MB
MAX_INLINE_VIDEO_BYTES = 15 * 1024 * 1024
MAX_TITLE_LENGTH = 100


def find_pending_videos(source_dir: str | Path) -> list[Path]:
    folder = Path(source_dir)
    if not folder.is_dir():
        logger.warning("Video source folder not found: %s", folder)
        return []
    return sorted(p for p in folder.iterdir() if p.is_file() and p.suffix.lower() == ".mp4")


def generate_video_metadata(client: GeminiClient, path: Path) -> VideoMetadata:
    """Ask the model for a title, description and tags for a video.

    Files under 15MB are sent inline; larger ones are described from the
    file name alone.

    Raises:
        ModelError: If the model fails or returns JSON without the expected keys.
    """
    size = path.stat().st_size
    if size < MAX_INLINE_VIDEO_BYTES:
        encoded = base64.b64encode(path.read_bytes()).decode("ascii")
        data = client.generate_json(
            VIDEO_METADATA_INSTRUCTIONS,
            extra_parts=[{"inline_data": {"mime_type": "video/mp4", "data": encoded}}],
        )
    else:
        logger.info(
            "Video %s is too large (%.2fMB) for inline analysis. Using the file name instead.",
            path.name,
            size / (1024 * 1024),
        )
        data = client.generate_json(f'{VIDEO_METADATA_INSTRUCTIONS}\n\nVideo Filename (Fallback): "{path.name}"')

    try:
        title = str(data["title"]).strip()[:MAX_TITLE_LENGTH]
        description = str(data["description"]).strip()
        tags = [str(tag).replace(",", " ").strip() for tag in data.get("tags") or []]
    except (KeyError, TypeError, AttributeError) as e:
        raise ModelError(f"Video metadata response is missing fields: {e}") from e

    if not title:
        raise ModelError("Video metadata response has an empty title")
    return VideoMetadata(title=title, description=description, tags=[t for t in tags if t])


def record_video(store: RowStore, table: str, link: str, metadata: VideoMetadata, created: datetime) -> None:
    store.create_table(table, VIDEO_HEADER)
    store.append_rows(table, [[link, metadata.title, metadata.description, created.isoformat()]])
    logger.info("Logged video to %s", table)


def upload_pending_videos(
    store: RowStore,
    profile: ProfileConfig,
    client: GeminiClient,
    publisher: VideoPublisher,
    source_dir: Optional[str | Path] = None,
    destination_dir: Optional[str | Path] = None,
) -> list[VideoUploadResult]:
    """
    Upload every MP4 waiting in the source folder.

    For each file: generate metadata, upload, wait for processing, append a
    row to the video table and move the file to the destination folder. A
    video whose processing times out is still recorded, since YouTube keeps
    processing it. A video whose processing fails stays in the source folder.
    One failing video never stops the others.

    Returns:
        One result per video file found
    """
    source = Path(source_dir or profile.video_source_dir)
    destination = Path(destination_dir or profile.video_destination_dir)
    videos = find_pending_videos(source)
    if not videos:
        logger.info("No new MP4 videos found for %s", profile.name)
        return []

    results = []
    for path in videos:
        logger.info("Processing video: %s", path.name)
        try:
            results.append(_upload_one(store, profile, client, publisher, path, destination))
        except (DigestError, ValueError, OSError) as e:
            logger.error("An error occurred while processing %s: %s", path.name, e)
            results.append(VideoUploadResult(file_name=path.name, success=False, error=str(e)))

    uploaded = sum(1 for r in results if r.success)
    logger.info("Processed %d videos for %s (%d uploaded)", len(results), profile.name, uploaded)
    return results


def _upload_one(
    store: RowStore,
    profile: ProfileConfig,
    client: GeminiClient,
    publisher: VideoPublisher,
    path: Path,
    destination: Path,
) -> VideoUploadResult:
    metadata = generate_video_metadata(client, path)
    logger.debug("Generated metadata for %s: %s", path.name, metadata)

    video_id = publisher.upload(path, metadata)
    poll = publisher.wait_for_processing(video_id)
    link = watch_url(video_id)

    if poll.outcome == PollOutcome.FAILED:
        logger.error("YouTube processing failed for %s (%s): %s", path.name, video_id, poll.status)
        return VideoUploadResult(
            file_name=path.name,
            success=False,
            video_id=video_id,
            link=link,
            title=metadata.title,
            outcome=poll.outcome,
            error=f"processing failed: {poll.status}",
        )
    if poll.outcome == PollOutcome.TIMEOUT:
        logger.warning("Video %s still processing after %d polls. Recording it anyway.", video_id, poll.polls)

    record_video(store, profile.video_table, link, metadata, datetime.now(timezone.utc))

    destination.mkdir(parents=True, exist_ok=True)
    shutil.move(str(path), str(destination / path.name))
    logger.info("Moved %s to %s", path.name, destination)

    return VideoUploadResult(
        file_name=path.name,
        success=True,
        video_id=video_id,
        link=link,
        title=metadata.title,
        outcome=poll.outcome,
    )
