"""YouTube Data API v3 upload client."""

from __future__ import annotations

import logging
import os
import time
from pathlib import Path
from typing import Callable, Optional

import requests

from common.errors import ConfigError, PollTimeout, PublishError
from publish_digest.models import PollOutcome, PollResult, VideoMetadata

logger = logging.getLogger(__name__)

UPLOAD_URL = "https://www.googleapis.com/upload/youtube/v3/videos"
VIDEOS_URL = "https://www.googleapis.com/youtube/v3/videos"
WATCH_URL = "https://www.youtube.com/watch?v={video_id}"


def watch_url(video_id: str) -> str:
    return WATCH_URL.format(video_id=video_id)


class YouTubePublisher:
    """Resumable video upload plus a bounded poll on server-side processing."""

    def __init__(
        self,
        access_token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        privacy_status: str = "public",
        language: str = "es",
        poll_interval: float = 30.0,
        max_polls: int = 20,
        timeout: int = 300,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.access_token = access_token or os.environ.get("YOUTUBE_ACCESS_TOKEN")
        if not self.access_token:
            raise ConfigError("YOUTUBE_ACCESS_TOKEN is not set")
        self.session = session or requests.Session()
        self.privacy_status = privacy_status
        self.language = language
        self.poll_interval = poll_interval
        self.max_polls = max_polls
        self.timeout = timeout
        self.sleep = sleep

    def _auth(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.access_token}"}

    def build_resource(self, metadata: VideoMetadata) -> dict:
        return {
            "snippet": {
                "title": metadata.title,
                "description": metadata.description,
                "tags": metadata.tags,
                "defaultLanguage": self.language,
                "defaultAudioLanguage": self.language,
            },
            "status": {
                "privacyStatus": self.privacy_status,
                "selfDeclaredMadeForKids": False,
            },
        }

    def upload(self, path: str | Path, metadata: VideoMetadata) -> str:
        """Upload a video file and return the new video id.

        Raises:
            PublishError: If the upload session cannot be opened or the upload fails.
        """
        path = Path(path)
        size = path.stat().st_size

        try:
            start = self.session.post(
                UPLOAD_URL,
                params={"uploadType": "resumable", "part": "snippet,status"},
                json=self.build_resource(metadata),
                headers={
                    **self._auth(),
                    "X-Upload-Content-Type": "video/mp4",
                    "X-Upload-Content-Length": str(size),
                },
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise PublishError(f"YouTube upload session failed: {e}", channel="video") from e

        session_url = start.headers.get("Location")
        if start.status_code != 200 or not session_url:
            raise PublishError(
                f"YouTube upload session failed: {start.status_code} - {start.text}", channel="video"
            )

        try:
            with path.open("rb") as f:
                response = self.session.put(
                    session_url,
                    data=f,
                    headers={**self._auth(), "Content-Type": "video/mp4", "Content-Length": str(size)},
                    timeout=self.timeout,
                )
        except requests.RequestException as e:
            raise PublishError(f"YouTube upload failed: {e}", channel="video") from e

        if response.status_code not in (200, 201):
            raise PublishError(
                f"YouTube upload failed: {response.status_code} - {response.text}", channel="video"
            )

        try:
            video_id = response.json().get("id")
        except ValueError as e:
            raise PublishError(f"YouTube upload response is not JSON: {e}", channel="video") from e
        if not video_id:
            raise PublishError("YouTube upload response has no video id", channel="video")
        logger.info("Uploaded %s to YouTube. ID: %s", path.name, video_id)
        return video_id

    def processing_status(self, video_id: str) -> tuple[str, str]:
        """Return (uploadStatus, processingStatus) for a video."""
        try:
            response = self.session.get(
                VIDEOS_URL,
                params={"part": "status,processingDetails", "id": video_id},
                headers=self._auth(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise PublishError(f"YouTube status check failed: {e}", channel="video") from e

        if response.status_code != 200:
            raise PublishError(
                f"YouTube status check failed: {response.status_code} - {response.text}", channel="video"
            )
        try:
            items = response.json().get("items") or []
        except ValueError as e:
            raise PublishError(f"YouTube status response is not JSON: {e}", channel="video") from e
        if not items:
            return "", ""
        item = items[0]
        upload_status = (item.get("status") or {}).get("uploadStatus", "")
        processing_status = (item.get("processingDetails") or {}).get("processingStatus", "")
        return upload_status, processing_status

    def wait_for_processing(self, video_id: str, raise_on_timeout: bool = False) -> PollResult:
        """Poll until processing finishes, fails, or ``max_polls`` runs out.

        Running out of polls returns a TIMEOUT result unless ``raise_on_timeout``
        is set, in which case PollTimeout is raised.
        """
        status = ""
        for poll in range(1, self.max_polls + 1):
            upload_status, processing_status = self.processing_status(video_id)
            status = processing_status or upload_status

            if upload_status == "processed" or processing_status == "succeeded":
                return PollResult(outcome=PollOutcome.COMPLETED, polls=poll, status=status)
            if upload_status in ("failed", "rejected", "deleted") or processing_status in ("failed", "terminated"):
                return PollResult(outcome=PollOutcome.FAILED, polls=poll, status=status)

            logger.debug("Video %s still processing (%s), poll %d/%d", video_id, status, poll, self.max_polls)
            if poll < self.max_polls:
                self.sleep(self.poll_interval)

        logger.warning("Timed out waiting for video %s after %d polls", video_id, self.max_polls)
        if raise_on_timeout:
            raise PollTimeout(f"Video {video_id} still '{status}' after {self.max_polls} polls")
        return PollResult(outcome=PollOutcome.TIMEOUT, polls=self.max_polls, status=status)
