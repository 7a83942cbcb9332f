"""Data models for the upload_videos stage."""

from dataclasses import dataclass
from typing import Optional

from publish_digest.models import PollOutcome


@dataclass
class VideoUploadResult:
    """What happened to one local video file."""
    file_name: str
    success: bool
    video_id: Optional[str] = None
    link: Optional[str] = None
    title: Optional[str] = None
    outcome: Optional[PollOutcome] = None
    error: Optional[str] = None
