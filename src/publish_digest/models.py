"""Data models and collaborator interfaces for the publish_digest stage."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Protocol


@dataclass
class PublishAttempt:
    """Outcome of one publish channel ("email", "social" or "video") in a run.

    Channel "publish" records a failure while preparing the email and social step.
    """
    channel: str
    success: bool
    error: Optional[str] = None
    detail: Optional[str] = None


@dataclass
class VideoInfo:
    link: str = ""
    title: str = ""
    description: str = ""


@dataclass
class EmailPhrases:
    opening: str
    closing: str


@dataclass
class InlineImage:
    content_id: str
    data: bytes
    subtype: str = "png"


@dataclass
class VideoMetadata:
    title: str
    description: str
    tags: list[str] = field(default_factory=list)


class PollOutcome(str, Enum):
    COMPLETED = "completed"
    FAILED = "failed"
    TIMEOUT = "timeout"


@dataclass
class PollResult:
    outcome: PollOutcome
    polls: int
    status: str = ""


class Mailer(Protocol):
    def send(
        self,
        recipients: list[str],
        subject: str,
        html_body: str,
        inline_images: Optional[list[InlineImage]] = None,
    ) -> None: ...


class SocialPublisher(Protocol):
    def publish(self, message: str, link_url: str = "", link_title: str = "", link_description: str = "") -> str:
        """Publish a post and return its identifier."""
        ...

    def delete(self, post_id: str) -> None: ...


class VideoPublisher(Protocol):
    def upload(self, path, metadata: VideoMetadata) -> str:
        """Upload a video and return its identifier."""
        ...

    def wait_for_processing(self, video_id: str) -> PollResult: ...
