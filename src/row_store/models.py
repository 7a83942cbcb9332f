"""Data models for the row store tables."""

from dataclasses import dataclass

ACTIVE_HEADER = ["Channel", "Title", "Link", "Publication Date"]
VIDEO_HEADER = ["Link", "Title", "Description", "Date Created"]
STATUS_HEADER = ["Timestamp", "Message", "Reason"]

COLUMN_LINK = "Link"
COLUMN_CHANNEL = "Channel"


@dataclass(frozen=True)
class ActiveRow:
    """A deduplicated post waiting to be summarized. Archive rows share this shape."""
    channel: str
    title: str
    link: str
    publication_date: str

    def to_values(self) -> list[str]:
        return [self.channel, self.title, self.link, self.publication_date]
