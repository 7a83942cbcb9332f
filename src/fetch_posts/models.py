"""Data models for the fetch_posts stage."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class Post:
    """A feed entry normalized from RSS <item> or Atom <entry>."""
    title: str
    link: str
    published_at: datetime
    categories: frozenset[str] = field(default_factory=frozenset)
