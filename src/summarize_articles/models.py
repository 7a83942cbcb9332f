"""Data models for the summarize_articles stage."""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class SummaryResult:
    """Model-written title and summary paragraph for one article."""
    title: str
    body: str


class Summarizer(Protocol):
    def summarize(self, article_url: str) -> SummaryResult: ...
