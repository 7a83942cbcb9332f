"""Grounded article summaries."""

from __future__ import annotations

import logging

from common.config import SummarizerConfig
from common.errors import ContentTooShortError
from summarize_articles.fetch_article_text import extract_text, fetch_article_html
from summarize_articles.gemini import GeminiClient
from summarize_articles.instructions import SUMMARY_INSTRUCTIONS
from summarize_articles.models import SummaryResult

logger = logging.getLogger(__name__)


class GeminiSummarizer:
    """Summarize an article from its own text, never from the model's prior knowledge."""

    def __init__(self, client: GeminiClient, platform: str = "Google Cloud") -> None:
        self.client = client
        self.platform = platform

    @property
    def config(self) -> SummarizerConfig:
        return self.client.config

    def summarize(self, article_url: str) -> SummaryResult:
        html = fetch_article_html(article_url, timeout=self.config.request_timeout)
        article_text = extract_text(html, max_length=self.config.max_content_length)

        if len(article_text) < self.config.min_content_length:
            raise ContentTooShortError(
                f"Not enough article content to summarize ({len(article_text)} characters)",
                length=len(article_text),
            )

        prompt = build_summary_prompt(article_text, self.platform, self.config.language)
        response_text = self.client.generate_text([{"text": prompt}])
        result = parse_summary(response_text)
        logger.debug("Summarized %s as %r", article_url, result.title)
        return result


def build_summary_prompt(article_text: str, platform: str, language: str = "español") -> str:
    return SUMMARY_INSTRUCTIONS.format(
        platform=platform,
        language=language,
        article_text=article_text,
    )


def parse_summary(text: str) -> SummaryResult:
    """Split model output into a title (first line, bold markers removed) and body."""
    first_line, _, rest = text.strip().partition("\n")
    title = first_line.strip().strip("*").strip()
    return SummaryResult(title=title, body=rest.strip())
