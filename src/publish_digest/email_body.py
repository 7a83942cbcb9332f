"""Compose the HTML digest email."""

from __future__ import annotations

import logging
import re
from datetime import date
from html import escape
from pathlib import Path
from typing import Optional

from common.datetime import format_display_date
from common.errors import DigestError
from publish_digest.models import EmailPhrases, InlineImage, VideoInfo
from summarize_articles.gemini import GeminiClient
from summarize_articles.instructions import EMAIL_PHRASES_INSTRUCTIONS

logger = logging.getLogger(__name__)

INLINE_IMAGE_ID = "summaryImage"

_HASHTAG_RE = re.compile(r"(?<!\S)#\w+")
_TIMESTAMP_RE = re.compile(r"(?<![\d:])(?:(\d{1,2}):)?(\d{1,2}):(\d{2})(?![\d:])")
_TRAILING_SPACE_RE = re.compile(r"[ \t]+(?=\n|$)")


def fallback_phrases(platform: str, today: date) -> EmailPhrases:
    return EmailPhrases(
        opening=f"Hola todos, aquí están las últimas noticias de {platform} para hoy {format_display_date(today)}.",
        closing="Pronto más noticias.",
    )


def generate_email_phrases(
    client: Optional[GeminiClient],
    platform: str,
    video_title: str,
    video_description: str,
    today: date,
) -> EmailPhrases:
    """Ask the model for an opening/closing pair; fall back to fixed phrases on any failure."""
    if client is None:
        return fallback_phrases(platform, today)

    prompt = EMAIL_PHRASES_INSTRUCTIONS.format(
        platform=platform,
        video_title=video_title,
        video_description=video_description,
        date=format_display_date(today),
    )
    try:
        data = client.generate_json(prompt)
        return EmailPhrases(opening=str(data["opening"]).strip(), closing=str(data["closing"]).strip())
    except DigestError as e:
        logger.warning("Error generating email phrases, using fallback: %s", e)
    except (KeyError, TypeError) as e:
        logger.warning("Email phrases response missing keys, using fallback: %s", e)
    return fallback_phrases(platform, today)


def remove_hashtags(text: str) -> str:
    text = _HASHTAG_RE.sub("", text)
    return _TRAILING_SPACE_RE.sub("", text).strip()


def _timestamp_url(video_url: str, seconds: int) -> str:
    separator = "&" if "?" in video_url else "?"
    return f"{video_url}{separator}t={seconds}s"


def linkify_timestamps(text: str, video_url: str) -> str:
    """Escape text as HTML and turn "m:ss" / "h:mm:ss" timestamps into links into the video."""

    def _replace(match: re.Match) -> str:
        hours, minutes, seconds = match.groups()
        total = int(hours or 0) * 3600 + int(minutes) * 60 + int(seconds)
        href = escape(_timestamp_url(video_url, total), quote=True)
        return f'<a href="{href}">{match.group(0)}</a>'

    return _TIMESTAMP_RE.sub(_replace, escape(text))


def latest_png(directory: str | Path) -> Optional[InlineImage]:
    """Newest PNG in a directory (by modification time), loaded as an inline image."""
    folder = Path(directory)
    if not folder.is_dir():
        return None
    pngs = [p for p in folder.iterdir() if p.is_file() and p.suffix.lower() == ".png"]
    if not pngs:
        return None
    newest = max(pngs, key=lambda p: p.stat().st_mtime)
    logger.info("Using inline image %s", newest)
    return InlineImage(content_id=INLINE_IMAGE_ID, data=newest.read_bytes())


def build_subject(prefix: str, video_title: str) -> str:
    return f"{prefix} - {video_title}"


def build_email_html(
    document_html: str,
    phrases: EmailPhrases,
    video: Optional[VideoInfo] = None,
    inline_image: Optional[InlineImage] = None,
) -> str:
    parts = ['<div style="font-family: Arial, sans-serif; font-size: 11pt; color: #3c4043;">']
    parts.append("<p>Hola Todos.</p>")
    parts.append(f"<p>{escape(phrases.opening)}</p>")

    if video and video.link:
        parts.append(
            f'<p><strong>Resumen de noticias:</strong> '
            f'<a href="{escape(video.link, quote=True)}">Ver video</a></p>'
        )
        if video.description:
            description = linkify_timestamps(remove_hashtags(video.description), video.link)
            parts.append(f"<p>{description.replace(chr(10), '<br>')}</p>")

    if inline_image is not None:
        parts.append(
            f'<br><div style="text-align: center;"><img src="cid:{inline_image.content_id}" '
            f'style="max-width: 100%; height: auto; border: 1px solid #ddd; border-radius: 8px;"></div>'
        )

    parts.append("<br><p><strong>Para más detalles, aquí están las noticias del blog:</strong></p>")
    parts.append(document_html)
    parts.append(f"<br><p>{escape(phrases.closing)}</p>")
    parts.append("</div>")
    return "".join(parts)
