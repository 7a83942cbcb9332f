"""Fetch an article and reduce its HTML to plain text for grounding."""

import logging
import re

import requests

from common.errors import ContentFetchError

logger = logging.getLogger(__name__)

USER_AGENT = "blog-digest/1.0 (article summarizer)"

DEFAULT_MAX_LENGTH = 300_000
TRUNCATION_MARKER = "... [CONTENIDO TRUNCADO]"

_SCRIPT_RE = re.compile(r"<script[\s\S]*?>[\s\S]*?</script>", re.IGNORECASE)
_STYLE_RE = re.compile(r"<style[\s\S]*?>[\s\S]*?</style>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]+>")
_BLANK_LINES_RE = re.compile(r"(\r\n|\n|\r){2,}")

# Only the entities that show up in practice; the rest pass through untouched
_ENTITIES = (
    ("&nbsp;", " "),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
)


def fetch_article_html(url: str, timeout: int = 30) -> str:
    """Download an article.

    Raises:
        ContentFetchError: On network failure or any status other than 200.
    """
    try:
        response = requests.get(url, timeout=timeout, headers={"User-Agent": USER_AGENT})
    except requests.RequestException as e:
        raise ContentFetchError(f"Could not fetch {url}: {e}", url=url) from e

    if response.status_code != 200:
        raise ContentFetchError(
            f"Could not fetch {url}: status code {response.status_code}",
            url=url,
            status_code=response.status_code,
        )
    return response.text


def extract_text(html: str, max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """Strip scripts, styles and tags from HTML and return the remaining text."""
    text = _SCRIPT_RE.sub("", html)
    text = _STYLE_RE.sub("", text)
    text = _TAG_RE.sub("", text)
    for entity, replacement in _ENTITIES:
        text = text.replace(entity, replacement)
    text = _BLANK_LINES_RE.sub("\n", text).strip()

    if len(text) > max_length:
        text = text[:max_length] + TRUNCATION_MARKER
    return text
