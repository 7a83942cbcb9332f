"""RSS/Atom feed fetching."""

import logging

import feedparser
import requests

from common.datetime import parse_datetime
from common.errors import FetchError, ParseError
from fetch_posts.models import Post

logger = logging.getLogger(__name__)

USER_AGENT = "blog-digest/1.0 (RSS reader)"


def fetch_posts(feed_url: str, timeout: int = 30) -> list[Post]:
    """Fetch a feed and return its entries as Posts, in feed order.

    Raises:
        FetchError: If the feed cannot be downloaded.
        ParseError: If the response is not a recognizable RSS/Atom document.
    """
    content = _download_feed(feed_url, timeout)
    feed = feedparser.parse(content)

    if not feed.entries and not feed.get("version"):
        reason = feed.get("bozo_exception", "no feed structure found")
        raise ParseError(f"Could not parse feed {feed_url}: {reason}")

    posts = []
    for entry in feed.entries:
        try:
            post = _parse_entry(entry)
        except ValueError as e:
            logger.warning("Dropping entry %r: %s", entry.get("title", ""), e)
            continue
        if post is not None:
            posts.append(post)

    logger.info("Parsed %d posts from %s (%d entries)", len(posts), feed_url, len(feed.entries))
    return posts


def _download_feed(feed_url: str, timeout: int) -> bytes:
    try:
        response = requests.get(feed_url, timeout=timeout, headers={"User-Agent": USER_AGENT})
    except requests.RequestException as e:
        raise FetchError(f"Failed to fetch feed {feed_url}: {e}", url=feed_url) from e

    if response.status_code != 200:
        raise FetchError(
            f"Feed {feed_url} returned status {response.status_code}",
            url=feed_url,
            status_code=response.status_code,
        )
    return response.content


def _parse_entry(entry) -> Post | None:
    """Parse a single feed entry; returns None when title or link is missing.

    Raises:
        ValueError: If the publication date cannot be parsed.
    """
    title = (entry.get("title") or "").strip()
    link = _resolve_link(entry)
    if not title or not link:
        logger.debug("Skipping entry without title or link: %r", title or link)
        return None

    return Post(
        title=title,
        link=link,
        published_at=_parse_published_date(entry),
        categories=_parse_categories(entry),
    )


def _resolve_link(entry) -> str:
    """Return the canonical post URL.

    Atom entries carry several <link> elements; the post itself is the one
    with rel="alternate". RSS entries have a single <link>.
    """
    for link in entry.get("links") or []:
        if link.get("rel") == "alternate" and link.get("href"):
            return link["href"].strip()
    return (entry.get("link") or "").strip()


def _parse_published_date(entry):
    published = entry.get("published") or entry.get("updated")
    if not published:
        raise ValueError("missing publication date")
    return parse_datetime(published)


def _parse_categories(entry) -> frozenset[str]:
    # RSS <category>text</category> and Atom <category term="..."/> both land in tags
    terms = set()
    for tag in entry.get("tags") or []:
        term = (tag.get("term") or "").strip()
        if term:
            terms.add(term)
    return frozenset(terms)
