"""Tests for fetch_posts.fetch_feed module."""

from datetime import datetime, timezone
from unittest.mock import Mock, patch

import pytest
import requests

from common.errors import FetchError, ParseError
from fetch_posts.fetch_feed import _parse_categories, _parse_entry, _resolve_link, fetch_posts

RSS_FEED = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Cloud Blog</title>
    <item>
      <title>New Compute VMs</title>
      <link>https://cloud.example.com/compute-vms</link>
      <pubDate>Mon, 01 Jan 2024 12:00:00 GMT</pubDate>
      <category>Compute</category>
      <category>Infrastructure</category>
    </item>
    <item>
      <title>No date here</title>
      <link>https://cloud.example.com/no-date</link>
      <category>Compute</category>
    </item>
  </channel>
</rss>
"""

ATOM_FEED = b"""<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Workspace Updates</title>
  <entry>
    <title>Gmail gets a feature</title>
    <link rel="replies" href="https://updates.example.com/comments/1"/>
    <link rel="alternate" href="https://updates.example.com/gmail-feature"/>
    <published>2024-02-01T10:00:00Z</published>
    <category term="Gmail"/>
  </entry>
</feed>
"""


BAD_DATE_FEED = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Cloud Blog</title>
    <item>
      <title>Garbled date</title>
      <link>https://cloud.example.com/garbled</link>
      <pubDate>not a date</pubDate>
      <category>Compute</category>
    </item>
    <item>
      <title>Security update</title>
      <link>https://cloud.example.com/security</link>
      <pubDate>Tue, 02 Jan 2024 08:30:00 GMT</pubDate>
      <category>Security</category>
    </item>
  </channel>
</rss>
"""


def _response(status_code: int = 200, content: bytes = b"") -> Mock:
    response = Mock()
    response.status_code = status_code
    response.content = content
    return response


class TestFetchPosts:
    @patch("fetch_posts.fetch_feed.requests.get")
    def test_parses_rss_and_drops_undated_entry(self, mock_get) -> None:
        mock_get.return_value = _response(content=RSS_FEED)
        posts = fetch_posts("https://cloud.example.com/rss")
        assert len(posts) == 1
        post = posts[0]
        assert post.title == "New Compute VMs"
        assert post.link == "https://cloud.example.com/compute-vms"
        assert post.published_at == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
        assert post.categories == frozenset({"Compute", "Infrastructure"})

    @patch("fetch_posts.fetch_feed.requests.get")
    def test_unparseable_date_drops_only_that_entry(self, mock_get) -> None:
        mock_get.return_value = _response(content=BAD_DATE_FEED)
        posts = fetch_posts("https://cloud.example.com/rss")
        assert [p.link for p in posts] == ["https://cloud.example.com/security"]
        assert posts[0].published_at == datetime(2024, 1, 2, 8, 30, tzinfo=timezone.utc)

    @patch("fetch_posts.fetch_feed.requests.get")
    def test_atom_uses_alternate_link(self, mock_get) -> None:
        mock_get.return_value = _response(content=ATOM_FEED)
        posts = fetch_posts("https://updates.example.com/feeds/posts/default")
        assert posts[0].link == "https://updates.example.com/gmail-feature"
        assert posts[0].categories == frozenset({"Gmail"})

    @patch("fetch_posts.fetch_feed.requests.get")
    def test_non_200_raises_fetch_error(self, mock_get) -> None:
        mock_get.return_value = _response(status_code=503)
        with pytest.raises(FetchError) as exc:
            fetch_posts("https://cloud.example.com/rss")
        assert exc.value.status_code == 503

    @patch("fetch_posts.fetch_feed.requests.get")
    def test_network_error_raises_fetch_error(self, mock_get) -> None:
        mock_get.side_effect = requests.ConnectionError("boom")
        with pytest.raises(FetchError):
            fetch_posts("https://cloud.example.com/rss")

    @patch("fetch_posts.fetch_feed.requests.get")
    def test_not_a_feed_raises_parse_error(self, mock_get) -> None:
        mock_get.return_value = _response(content=b"<html><body>Maintenance</body></html>")
        with pytest.raises(ParseError):
            fetch_posts("https://cloud.example.com/rss")


class TestParseEntry:
    def test_missing_title_returns_none(self) -> None:
        assert _parse_entry({"link": "https://x.com/1", "published": "2024-01-01T00:00:00Z"}) is None

    def test_missing_date_raises(self) -> None:
        with pytest.raises(ValueError):
            _parse_entry({"title": "T", "link": "https://x.com/1"})

    def test_falls_back_to_updated(self) -> None:
        post = _parse_entry({"title": "T", "link": "https://x.com/1", "updated": "2024-01-02T00:00:00Z"})
        assert post.published_at.day == 2


class TestResolveLink:
    def test_prefers_alternate(self) -> None:
        entry = {
            "link": "https://x.com/self",
            "links": [{"rel": "self", "href": "https://x.com/self"}, {"rel": "alternate", "href": "https://x.com/post"}],
        }
        assert _resolve_link(entry) == "https://x.com/post"

    def test_plain_link(self) -> None:
        assert _resolve_link({"link": " https://x.com/post "}) == "https://x.com/post"


class TestParseCategories:
    def test_ignores_blank_terms(self) -> None:
        assert _parse_categories({"tags": [{"term": "Gmail"}, {"term": " "}, {}]}) == frozenset({"Gmail"})
