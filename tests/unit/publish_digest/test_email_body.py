"""Tests for publish_digest.email_body module."""

import os
import time
from datetime import date
from pathlib import Path
from unittest.mock import Mock

from common.errors import ModelError
from publish_digest.email_body import (
    INLINE_IMAGE_ID,
    build_email_html,
    build_subject,
    fallback_phrases,
    generate_email_phrases,
    latest_png,
    linkify_timestamps,
    remove_hashtags,
)
from publish_digest.models import EmailPhrases, InlineImage, VideoInfo

TODAY = date(2024, 5, 3)


class TestGenerateEmailPhrases:
    def test_uses_model_phrases(self) -> None:
        client = Mock()
        client.generate_json.return_value = {"opening": " Hola! ", "closing": "Hasta pronto."}
        phrases = generate_email_phrases(client, "Google Cloud", "Video", "Desc", TODAY)
        assert phrases == EmailPhrases(opening="Hola!", closing="Hasta pronto.")
        assert "03 - May" in client.generate_json.call_args.args[0]

    def test_falls_back_on_model_error(self) -> None:
        client = Mock()
        client.generate_json.side_effect = ModelError("overloaded")
        assert generate_email_phrases(client, "Google Cloud", "V", "D", TODAY) == fallback_phrases("Google Cloud", TODAY)

    def test_falls_back_on_missing_keys(self) -> None:
        client = Mock()
        client.generate_json.return_value = {"opening": "Hola"}
        assert generate_email_phrases(client, "Google Cloud", "V", "D", TODAY).closing == "Pronto más noticias."

    def test_no_client_uses_fallback(self) -> None:
        phrases = generate_email_phrases(None, "Google Workspace", "V", "D", TODAY)
        assert "Google Workspace" in phrases.opening
        assert "03 - May" in phrases.opening


class TestRemoveHashtags:
    def test_removes_tags_only(self) -> None:
        assert remove_hashtags("Resumen C#\nNuevo #GoogleCloud #IA") == "Resumen C#\nNuevo"


class TestLinkifyTimestamps:
    def test_links_minutes_and_hours(self) -> None:
        html = linkify_timestamps("0:00 Intro\n1:02:03 Fin", "https://www.youtube.com/watch?v=abc")
        assert '<a href="https://www.youtube.com/watch?v=abc&amp;t=0s">0:00</a>' in html
        assert '<a href="https://www.youtube.com/watch?v=abc&amp;t=3723s">1:02:03</a>' in html

    def test_url_without_query_uses_question_mark(self) -> None:
        html = linkify_timestamps("2:30 Tema", "https://youtu.be/abc")
        assert 'href="https://youtu.be/abc?t=150s"' in html

    def test_text_is_escaped(self) -> None:
        assert linkify_timestamps("<b>x</b>", "https://youtu.be/abc") == "&lt;b&gt;x&lt;/b&gt;"


class TestLatestPng:
    def test_picks_newest(self, tmp_path: Path) -> None:
        old = tmp_path / "old.png"
        new = tmp_path / "new.png"
        old.write_bytes(b"old")
        new.write_bytes(b"new")
        now = time.time()
        os.utime(old, (now - 100, now - 100))
        os.utime(new, (now, now))
        (tmp_path / "video.mp4").write_bytes(b"x")

        image = latest_png(tmp_path)
        assert image == InlineImage(content_id=INLINE_IMAGE_ID, data=b"new")

    def test_missing_folder(self, tmp_path: Path) -> None:
        assert latest_png(tmp_path / "nope") is None


class TestBuildEmailHtml:
    def test_contains_sections_in_order(self) -> None:
        html = build_email_html(
            "<h2>Noticias Compute</h2>",
            EmailPhrases(opening="Apertura", closing="Cierre"),
            video=VideoInfo(link="https://youtu.be/abc", title="T", description="0:10 Intro #tag"),
            inline_image=InlineImage(content_id="summaryImage", data=b""),
        )
        positions = [
            html.index("Hola Todos."),
            html.index("Apertura"),
            html.index("Ver video"),
            html.index('href="https://youtu.be/abc?t=10s"'),
            html.index("cid:summaryImage"),
            html.index("<h2>Noticias Compute</h2>"),
            html.index("Cierre"),
        ]
        assert positions == sorted(positions)
        assert "#tag" not in html

    def test_without_video(self) -> None:
        html = build_email_html("<p>doc</p>", EmailPhrases(opening="A", closing="B"))
        assert "Ver video" not in html
        assert "cid:" not in html


class TestBuildSubject:
    def test_prefix_and_title(self) -> None:
        assert build_subject("[Readiness GCP]", "Noticias de mayo") == "[Readiness GCP] - Noticias de mayo"
