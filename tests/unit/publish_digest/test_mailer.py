"""Tests for publish_digest.mailer module."""

import smtplib
from unittest.mock import MagicMock, patch

import pytest

from common.errors import ConfigError, PublishError
from publish_digest.mailer import SmtpMailer
from publish_digest.models import InlineImage


def _mailer() -> SmtpMailer:
    return SmtpMailer(host="smtp.example.com", port=587, username="bot", password="pw", sender="bot@example.com")


class TestBuildMessage:
    def test_recipients_not_in_headers(self) -> None:
        msg = _mailer().build_message("Asunto", "<p>hola</p>")
        assert msg["Subject"] == "Asunto"
        assert msg["To"] == "bot@example.com"
        assert msg["Bcc"] is None

    def test_inline_image_content_id(self) -> None:
        msg = _mailer().build_message("S", "<img src='cid:summaryImage'>", [InlineImage("summaryImage", b"\x89PNG")])
        images = [part for part in msg.get_payload() if part.get_content_maintype() == "image"]
        assert images[0]["Content-ID"] == "<summaryImage>"


class TestSend:
    @patch("publish_digest.mailer.smtplib.SMTP")
    def test_sends_to_envelope_recipients(self, mock_smtp) -> None:
        server = MagicMock()
        mock_smtp.return_value.__enter__.return_value = server
        _mailer().send(["a@b.com", "c@d.org"], "S", "<p/>")
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("bot", "pw")
        assert server.sendmail.call_args.args[1] == ["a@b.com", "c@d.org"]

    @patch("publish_digest.mailer.smtplib.SMTP")
    def test_smtp_error_becomes_publish_error(self, mock_smtp) -> None:
        mock_smtp.return_value.__enter__.return_value.login.side_effect = smtplib.SMTPAuthenticationError(535, b"no")
        with pytest.raises(PublishError) as exc:
            _mailer().send(["a@b.com"], "S", "<p/>")
        assert exc.value.channel == "email"

    def test_no_recipients(self) -> None:
        with pytest.raises(PublishError):
            _mailer().send([], "S", "<p/>")


class TestFromEnv:
    def test_missing_settings_raise(self, monkeypatch) -> None:
        for name in ("SMTP_HOST", "SMTP_USERNAME", "SMTP_PASSWORD"):
            monkeypatch.delenv(name, raising=False)
        with pytest.raises(ConfigError):
            SmtpMailer.from_env()
