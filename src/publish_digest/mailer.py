"""SMTP mailer."""

from __future__ import annotations

import logging
import os
import smtplib
from email.mime.image import MIMEImage
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

from common.errors import ConfigError, PublishError
from publish_digest.models import InlineImage

logger = logging.getLogger(__name__)


class SmtpMailer:
    """Send HTML mail to a BCC list through an SMTP server with STARTTLS."""

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        sender: str,
        timeout: int = 30,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender
        self.timeout = timeout

    @classmethod
    def from_env(cls) -> "SmtpMailer":
        host = os.environ.get("SMTP_HOST")
        username = os.environ.get("SMTP_USERNAME")
        password = os.environ.get("SMTP_PASSWORD")
        if not host or not username or not password:
            raise ConfigError("SMTP_HOST, SMTP_USERNAME and SMTP_PASSWORD must be set")
        return cls(
            host=host,
            port=int(os.environ.get("SMTP_PORT", "587")),
            username=username,
            password=password,
            sender=os.environ.get("SMTP_SENDER", username),
        )

    def build_message(
        self,
        subject: str,
        html_body: str,
        inline_images: Optional[list[InlineImage]] = None,
    ) -> MIMEMultipart:
        # Recipients go in the envelope only, so the list stays hidden (BCC)
        msg = MIMEMultipart("related")
        msg["Subject"] = subject
        msg["From"] = self.sender
        msg["To"] = self.sender
        msg.attach(MIMEText(html_body, "html", "utf-8"))

        for image in inline_images or []:
            part = MIMEImage(image.data, _subtype=image.subtype)
            part.add_header("Content-ID", f"<{image.content_id}>")
            part.add_header("Content-Disposition", "inline", filename=f"{image.content_id}.{image.subtype}")
            msg.attach(part)
        return msg

    def send(
        self,
        recipients: list[str],
        subject: str,
        html_body: str,
        inline_images: Optional[list[InlineImage]] = None,
    ) -> None:
        if not recipients:
            raise PublishError("No recipients to send to", channel="email")

        msg = self.build_message(subject, html_body, inline_images)
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                server.starttls()
                server.login(self.username, self.password)
                server.sendmail(self.sender, recipients, msg.as_string())
        except (smtplib.SMTPException, OSError) as e:
            raise PublishError(f"Failed to send email: {e}", channel="email") from e

        logger.info("Sent email '%s' to %d recipients", subject, len(recipients))
