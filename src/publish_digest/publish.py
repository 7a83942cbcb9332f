"""Send the digest by email and announce it on social media."""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Optional

from common.config import ProfileConfig
from common.errors import DigestError, PublishError, StoreError
from common.local_io import load_json_state, save_json_state
from publish_digest.email_body import build_email_html, build_subject, generate_email_phrases
from publish_digest.models import InlineImage, Mailer, PublishAttempt, SocialPublisher, VideoInfo
from publish_digest.recipients import validate_emails
from row_store.base import RowStore, column_index
from summarize_articles.gemini import GeminiClient

logger = logging.getLogger(__name__)

LAST_POST_KEY = "last_linkedin_post"


def latest_video_info(store: RowStore, table: str, profile: ProfileConfig) -> VideoInfo:
    """The last row of the video overview table, falling back to profile defaults.

    A missing table or an empty one yields an info with no link, which
    disables the video section of the email and the social post.
    """
    defaults = VideoInfo(
        title=profile.default_video_title,
        description=profile.default_video_description,
    )
    if not store.has_table(table):
        logger.warning("Video table '%s' not found. Using default title and description.", table)
        return defaults

    values = store.read_values(table)
    if len(values) < 2:
        logger.info("Video table '%s' has no rows. Using defaults.", table)
        return defaults

    header, last = values[0], values[-1]

    def _cell(name: str) -> str:
        try:
            position = column_index(header, name, table)
        except StoreError:
            logger.warning("Video table '%s' has no '%s' column. Using default.", table, name)
            return ""
        return str(last[position]).strip() if position < len(last) else ""

    return VideoInfo(
        link=_cell("Link"),
        title=_cell("Title") or defaults.title,
        description=_cell("Description") or defaults.description,
    )


def build_social_message(video: VideoInfo) -> str:
    return f"{video.title}\n\n{video.description}".strip()


def publish(
    document_html: str,
    recipients: str,
    mailer: Optional[Mailer],
    profile: ProfileConfig,
    video: Optional[VideoInfo] = None,
    social: Optional[SocialPublisher] = None,
    phrase_generator: Optional[GeminiClient] = None,
    inline_image: Optional[InlineImage] = None,
    state_path: Optional[str | Path] = None,
    today: Optional[date] = None,
) -> list[PublishAttempt]:
    """
    Email the digest and post the video link, each independently.

    A failure in one channel is logged and recorded; it never stops the
    other channel and never propagates to the caller.

    Args:
        document_html: Rendered document fragment for the email body
        recipients: Comma-separated recipient list as stored in the recipients table
        mailer: Email transport (None skips email)
        profile: Profile whose subject prefix and platform name are used
        video: Latest video overview row, if any
        social: Social publisher (None skips the social post)
        phrase_generator: Model client for the opening/closing phrases
        inline_image: Image embedded in the email by content id
        state_path: JSON file where the last social post id is kept for later deletion
        today: Date used in the phrases (defaults to today, UTC)

    Returns:
        One PublishAttempt per channel that was attempted
    """
    today = today or datetime.now(timezone.utc).date()
    video = video or VideoInfo(title=profile.default_video_title, description=profile.default_video_description)
    attempts: list[PublishAttempt] = []

    if mailer is not None:
        attempts.append(
            _send_email(document_html, recipients, mailer, profile, video, phrase_generator, inline_image, today)
        )
    else:
        logger.info("Email skipped for %s", profile.name)

    if social is not None and video.link:
        attempts.append(_post_social(social, profile, video, state_path))
    elif social is not None:
        logger.info("No video link available. Social post skipped.")

    return attempts


def _send_email(
    document_html: str,
    recipients: str,
    mailer: Mailer,
    profile: ProfileConfig,
    video: VideoInfo,
    phrase_generator: Optional[GeminiClient],
    inline_image: Optional[InlineImage],
    today: date,
) -> PublishAttempt:
    addresses = validate_emails(recipients)
    if not addresses:
        logger.error("No valid email recipients for %s. Email not sent.", profile.name)
        return PublishAttempt(channel="email", success=False, error="no valid recipients")

    try:
        phrases = generate_email_phrases(
            phrase_generator, profile.platform_name, video.title, video.description, today
        )
        html_body = build_email_html(document_html, phrases, video=video, inline_image=inline_image)
        subject = build_subject(profile.email_subject_prefix, video.title)
        mailer.send(addresses, subject, html_body, [inline_image] if inline_image else None)
    except (DigestError, ValueError, OSError) as e:
        logger.error("Error sending email: %s", e)
        return PublishAttempt(channel="email", success=False, error=str(e))

    logger.info("Email sent to %d recipients", len(addresses))
    return PublishAttempt(channel="email", success=True, detail=f"{len(addresses)} recipients")


def _post_social(
    social: SocialPublisher,
    profile: ProfileConfig,
    video: VideoInfo,
    state_path: Optional[str | Path],
) -> PublishAttempt:
    try:
        post_id = social.publish(
            build_social_message(video),
            link_url=video.link,
            link_title=video.title,
            link_description=profile.platform_name,
        )
    except (DigestError, ValueError, OSError) as e:
        logger.error("Error posting to social media: %s", e)
        return PublishAttempt(channel="social", success=False, error=str(e))

    if state_path and post_id:
        try:
            remember_last_post(Path(state_path), profile.name, post_id)
        except (ValueError, OSError) as e:
            # The post exists; only its later deletion by id is lost
            logger.error("Could not save post id %s to %s: %s", post_id, state_path, e)
            return PublishAttempt(channel="social", success=True, detail=post_id, error=f"post id not saved: {e}")
    return PublishAttempt(channel="social", success=True, detail=post_id)


def remember_last_post(state_path: Path, profile_name: str, post_id: str) -> None:
    state = load_json_state(state_path)
    state.setdefault(LAST_POST_KEY, {})[profile_name] = post_id
    save_json_state(state_path, state)
    logger.info("Saved last post id for %s to %s", profile_name, state_path)


def last_post_id(state_path: Path, profile_name: str) -> str:
    """The id of the last social post made for a profile.

    Raises:
        PublishError: If no post has been recorded.
    """
    post_id = load_json_state(state_path).get(LAST_POST_KEY, {}).get(profile_name)
    if not post_id:
        raise PublishError(f"No saved post id for profile '{profile_name}'", channel="social")
    return post_id


def forget_last_post(state_path: Path, profile_name: str) -> None:
    state = load_json_state(state_path)
    state.get(LAST_POST_KEY, {}).pop(profile_name, None)
    save_json_state(state_path, state)
