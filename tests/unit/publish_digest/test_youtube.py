"""Tests for publish_digest.youtube module."""

from pathlib import Path
from unittest.mock import Mock

import pytest

from common.errors import PollTimeout, PublishError
from publish_digest.models import PollOutcome, VideoMetadata
from publish_digest.youtube import YouTubePublisher, watch_url

METADATA = VideoMetadata(title="Noticias", description="0:00 Intro", tags=["gcp", "ia"])


def _response(status_code: int, payload: dict | None = None, headers: dict | None = None) -> Mock:
    response = Mock()
    response.status_code = status_code
    response.json.return_value = payload or {}
    response.headers = headers or {}
    response.text = ""
    return response


def _status(upload_status: str, processing_status: str = "") -> Mock:
    return _response(
        200,
        {"items": [{"status": {"uploadStatus": upload_status}, "processingDetails": {"processingStatus": processing_status}}]},
    )


def _publisher(max_polls: int = 3) -> tuple[YouTubePublisher, Mock, Mock]:
    session = Mock()
    sleep = Mock()
    publisher = YouTubePublisher(access_token="token", session=session, poll_interval=5, max_polls=max_polls, sleep=sleep)
    return publisher, session, sleep


class TestUpload:
    def test_resumable_upload(self, tmp_path: Path) -> None:
        video = tmp_path / "clip.mp4"
        video.write_bytes(b"\x00" * 10)
        publisher, session, _ = _publisher()
        session.post.return_value = _response(200, headers={"Location": "https://upload.example.com/session"})
        session.put.return_value = _response(200, {"id": "vid123"})

        assert publisher.upload(video, METADATA) == "vid123"

        resource = session.post.call_args.kwargs["json"]
        assert resource["snippet"]["title"] == "Noticias"
        assert resource["snippet"]["tags"] == ["gcp", "ia"]
        assert resource["snippet"]["defaultLanguage"] == "es"
        assert resource["status"] == {"privacyStatus": "public", "selfDeclaredMadeForKids": False}
        assert session.post.call_args.kwargs["params"]["uploadType"] == "resumable"
        assert session.put.call_args.args[0] == "https://upload.example.com/session"

    def test_session_without_location_raises(self, tmp_path: Path) -> None:
        video = tmp_path / "clip.mp4"
        video.write_bytes(b"x")
        publisher, session, _ = _publisher()
        session.post.return_value = _response(200)
        with pytest.raises(PublishError):
            publisher.upload(video, METADATA)
        session.put.assert_not_called()

    def test_non_json_upload_response_raises(self, tmp_path: Path) -> None:
        video = tmp_path / "clip.mp4"
        video.write_bytes(b"x")
        publisher, session, _ = _publisher()
        session.post.return_value = _response(200, headers={"Location": "https://upload.example.com/session"})
        garbled = _response(200)
        garbled.json.side_effect = ValueError("Expecting value")
        session.put.return_value = garbled

        with pytest.raises(PublishError) as exc:
            publisher.upload(video, METADATA)
        assert exc.value.channel == "video"


class TestWaitForProcessing:
    def test_completed(self) -> None:
        publisher, session, sleep = _publisher()
        session.get.side_effect = [_status("uploaded", "processing"), _status("processed", "succeeded")]
        result = publisher.wait_for_processing("vid123")
        assert result.outcome == PollOutcome.COMPLETED
        assert result.polls == 2
        assert [c.args[0] for c in sleep.call_args_list] == [5]

    def test_failed(self) -> None:
        publisher, session, _ = _publisher()
        session.get.return_value = _status("rejected")
        assert publisher.wait_for_processing("vid123").outcome == PollOutcome.FAILED

    def test_timeout_is_distinct_from_failure(self) -> None:
        publisher, session, sleep = _publisher(max_polls=3)
        session.get.return_value = _status("uploaded", "processing")
        result = publisher.wait_for_processing("vid123")
        assert result.outcome == PollOutcome.TIMEOUT
        assert result.polls == 3
        assert session.get.call_count == 3
        assert sleep.call_count == 2

    def test_timeout_can_raise(self) -> None:
        publisher, session, _ = _publisher(max_polls=2)
        session.get.return_value = _status("uploaded", "processing")
        with pytest.raises(PollTimeout):
            publisher.wait_for_processing("vid123", raise_on_timeout=True)

    def test_non_json_status_response_raises(self) -> None:
        publisher, session, _ = _publisher()
        garbled = _response(200)
        garbled.json.side_effect = ValueError("Expecting value")
        session.get.return_value = garbled

        with pytest.raises(PublishError) as exc:
            publisher.wait_for_processing("vid123")
        assert exc.value.channel == "video"


class TestWatchUrl:
    def test_format(self) -> None:
        assert watch_url("abc") == "https://www.youtube.com/watch?v=abc"
