"""Error kinds shared by every digest stage.

Each error carries a ``recoverable`` flag so callers can decide whether to
render an inline marker and keep going, or abort the run before mutating
anything.
"""

from __future__ import annotations


class DigestError(Exception):
    """Base class for all pipeline errors."""

    recoverable = True


class FetchError(DigestError):
    """A feed or article URL could not be retrieved (network error or non-200)."""

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ContentFetchError(FetchError):
    """Article HTML could not be retrieved for summarization."""


class ParseError(DigestError):
    """Malformed feed or HTML."""


class ContentTooShortError(DigestError):
    """Extracted article text is below the minimum length worth summarizing."""

    def __init__(self, message: str, length: int = 0) -> None:
        super().__init__(message)
        self.length = length


class ModelError(DigestError):
    """Generative model call failed, exhausted its retries, or was blocked."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        block_reason: str | None = None,
        attempts: int = 0,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.block_reason = block_reason
        self.attempts = attempts


class StoreError(DigestError):
    """Row store structural problem: missing table or missing expected column."""

    recoverable = False


class PublishError(DigestError):
    """Mailer, social or video publish failure."""

    def __init__(self, message: str, channel: str = "") -> None:
        super().__init__(message)
        self.channel = channel


class ConfigError(DigestError):
    """Invalid or incomplete configuration."""

    recoverable = False


class PollTimeout(DigestError):
    """A bounded poll ran out of attempts before the remote job finished."""
