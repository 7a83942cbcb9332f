"""Gemini generateContent client with bounded retry on overload."""

from __future__ import annotations

import json
import logging
import os
import re
import time
from typing import Any, Callable

import requests

from common.config import SummarizerConfig
from common.errors import ConfigError, ModelError

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = frozenset({429, 503})

_JSON_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


class GeminiClient:
    """Minimal REST client for ``models/{model}:generateContent``.

    Rate-limit (429) and overload (503) responses are retried with
    exponential backoff; anything else fails immediately.
    """

    def __init__(
        self,
        config: SummarizerConfig,
        api_key: str | None = None,
        session: requests.Session | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.config = config
        self.api_key = api_key or os.environ.get("GEMINI_API_KEY")
        if not self.api_key:
            raise ConfigError("GEMINI_API_KEY is not set")
        self.session = session or requests.Session()
        self.sleep = sleep

    @property
    def endpoint(self) -> str:
        return f"{self.config.api_base.rstrip('/')}/models/{self.config.model}:generateContent"

    def generate_text(self, parts: list[dict[str, Any]]) -> str:
        """Send one user turn and return the first candidate's text.

        Raises:
            ModelError: On a non-retryable status, after retry exhaustion,
                or when a 200 response carries no text (e.g. safety block).
        """
        payload = {"contents": [{"role": "user", "parts": parts}]}
        max_attempts = self.config.max_retries
        delay_ms = self.config.base_backoff_ms

        for attempt in range(1, max_attempts + 1):
            try:
                response = self.session.post(
                    self.endpoint,
                    json=payload,
                    headers={"x-goog-api-key": self.api_key},
                    timeout=self.config.request_timeout,
                )
            except requests.RequestException as e:
                raise ModelError(f"Gemini request failed: {e}", attempts=attempt) from e

            if response.status_code == 200:
                return _extract_text(response, attempt)

            if response.status_code in RETRYABLE_STATUS_CODES:
                logger.warning(
                    "Gemini attempt %d of %d failed with status %d",
                    attempt,
                    max_attempts,
                    response.status_code,
                )
                if attempt < max_attempts:
                    logger.info("Retrying in %.1fs", delay_ms / 1000)
                    self.sleep(delay_ms / 1000)
                    delay_ms *= 2
                continue

            logger.error("Gemini API error %d: %s", response.status_code, response.text)
            raise ModelError(
                f"Gemini call failed with status {response.status_code}: {response.text}",
                status_code=response.status_code,
                attempts=attempt,
            )

        raise ModelError(
            f"Gemini call failed after {max_attempts} attempts (rate limited or overloaded)",
            status_code=response.status_code,
            attempts=max_attempts,
        )

    def generate_json(self, prompt: str, extra_parts: list[dict[str, Any]] | None = None) -> Any:
        """Generate a response and decode it as JSON, tolerating ```json fences."""
        parts = [{"text": prompt}] + list(extra_parts or [])
        text = self.generate_text(parts)
        cleaned = _JSON_FENCE_RE.sub("", text).strip()
        try:
            return json.loads(cleaned)
        except json.JSONDecodeError as e:
            raise ModelError(f"Gemini returned invalid JSON: {e}") from e


def _extract_text(response: requests.Response, attempt: int) -> str:
    try:
        data = response.json()
    except ValueError as e:
        raise ModelError(f"Gemini returned a non-JSON body: {e}", status_code=200, attempts=attempt) from e

    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        text = None

    if not text:
        block_reason = (data.get("promptFeedback") or {}).get("blockReason") or "unexpected response structure"
        logger.warning("Gemini returned no content. Reason: %s", block_reason)
        raise ModelError(
            f"Gemini returned no content. Reason: {block_reason}",
            status_code=200,
            block_reason=block_reason,
            attempts=attempt,
        )
    return text
