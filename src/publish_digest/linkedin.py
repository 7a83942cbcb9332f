"""LinkedIn UGC post publisher."""

from __future__ import annotations

import logging
import os
from typing import Optional
from urllib.parse import quote

import requests

from common.errors import ConfigError, PublishError

logger = logging.getLogger(__name__)

LINKEDIN_API_BASE = "https://api.linkedin.com/v2"


class LinkedInPublisher:
    """Post share updates (optionally with an article link card) and delete them by URN."""

    def __init__(
        self,
        access_token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        api_base: str = LINKEDIN_API_BASE,
        timeout: int = 30,
    ) -> None:
        self.access_token = access_token or os.environ.get("LINKEDIN_ACCESS_TOKEN")
        if not self.access_token:
            raise ConfigError("LINKEDIN_ACCESS_TOKEN is not set")
        self.session = session or requests.Session()
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self._person_urn: Optional[str] = None

    def _headers(self, json_body: bool = False) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.access_token}",
            "X-Restli-Protocol-Version": "2.0.0",
        }
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    def person_urn(self) -> str:
        """The authenticated member's URN, from the OpenID userinfo ``sub`` claim."""
        if self._person_urn:
            return self._person_urn

        try:
            response = self.session.get(
                f"{self.api_base}/userinfo", headers=self._headers(), timeout=self.timeout
            )
        except requests.RequestException as e:
            raise PublishError(f"Failed to get LinkedIn profile: {e}", channel="social") from e

        if response.status_code != 200:
            raise PublishError(
                f"Failed to get LinkedIn profile: {response.status_code} - {response.text}",
                channel="social",
            )
        try:
            sub = response.json().get("sub")
        except ValueError as e:
            raise PublishError(f"LinkedIn userinfo response is not JSON: {e}", channel="social") from e
        if not sub:
            raise PublishError("LinkedIn userinfo response has no 'sub'", channel="social")
        self._person_urn = sub if sub.startswith("urn:") else f"urn:li:person:{sub}"
        return self._person_urn

    def build_post_body(
        self,
        author: str,
        message: str,
        link_url: str = "",
        link_title: str = "",
        link_description: str = "",
    ) -> dict:
        share_content = {
            "shareCommentary": {"text": message},
            "shareMediaCategory": "NONE",
        }
        if link_url:
            share_content["shareMediaCategory"] = "ARTICLE"
            share_content["media"] = [
                {
                    "status": "READY",
                    "description": {"text": link_description or "News Update"},
                    "originalUrl": link_url,
                    "title": {"text": link_title or "Click to view"},
                }
            ]
        return {
            "author": author,
            "lifecycleState": "PUBLISHED",
            "specificContent": {"com.linkedin.ugc.ShareContent": share_content},
            "visibility": {"com.linkedin.ugc.MemberNetworkVisibility": "PUBLIC"},
        }

    def publish(self, message: str, link_url: str = "", link_title: str = "", link_description: str = "") -> str:
        body = self.build_post_body(self.person_urn(), message, link_url, link_title, link_description)
        try:
            response = self.session.post(
                f"{self.api_base}/ugcPosts",
                json=body,
                headers=self._headers(json_body=True),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise PublishError(f"LinkedIn post failed: {e}", channel="social") from e

        if response.status_code != 201:
            raise PublishError(
                f"LinkedIn post failed: {response.status_code} - {response.text}", channel="social"
            )

        post_id = response.headers.get("x-restli-id", "")
        if not post_id and response.text:
            try:
                post_id = response.json().get("id") or ""
            except ValueError as e:
                raise PublishError(f"LinkedIn post response is not JSON: {e}", channel="social") from e
        logger.info("Posted to LinkedIn. ID: %s", post_id)
        return post_id

    def delete(self, post_id: str) -> None:
        url = f"{self.api_base}/ugcPosts/{quote(post_id, safe='')}"
        try:
            response = self.session.delete(url, headers=self._headers(), timeout=self.timeout)
        except requests.RequestException as e:
            raise PublishError(f"LinkedIn delete failed: {e}", channel="social") from e

        if response.status_code not in (200, 204):
            raise PublishError(
                f"LinkedIn delete failed: {response.status_code} - {response.text}", channel="social"
            )
        logger.info("Deleted LinkedIn post: %s", post_id)
