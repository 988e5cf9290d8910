from __future__ import annotations

import logging
import time
from typing import Any, Callable, Optional

import jwt
import requests
from pydantic import ValidationError

from .config import PublisherConfig
from .errors import ConfigurationError, NetworkError, PublishError
from .models import Post, PostHandle
from .schemas import GhostPostsEnvelope

logger = logging.getLogger(__name__)

_TOKEN_LIFETIME = 5 * 60  # seconds; the Admin API rejects tokens valid for longer


def _split_admin_key(admin_key: str) -> tuple[str, bytes]:
    key_id, sep, secret = admin_key.partition(":")
    if not sep or not key_id or not secret:
        raise ConfigurationError("GHOST_ADMIN_API_KEY must look like '<id>:<secret>'")
    try:
        return key_id, bytes.fromhex(secret)
    except ValueError as exc:
        raise ConfigurationError("GHOST_ADMIN_API_KEY secret must be hex encoded") from exc


class GhostPublisher:
    """Creates posts through the Ghost Admin API.

    Every :meth:`publish` call creates a new post; there is no update path.
    """

    def __init__(
        self,
        *,
        admin_url: str,
        admin_key: str,
        api_version: Optional[str] = "v3",
        post_status: str = "draft",
        timeout: int = 30,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not admin_url:
            raise ConfigurationError("GHOST_ADMIN_API_URL is not set")
        self.admin_url = admin_url.rstrip("/")
        self.key_id, self._secret = _split_admin_key(admin_key)
        self.api_version = api_version
        self.post_status = post_status
        self.timeout = timeout
        self._clock = clock

    @classmethod
    def from_config(cls, config: PublisherConfig) -> "GhostPublisher":
        return cls(
            admin_url=config.admin_url,
            admin_key=config.admin_key,
            api_version=config.api_version,
            post_status=config.post_status,
            timeout=config.request_timeout,
        )

    @property
    def audience(self) -> str:
        return f"/{self.api_version}/admin/" if self.api_version else "/admin/"

    @property
    def posts_endpoint(self) -> str:
        if self.api_version:
            return f"{self.admin_url}/ghost/api/{self.api_version}/admin/posts/"
        return f"{self.admin_url}/ghost/api/admin/posts/"

    def build_token(self) -> str:
        issued_at = int(self._clock())
        claims = {"iat": issued_at, "exp": issued_at + _TOKEN_LIFETIME, "aud": self.audience}
        return jwt.encode(claims, self._secret, algorithm="HS256", headers={"kid": self.key_id})

    def publish(self, title: str, html: str) -> PostHandle:
        if not title.strip():
            raise PublishError("Post title is empty; cannot create a post.")

        headers = {
            "Authorization": f"Ghost {self.build_token()}",
            "Content-Type": "application/json",
        }
        body: dict[str, Any] = {
            "posts": [{"title": title, "html": html, "status": self.post_status}],
        }

        try:
            response = requests.post(
                self.posts_endpoint,
                params={"source": "html"},
                headers=headers,
                json=body,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise NetworkError("Publishing platform is unreachable") from exc

        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            raise PublishError(f"Failed to create post: HTTP {response.status_code}") from exc

        try:
            envelope = GhostPostsEnvelope.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise PublishError("Unexpected post creation response payload") from exc

        post = envelope.posts[0]
        logger.info("Created post %s (%s)", post.id, post.url or post.status or "no url")
        return PostHandle(id=post.id, title=post.title, url=post.url, status=post.status)

    def publish_post(self, post: Post) -> PostHandle:
        return self.publish(post.title, post.html)


__all__ = ["GhostPublisher"]
