from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import jwt
import pytest
import requests

from audio_chapter_blog.errors import ConfigurationError, NetworkError, PublishError
from audio_chapter_blog.publisher import GhostPublisher

KEY_ID = "6489a1b2c3d4e5f6a7b8c9d0"
SECRET = "a1b2c3d4e5f60718293a4b5c6d7e8f90a1b2c3d4e5f60718293a4b5c6d7e8f90"


def _publisher(**kwargs: Any) -> GhostPublisher:
    return GhostPublisher(admin_url="https://blog.example.com/", admin_key=f"{KEY_ID}:{SECRET}", **kwargs)


def _created_response(post: dict) -> MagicMock:
    response = MagicMock()
    response.status_code = 201
    response.json.return_value = {"posts": [post]}
    response.raise_for_status.return_value = None
    return response


def test_publish_posts_html_with_admin_token(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, Any] = {}

    def fake_post(url: str, params: dict, headers: dict, json: dict, timeout: int) -> MagicMock:
        captured.update(url=url, params=params, headers=headers, json=json)
        return _created_response(
            {"id": "post-1", "title": "Episode", "url": "https://blog.example.com/episode/", "status": "draft"}
        )

    monkeypatch.setattr("audio_chapter_blog.publisher.requests.post", fake_post)

    handle = _publisher().publish("Episode", "<p>body</p>")

    assert handle.id == "post-1"
    assert handle.url == "https://blog.example.com/episode/"
    assert handle.status == "draft"
    assert captured["url"] == "https://blog.example.com/ghost/api/v3/admin/posts/"
    assert captured["params"] == {"source": "html"}
    assert captured["json"] == {"posts": [{"title": "Episode", "html": "<p>body</p>", "status": "draft"}]}

    scheme, token = captured["headers"]["Authorization"].split(" ", 1)
    assert scheme == "Ghost"
    assert jwt.get_unverified_header(token)["kid"] == KEY_ID
    claims = jwt.decode(token, bytes.fromhex(SECRET), algorithms=["HS256"], audience="/v3/admin/")
    assert claims["exp"] - claims["iat"] == 300


def test_unversioned_api_uses_plain_admin_audience() -> None:
    publisher = _publisher(api_version=None)

    assert publisher.posts_endpoint == "https://blog.example.com/ghost/api/admin/posts/"
    token = publisher.build_token()
    jwt.decode(token, bytes.fromhex(SECRET), algorithms=["HS256"], audience="/admin/")


@pytest.mark.parametrize("admin_key", ["no-colon", ":secret", f"{KEY_ID}:not-hex"])
def test_malformed_admin_key_is_configuration_error(admin_key: str) -> None:
    with pytest.raises(ConfigurationError):
        GhostPublisher(admin_url="https://blog.example.com", admin_key=admin_key)


def test_http_error_becomes_publish_error(monkeypatch: pytest.MonkeyPatch) -> None:
    response = MagicMock()
    response.status_code = 422
    response.raise_for_status.side_effect = requests.HTTPError("validation failed")
    monkeypatch.setattr("audio_chapter_blog.publisher.requests.post", lambda *args, **kwargs: response)

    with pytest.raises(PublishError, match="HTTP 422"):
        _publisher().publish("Title", "<p>x</p>")


def test_empty_response_becomes_publish_error(monkeypatch: pytest.MonkeyPatch) -> None:
    response = MagicMock()
    response.json.return_value = {"posts": []}
    response.raise_for_status.return_value = None
    monkeypatch.setattr("audio_chapter_blog.publisher.requests.post", lambda *args, **kwargs: response)

    with pytest.raises(PublishError, match="Unexpected post creation response payload"):
        _publisher().publish("Title", "<p>x</p>")


def test_connection_error_becomes_network_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def refuse(*_args, **_kwargs):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr("audio_chapter_blog.publisher.requests.post", refuse)

    with pytest.raises(NetworkError):
        _publisher().publish("Title", "<p>x</p>")


def test_each_publish_creates_a_new_post(monkeypatch: pytest.MonkeyPatch) -> None:
    counter = iter(range(1, 10))

    def fake_post(*_args, **_kwargs) -> MagicMock:
        number = next(counter)
        return _created_response({"id": f"post-{number}", "title": "Same"})

    monkeypatch.setattr("audio_chapter_blog.publisher.requests.post", fake_post)
    publisher = _publisher()

    first = publisher.publish("Same", "<p>same</p>")
    second = publisher.publish("Same", "<p>same</p>")

    assert first.id != second.id
