from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .errors import ConfigurationError

DEFAULT_BUCKET = "audio-files"
DEFAULT_POST_TITLE = "Transcription and Summary"


@dataclass(frozen=True)
class StorageConfig:
    endpoint: str
    access_key: str
    secret_key: str
    port: int = 9000
    secure: bool = True
    bucket: str = DEFAULT_BUCKET


@dataclass(frozen=True)
class TranscriptionConfig:
    api_key: str
    base_url: str = "https://api.assemblyai.com/v2"
    poll_interval: float = 5.0
    max_poll_interval: float = 30.0
    backoff_factor: float = 1.5
    timeout: Optional[float] = 3600.0
    request_timeout: int = 30


@dataclass(frozen=True)
class SummarizerConfig:
    api_key: str
    base_url: str = "https://api.openai.com/v1"
    model: str = "gpt-3.5-turbo-instruct"
    max_tokens: int = 150
    request_timeout: int = 120


@dataclass(frozen=True)
class PublisherConfig:
    admin_url: str
    admin_key: str
    api_version: Optional[str] = "v3"
    post_status: str = "draft"
    request_timeout: int = 30


@dataclass(frozen=True)
class PipelineConfig:
    storage: StorageConfig
    transcription: TranscriptionConfig
    summarizer: SummarizerConfig
    publisher: PublisherConfig
    max_workers: int = 8
    post_title: str = field(default=DEFAULT_POST_TITLE)


def _required(env: Mapping[str, str], name: str) -> str:
    value = env.get(name, "").strip()
    if not value:
        raise ConfigurationError(f"{name} is not set")
    return value


def _optional(env: Mapping[str, str], name: str, default: str) -> str:
    value = env.get(name, "").strip()
    return value or default


def _int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return value


def _float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return value


def _bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name, "").strip().lower()
    if not raw:
        return default
    if raw in {"1", "true", "yes", "on"}:
        return True
    if raw in {"0", "false", "no", "off"}:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {raw!r}")


def _timeout(env: Mapping[str, str], name: str, default: Optional[float]) -> Optional[float]:
    raw = env.get(name, "").strip().lower()
    if not raw:
        return default
    if raw in {"0", "none", "unbounded"}:
        return None
    return _float(env, name, default or 0.0)


def load_config(env: Optional[Mapping[str, str]] = None) -> PipelineConfig:
    """Read the pipeline settings from ``env`` (defaults to ``os.environ``).

    Settings are read once; the returned config is immutable.
    """

    source: Mapping[str, str] = os.environ if env is None else env

    api_version = _optional(source, "GHOST_API_VERSION", "v3")
    if api_version.lower() in {"none", "latest"}:
        api_version_value: Optional[str] = None
    else:
        api_version_value = api_version

    return PipelineConfig(
        storage=StorageConfig(
            endpoint=_required(source, "MINIO_ENDPOINT"),
            access_key=_required(source, "MINIO_ACCESS_KEY"),
            secret_key=_required(source, "MINIO_SECRET_KEY"),
            port=_int(source, "MINIO_PORT", 9000),
            secure=_bool(source, "MINIO_SECURE", True),
            bucket=_optional(source, "MINIO_BUCKET", DEFAULT_BUCKET),
        ),
        transcription=TranscriptionConfig(
            api_key=_required(source, "ASSEMBLYAI_API_KEY"),
            base_url=_optional(source, "ASSEMBLYAI_BASE_URL", "https://api.assemblyai.com/v2"),
            poll_interval=_float(source, "TRANSCRIPTION_POLL_INTERVAL", 5.0),
            max_poll_interval=_float(source, "TRANSCRIPTION_MAX_POLL_INTERVAL", 30.0),
            backoff_factor=_float(source, "TRANSCRIPTION_BACKOFF_FACTOR", 1.5),
            timeout=_timeout(source, "TRANSCRIPTION_TIMEOUT", 3600.0),
        ),
        summarizer=SummarizerConfig(
            api_key=_required(source, "OPENAI_API_KEY"),
            base_url=_optional(source, "OPENAI_BASE_URL", "https://api.openai.com/v1"),
            model=_optional(source, "OPENAI_MODEL", "gpt-3.5-turbo-instruct"),
            max_tokens=_int(source, "SUMMARY_MAX_TOKENS", 150),
        ),
        publisher=PublisherConfig(
            admin_url=_required(source, "GHOST_ADMIN_API_URL"),
            admin_key=_required(source, "GHOST_ADMIN_API_KEY"),
            api_version=api_version_value,
            post_status=_optional(source, "GHOST_POST_STATUS", "draft"),
        ),
        max_workers=_int(source, "PIPELINE_MAX_WORKERS", 8),
        post_title=_optional(source, "POST_TITLE", DEFAULT_POST_TITLE),
    )


__all__ = [
    "DEFAULT_BUCKET",
    "DEFAULT_POST_TITLE",
    "PipelineConfig",
    "PublisherConfig",
    "StorageConfig",
    "SummarizerConfig",
    "TranscriptionConfig",
    "load_config",
]
