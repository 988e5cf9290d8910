"""Wire schemas for the JSON returned by the remote services.

Responses are validated here so the rest of the package only sees the
domain records from :mod:`audio_chapter_blog.models`.
"""

from __future__ import annotations

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from .models import Transcript, TranscriptStatus, Utterance


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class TranscriptJobCreated(_Payload):
    id: str


class UtterancePayload(_Payload):
    start: float  # milliseconds
    text: str
    end: Optional[float] = None
    speaker: Optional[str] = None

    def to_utterance(self) -> Utterance:
        return Utterance(
            start=self.start / 1000.0,
            text=self.text,
            speaker=self.speaker,
            end=self.end / 1000.0 if self.end is not None else None,
        )


class TranscriptPayload(_Payload):
    id: str
    status: Literal["queued", "processing", "completed", "failed"]
    text: Optional[str] = None
    utterances: Optional[List[UtterancePayload]] = None
    error: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value: Any) -> Any:
        # AssemblyAI reports failed jobs as "error".
        if isinstance(value, str):
            value = value.strip().lower()
            if value == "error":
                return "failed"
        return value

    def to_transcript(self) -> Transcript:
        return Transcript(
            id=self.id,
            status=TranscriptStatus(self.status),
            text=self.text or "",
            utterances=tuple(item.to_utterance() for item in self.utterances or []),
        )


class CompletionChoice(_Payload):
    text: str


class CompletionPayload(_Payload):
    choices: List[CompletionChoice]

    @field_validator("choices")
    @classmethod
    def _require_choice(cls, value: List[CompletionChoice]) -> List[CompletionChoice]:
        if not value:
            raise ValueError("completion response has no choices")
        return value


class GhostPostPayload(_Payload):
    id: str
    title: str
    url: Optional[str] = None
    status: Optional[str] = None


class GhostPostsEnvelope(_Payload):
    posts: List[GhostPostPayload]

    @field_validator("posts")
    @classmethod
    def _require_post(cls, value: List[GhostPostPayload]) -> List[GhostPostPayload]:
        if not value:
            raise ValueError("post response is empty")
        return value


__all__ = [
    "CompletionChoice",
    "CompletionPayload",
    "GhostPostPayload",
    "GhostPostsEnvelope",
    "TranscriptJobCreated",
    "TranscriptPayload",
    "UtterancePayload",
]
