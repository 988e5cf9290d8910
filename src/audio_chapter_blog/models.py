from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


class TranscriptStatus(str, Enum):
    QUEUED = "queued"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (TranscriptStatus.COMPLETED, TranscriptStatus.FAILED)


@dataclass(frozen=True)
class AudioAsset:
    """A local audio file together with the URL of its uploaded copy."""

    local_path: Path
    remote_url: str
    bucket: str
    object_key: str


@dataclass(frozen=True)
class Utterance:
    start: float  # seconds from the beginning of the audio
    text: str
    speaker: Optional[str] = None
    end: Optional[float] = None


@dataclass(frozen=True)
class SummarizedUtterance:
    utterance: Utterance
    summary: str

    @property
    def start(self) -> float:
        return self.utterance.start

    @property
    def text(self) -> str:
        return self.utterance.text

    @property
    def speaker(self) -> Optional[str]:
        return self.utterance.speaker


@dataclass(frozen=True)
class Transcript:
    id: str
    status: TranscriptStatus
    text: str = ""
    utterances: tuple[Utterance, ...] = ()


# Chapter lines are plain "HH:MM:SS text" strings.
ChapterLine = str


@dataclass(frozen=True)
class Post:
    title: str
    html: str


@dataclass(frozen=True)
class PostHandle:
    id: str
    title: str
    url: Optional[str] = None
    status: Optional[str] = None


@dataclass(frozen=True)
class PipelineResult:
    asset: AudioAsset
    transcript: Transcript
    summarized_utterances: tuple[SummarizedUtterance, ...]
    chapters: tuple[ChapterLine, ...]
    chapter_summary: str
    post: Post
    handle: PostHandle


__all__ = [
    "AudioAsset",
    "ChapterLine",
    "PipelineResult",
    "Post",
    "PostHandle",
    "SummarizedUtterance",
    "Transcript",
    "TranscriptStatus",
    "Utterance",
]
