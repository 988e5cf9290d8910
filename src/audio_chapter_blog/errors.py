from __future__ import annotations


class PipelineError(RuntimeError):
    """Base class for every failure raised by the audio-to-blog pipeline."""


class ConfigurationError(PipelineError):
    """Raised when required settings are missing or malformed."""


class NetworkError(PipelineError):
    """Raised when a remote service cannot be reached or the connection drops."""


class StorageError(PipelineError):
    """Raised when the object store rejects an upload."""


class TranscriptionError(PipelineError):
    """Raised when the transcription provider reports a failed job or a bad payload."""


class TranscriptionTimeoutError(TranscriptionError):
    """Raised when a transcription job does not reach a terminal state in time."""


class SummarizationError(PipelineError):
    """Raised when a completion request fails or returns an unusable payload."""


class PublishError(PipelineError):
    """Raised when the blogging platform refuses to create a post."""


__all__ = [
    "ConfigurationError",
    "NetworkError",
    "PipelineError",
    "PublishError",
    "StorageError",
    "SummarizationError",
    "TranscriptionError",
    "TranscriptionTimeoutError",
]
