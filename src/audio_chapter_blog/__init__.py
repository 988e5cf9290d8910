"""Audio to chaptered blog post pipeline."""

from .chapters import format_chapters, format_timestamp
from .config import PipelineConfig, load_config
from .errors import (
    ConfigurationError,
    NetworkError,
    PipelineError,
    PublishError,
    StorageError,
    SummarizationError,
    TranscriptionError,
    TranscriptionTimeoutError,
)
from .pipeline import process_audio, summarize_utterances
from .publisher import GhostPublisher
from .storage import MinioUploader
from .summarizer import CompletionSummarizer
from .transcription import AssemblyAITranscriptionClient

__all__ = [
    "AssemblyAITranscriptionClient",
    "CompletionSummarizer",
    "ConfigurationError",
    "GhostPublisher",
    "MinioUploader",
    "NetworkError",
    "PipelineConfig",
    "PipelineError",
    "PublishError",
    "StorageError",
    "SummarizationError",
    "TranscriptionError",
    "TranscriptionTimeoutError",
    "format_chapters",
    "format_timestamp",
    "load_config",
    "process_audio",
    "summarize_utterances",
]
