from __future__ import annotations

import logging
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from pathlib import Path
from typing import Any, Optional, Sequence

from .chapters import format_chapters
from .config import DEFAULT_BUCKET, DEFAULT_POST_TITLE, PipelineConfig, load_config
from .html_render import build_post
from .models import PipelineResult, SummarizedUtterance, Utterance
from .publisher import GhostPublisher
from .storage import MinioUploader
from .summarizer import CompletionSummarizer
from .transcription import AssemblyAITranscriptionClient

logger = logging.getLogger(__name__)


def summarize_utterances(
    utterances: Sequence[Utterance],
    summarizer: Any,
    *,
    max_workers: int = 8,
) -> list[SummarizedUtterance]:
    """Summarize every utterance concurrently and return results in input order.

    The first failing request aborts the whole batch: requests that have not
    started are cancelled, the caller does not wait for the ones in flight,
    and the error is re-raised.
    """

    if not utterances:
        return []

    executor = ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(utterances))))
    futures: list[Future[str]] = [executor.submit(summarizer.summarize, item.text) for item in utterances]
    try:
        done, _ = wait(futures, return_when=FIRST_EXCEPTION)
        for future in done:
            error = future.exception()
            if error is not None:
                raise error
        summaries = [future.result() for future in futures]
    except BaseException:
        executor.shutdown(wait=False, cancel_futures=True)
        raise
    executor.shutdown(wait=True)

    return [SummarizedUtterance(utterance=item, summary=summary) for item, summary in zip(utterances, summaries)]


def process_audio(
    audio_path: Path | str,
    *,
    config: Optional[PipelineConfig] = None,
    uploader: Optional[MinioUploader] = None,
    transcriber: Optional[AssemblyAITranscriptionClient] = None,
    summarizer: Optional[CompletionSummarizer] = None,
    publisher: Optional[GhostPublisher] = None,
    bucket: str | None = None,
    title: str | None = None,
    max_workers: int | None = None,
) -> PipelineResult:
    """Run the end-to-end pipeline from a local audio file to a published post.

    Any failure aborts the run; nothing is published unless every stage
    succeeds. Each call publishes a new post.
    """

    path = Path(audio_path)
    if not path.is_file():
        raise FileNotFoundError(f"Audio file does not exist: {path}")

    if config is None and any(client is None for client in (uploader, transcriber, summarizer, publisher)):
        config = load_config()

    if uploader is None:
        uploader = MinioUploader.from_config(config.storage)
    if transcriber is None:
        transcriber = AssemblyAITranscriptionClient.from_config(config.transcription)
    if summarizer is None:
        summarizer = CompletionSummarizer.from_config(config.summarizer)
    if publisher is None:
        publisher = GhostPublisher.from_config(config.publisher)

    target_bucket = bucket or (config.storage.bucket if config is not None else DEFAULT_BUCKET)
    post_title = title or (config.post_title if config is not None else DEFAULT_POST_TITLE)
    workers = max_workers or (config.max_workers if config is not None else 8)

    asset = uploader.upload(path, target_bucket)
    logger.info("Uploaded %s to %s", path.name, asset.remote_url)

    job_id = transcriber.submit(asset.remote_url)
    transcript = transcriber.await_completion(job_id)

    summarized = summarize_utterances(transcript.utterances, summarizer, max_workers=workers)
    logger.info("Summarized %d utterances", len(summarized))

    chapters = format_chapters(summarized)
    chapter_summary = summarizer.summarize("\n".join(chapters)) if chapters else ""

    post = build_post(post_title, chapter_summary, transcript.text, asset.remote_url)
    handle = publisher.publish(post.title, post.html)
    logger.info("Published post %s", handle.url or handle.id)

    return PipelineResult(
        asset=asset,
        transcript=transcript,
        summarized_utterances=tuple(summarized),
        chapters=tuple(chapters),
        chapter_summary=chapter_summary,
        post=post,
        handle=handle,
    )


__all__ = ["process_audio", "summarize_utterances"]
