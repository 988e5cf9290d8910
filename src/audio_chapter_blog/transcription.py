from __future__ import annotations

import logging
import time
from typing import Any, Callable, Optional

import requests
from pydantic import ValidationError

from .config import TranscriptionConfig
from .errors import NetworkError, TranscriptionError, TranscriptionTimeoutError
from .models import Transcript, TranscriptStatus
from .schemas import TranscriptJobCreated, TranscriptPayload

logger = logging.getLogger(__name__)


class AssemblyAITranscriptionClient:
    """Client for an AssemblyAI-style asynchronous transcription API.

    Jobs are created with :meth:`submit` and polled with :meth:`await_completion`.
    The wait between polls starts at ``poll_interval`` and grows by
    ``backoff_factor`` up to ``max_poll_interval``. A ``timeout`` of ``None``
    polls until the job reaches a terminal state.
    """

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = "https://api.assemblyai.com/v2",
        poll_interval: float = 5.0,
        max_poll_interval: float = 30.0,
        backoff_factor: float = 1.5,
        timeout: Optional[float] = 3600.0,
        request_timeout: int = 30,
        speaker_labels: bool = True,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if not api_key:
            raise TranscriptionError("ASSEMBLYAI_API_KEY is not set")
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        if backoff_factor < 1:
            raise ValueError("backoff_factor must be at least 1")

        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.poll_interval = poll_interval
        self.max_poll_interval = max(max_poll_interval, poll_interval)
        self.backoff_factor = backoff_factor
        self.timeout = timeout
        self.request_timeout = request_timeout
        self.speaker_labels = speaker_labels
        self._sleep = sleep
        self._clock = clock

    @classmethod
    def from_config(cls, config: TranscriptionConfig, **kwargs: Any) -> "AssemblyAITranscriptionClient":
        return cls(
            api_key=config.api_key,
            base_url=config.base_url,
            poll_interval=config.poll_interval,
            max_poll_interval=config.max_poll_interval,
            backoff_factor=config.backoff_factor,
            timeout=config.timeout,
            request_timeout=config.request_timeout,
            **kwargs,
        )

    def transcribe(self, remote_url: str) -> Transcript:
        return self.await_completion(self.submit(remote_url))

    def submit(self, remote_url: str) -> str:
        payload = {"audio_url": remote_url, "speaker_labels": self.speaker_labels}
        headers = {
            "authorization": self.api_key,
            "content-type": "application/json",
        }

        try:
            response = requests.post(
                f"{self.base_url}/transcript",
                headers=headers,
                json=payload,
                timeout=self.request_timeout,
            )
        except requests.RequestException as exc:
            raise NetworkError("Transcription service is unreachable") from exc

        data = self._decode(response, "Transcription job submission failed")
        try:
            job = TranscriptJobCreated.model_validate(data)
        except ValidationError as exc:
            raise TranscriptionError("Unexpected transcription job payload") from exc

        logger.info("Submitted transcription job %s for %s", job.id, remote_url)
        return job.id

    def fetch(self, job_id: str) -> Transcript:
        try:
            response = requests.get(
                f"{self.base_url}/transcript/{job_id}",
                headers={"authorization": self.api_key},
                timeout=self.request_timeout,
            )
        except requests.RequestException as exc:
            raise NetworkError("Transcription service is unreachable") from exc

        data = self._decode(response, f"Polling transcription job {job_id} failed")
        try:
            payload = TranscriptPayload.model_validate(data)
        except ValidationError as exc:
            raise TranscriptionError("Unexpected transcription payload") from exc

        if payload.status == TranscriptStatus.FAILED.value:
            reason = payload.error or "no reason given"
            raise TranscriptionError(f"Transcription job {job_id} failed: {reason}")

        return payload.to_transcript()

    def await_completion(self, job_id: str) -> Transcript:
        started = self._clock()
        interval = self.poll_interval
        polls = 0

        while True:
            transcript = self.fetch(job_id)
            polls += 1
            logger.debug("Transcription job %s is %s (poll %d)", job_id, transcript.status.value, polls)
            if transcript.status is TranscriptStatus.COMPLETED:
                logger.info(
                    "Transcription job %s completed with %d utterances",
                    job_id,
                    len(transcript.utterances),
                )
                return transcript

            wait = interval
            if self.timeout is not None:
                remaining = self.timeout - (self._clock() - started)
                if remaining <= 0:
                    raise TranscriptionTimeoutError(
                        f"Transcription job {job_id} still {transcript.status.value} "
                        f"after {self.timeout:g}s ({polls} polls)"
                    )
                wait = min(wait, remaining)

            self._sleep(wait)
            interval = min(interval * self.backoff_factor, self.max_poll_interval)

    @staticmethod
    def _decode(response: Any, context: str) -> Any:
        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            raise TranscriptionError(f"{context}: HTTP {response.status_code}") from exc
        try:
            return response.json()
        except ValueError as exc:
            raise TranscriptionError(f"{context}: response is not JSON") from exc


__all__ = ["AssemblyAITranscriptionClient"]
