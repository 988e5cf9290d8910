from __future__ import annotations

import logging
from typing import Any

import requests
from pydantic import ValidationError

from .config import SummarizerConfig
from .errors import NetworkError, SummarizationError
from .schemas import CompletionPayload

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = "Summarize the following text:\n\n{text}"


class CompletionSummarizer:
    """Client for an OpenAI-compatible text completion endpoint."""

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = "https://api.openai.com/v1",
        model: str = "gpt-3.5-turbo-instruct",
        max_tokens: int = 150,
        timeout: int = 120,
    ) -> None:
        if not api_key:
            raise SummarizationError("OPENAI_API_KEY is not set")

        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.max_tokens = max_tokens
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: SummarizerConfig) -> "CompletionSummarizer":
        return cls(
            api_key=config.api_key,
            base_url=config.base_url,
            model=config.model,
            max_tokens=config.max_tokens,
            timeout=config.request_timeout,
        )

    def summarize(self, text: str) -> str:
        """Return a condensed version of ``text``.

        Length limits are enforced by the remote model, so very long inputs may
        come back truncated.
        """

        if not text or not text.strip():
            raise ValueError("text to summarize must not be empty")

        payload: dict[str, Any] = {
            "model": self.model,
            "prompt": PROMPT_TEMPLATE.format(text=text),
            "max_tokens": self.max_tokens,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            response = requests.post(
                f"{self.base_url}/completions",
                headers=headers,
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise NetworkError("Summarization service is unreachable") from exc

        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            raise SummarizationError(f"Summarization request failed: HTTP {response.status_code}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise SummarizationError("Summarization response is not JSON") from exc

        try:
            completion = CompletionPayload.model_validate(data)
        except ValidationError as exc:
            raise SummarizationError("Unexpected summarization response payload") from exc

        summary = completion.choices[0].text.strip()
        logger.debug("Summarized %d chars into %d chars", len(text), len(summary))
        return summary


__all__ = ["CompletionSummarizer", "PROMPT_TEMPLATE"]
