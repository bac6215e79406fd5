"""OpenRouter client that sends a PDF plus an instruction prompt to a vision model."""

from __future__ import annotations

import base64
from dataclasses import dataclass
import logging
import time
from typing import Any, Callable

import openai

from raceready.llm.config import ModelSettings

logger = logging.getLogger(__name__)

TRANSIENT_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})
_TRANSIENT_SDK_ERRORS = (
    openai.RateLimitError,
    openai.APITimeoutError,
    openai.APIConnectionError,
    openai.InternalServerError,
)


@dataclass(slots=True)
class ModelRequestError(RuntimeError):
    """A document model call produced no usable text."""

    model: str
    message: str

    def __str__(self) -> str:
        return f"{self.message} [{self.model}]"


def pdf_data_url(document: bytes) -> str:
    return "data:application/pdf;base64," + base64.b64encode(document).decode("ascii")


def is_transient(exc: Exception) -> bool:
    if isinstance(exc, _TRANSIENT_SDK_ERRORS + (TimeoutError, ConnectionError)):
        return True
    return getattr(exc, "status_code", None) in TRANSIENT_STATUS_CODES


def _message_text(response: Any) -> str | None:
    choices = getattr(response, "choices", None) or []
    if not choices:
        return None
    content = getattr(getattr(choices[0], "message", None), "content", None)
    if isinstance(content, list):
        # Some providers split the reply into typed parts.
        content = "".join(part.get("text", "") for part in content if isinstance(part, dict))
    return str(content or "")


class OpenRouterDocumentModel:
    """Chat-completions wrapper attaching the source PDF to every prompt.

    Transient failures (rate limits, 5xx, timeouts) are retried with
    exponential backoff; anything else fails on the first attempt.
    """

    def __init__(
        self,
        settings: ModelSettings,
        *,
        client: Any | None = None,
        max_retries: int = 2,
        retry_base_seconds: float = 0.5,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if max_retries < 0 or retry_base_seconds < 0:
            raise ValueError("max_retries and retry_base_seconds must be >= 0")

        self._settings = settings
        self._client = client if client is not None else openai.OpenAI(api_key=settings.api_key, base_url=settings.base_url)
        self._max_retries = max_retries
        self._retry_base_seconds = retry_base_seconds
        self._sleep = sleep

    @property
    def model(self) -> str:
        return self._settings.model

    def complete(self, document: bytes, prompt: str, *, max_tokens: int | None = None) -> str:
        """Return the raw text the model produced for ``prompt`` over ``document``."""

        if not prompt.strip():
            raise ValueError("prompt cannot be empty")
        if not document:
            raise ValueError("document cannot be empty")
        limit = self._settings.max_tokens if max_tokens is None else max_tokens
        if limit < 1:
            raise ValueError("max_tokens must be >= 1")

        request = {
            "model": self.model,
            "temperature": 0,
            "max_tokens": limit,
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": prompt.strip()},
                        {"type": "image_url", "image_url": {"url": pdf_data_url(document)}},
                    ],
                }
            ],
        }
        response = self._send(request)

        text = _message_text(response)
        if text is None:
            raise ModelRequestError(self.model, "Model response missing choices")
        if not text.strip():
            raise ModelRequestError(self.model, "Model response returned empty text")
        return text.strip()

    def _send(self, request: dict[str, Any]) -> Any:
        total_attempts = self._max_retries + 1
        attempt = 0
        while True:
            try:
                return self._client.chat.completions.create(**request)
            except Exception as exc:
                attempt += 1
                if attempt >= total_attempts or not is_transient(exc):
                    raise ModelRequestError(
                        self.model,
                        f"Model request failed after {total_attempts} attempt(s): {exc}",
                    ) from exc
                delay = self._retry_base_seconds * 2 ** (attempt - 1)
                logger.warning("Transient model error (%s), attempt %d/%d; sleeping %.2fs", exc, attempt, total_attempts, delay)
                self._sleep(delay)
