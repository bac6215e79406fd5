"""Runtime configuration for the document model client."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Mapping


DEFAULT_OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_DOCUMENT_MODEL = "google/gemini-2.5-pro"
DEFAULT_MAX_TOKENS = 50_000


@dataclass(frozen=True, slots=True)
class ModelSettings:
    """Validated OpenRouter settings used by extraction and highlighting."""

    api_key: str
    model: str = DEFAULT_DOCUMENT_MODEL
    base_url: str = DEFAULT_OPENROUTER_BASE_URL
    max_tokens: int = DEFAULT_MAX_TOKENS

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ModelSettings":
        source: Mapping[str, str] = os.environ if environ is None else environ

        api_key = source.get("OPENROUTER_API_KEY", "").strip()
        model = source.get("OPENROUTER_DOCUMENT_MODEL", DEFAULT_DOCUMENT_MODEL).strip()
        base_url = source.get("OPENROUTER_BASE_URL", DEFAULT_OPENROUTER_BASE_URL).strip()
        max_tokens_raw = source.get("OPENROUTER_MAX_TOKENS", str(DEFAULT_MAX_TOKENS)).strip()

        if not api_key:
            raise ValueError("Missing required model environment variable: OPENROUTER_API_KEY")
        if not model:
            raise ValueError("OPENROUTER_DOCUMENT_MODEL cannot be empty")
        if not base_url:
            raise ValueError("OPENROUTER_BASE_URL cannot be empty")
        if not (base_url.startswith("http://") or base_url.startswith("https://")):
            raise ValueError("OPENROUTER_BASE_URL must start with http:// or https://")

        try:
            max_tokens = int(max_tokens_raw)
        except ValueError as exc:
            raise ValueError("OPENROUTER_MAX_TOKENS must be an integer") from exc
        if max_tokens < 1:
            raise ValueError("OPENROUTER_MAX_TOKENS must be >= 1")

        return cls(api_key=api_key, model=model, base_url=base_url.rstrip("/"), max_tokens=max_tokens)
