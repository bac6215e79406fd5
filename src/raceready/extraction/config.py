"""Runtime configuration for chunked meet-program extraction."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Mapping


DEFAULT_SINGLE_SHOT_MAX_BYTES = 1_500_000
DEFAULT_BYTES_PER_PAGE = 50_000
DEFAULT_PAGES_PER_CHUNK = 10
DEFAULT_MAX_CHUNKS = 6


def _parse_positive_int(*, name: str, raw_value: str, minimum: int = 1) -> int:
    try:
        value = int(raw_value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer") from exc
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}")
    return value


@dataclass(frozen=True, slots=True)
class ChunkingSettings:
    """Thresholds steering single-shot versus chunked extraction."""

    single_shot_max_bytes: int = DEFAULT_SINGLE_SHOT_MAX_BYTES
    bytes_per_page: int = DEFAULT_BYTES_PER_PAGE
    pages_per_chunk: int = DEFAULT_PAGES_PER_CHUNK
    max_chunks: int = DEFAULT_MAX_CHUNKS

    def __post_init__(self) -> None:
        if self.single_shot_max_bytes < 0:
            raise ValueError("single_shot_max_bytes cannot be negative")
        if self.bytes_per_page < 1:
            raise ValueError("bytes_per_page must be >= 1")
        if self.pages_per_chunk < 1:
            raise ValueError("pages_per_chunk must be >= 1")
        if self.max_chunks < 2:
            raise ValueError("max_chunks must be >= 2")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ChunkingSettings":
        source: Mapping[str, str] = os.environ if environ is None else environ

        values = {
            "single_shot_max_bytes": ("RACEREADY_SINGLE_SHOT_MAX_BYTES", DEFAULT_SINGLE_SHOT_MAX_BYTES, 0),
            "bytes_per_page": ("RACEREADY_BYTES_PER_PAGE", DEFAULT_BYTES_PER_PAGE, 1),
            "pages_per_chunk": ("RACEREADY_PAGES_PER_CHUNK", DEFAULT_PAGES_PER_CHUNK, 1),
            "max_chunks": ("RACEREADY_MAX_CHUNKS", DEFAULT_MAX_CHUNKS, 2),
        }

        parsed: dict[str, int] = {}
        for field_name, (env_name, default, minimum) in values.items():
            raw_value = source.get(env_name, str(default)).strip()
            if not raw_value:
                raise ValueError(f"{env_name} cannot be empty")
            parsed[field_name] = _parse_positive_int(name=env_name, raw_value=raw_value, minimum=minimum)

        return cls(**parsed)
