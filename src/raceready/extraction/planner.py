"""Chunk planning for large meet programs."""

from __future__ import annotations

import math

from raceready.extraction.config import ChunkingSettings
from raceready.extraction.models import ExtractionRequest


def estimate_pages(byte_length: int, *, bytes_per_page: int) -> int:
    return max(1, math.ceil(byte_length / bytes_per_page))


def plan_chunks(byte_length: int, settings: ChunkingSettings | None = None) -> list[str | None]:
    """Return one page hint per extraction call.

    ``[None]`` means single-shot extraction.  Otherwise the estimated page
    range is cut into contiguous ``"pages A-B"`` bands, the last band taking
    the remainder.
    """

    if byte_length < 0:
        raise ValueError("byte_length cannot be negative")

    config = settings or ChunkingSettings()
    if byte_length <= config.single_shot_max_bytes:
        return [None]

    pages = estimate_pages(byte_length, bytes_per_page=config.bytes_per_page)
    chunk_count = min(config.max_chunks, max(2, math.ceil(pages / config.pages_per_chunk)))
    pages = max(pages, chunk_count)
    band = pages // chunk_count

    hints: list[str | None] = []
    for index in range(chunk_count):
        first = index * band + 1
        last = pages if index == chunk_count - 1 else (index + 1) * band
        hints.append(f"pages {first}-{last}")
    return hints


def build_requests(document: bytes, settings: ChunkingSettings | None = None) -> list[ExtractionRequest]:
    """Wrap planned hints into requests; each one carries the whole document."""

    return [ExtractionRequest(document=document, page_hint=hint) for hint in plan_chunks(len(document), settings)]
