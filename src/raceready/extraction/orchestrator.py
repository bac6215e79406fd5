"""Concurrent chunked extraction with partial-failure tolerance."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
from typing import Protocol, Sequence

from raceready.extraction.config import ChunkingSettings
from raceready.extraction.merge import merge_events
from raceready.extraction.models import (
    MANUAL_REVIEW_EVENT_NAME,
    ChunkFailure,
    EventRecord,
    ExtractionRequest,
    MergedExtraction,
)
from raceready.extraction.parser import parse_events_response
from raceready.extraction.planner import build_requests
from raceready.extraction.prompts import build_events_prompt

logger = logging.getLogger(__name__)

PLACEHOLDER_RAW_TEXT_CHARS = 5000


class ChunkExtractor(Protocol):
    """Blocking model call returning the raw response text for one chunk."""

    def __call__(self, request: ExtractionRequest) -> str:
        ...


class DocumentModel(Protocol):
    def complete(self, document: bytes, prompt: str, *, max_tokens: int | None = None) -> str:
        ...


class ModelChunkExtractor:
    """Adapt a document model to the per-chunk extractor contract."""

    def __init__(self, model: DocumentModel, *, max_tokens: int | None = None) -> None:
        self._model = model
        self._max_tokens = max_tokens

    def __call__(self, request: ExtractionRequest) -> str:
        prompt = build_events_prompt(request.page_hint)
        return self._model.complete(request.document, prompt, max_tokens=self._max_tokens)


@dataclass(slots=True)
class AllChunksFailedError(RuntimeError):
    """Every chunk's model call errored; nothing usable came back."""

    failures: tuple[ChunkFailure, ...]

    def __str__(self) -> str:
        details = "; ".join(f"chunk {failure.index}: {failure.error}" for failure in self.failures)
        return f"All {len(self.failures)} extraction chunk(s) failed: {details}"


@dataclass(frozen=True, slots=True)
class ChunkOutcome:
    """Settled result of one chunk: parsed events or a failure."""

    index: int
    page_hint: str | None
    events: tuple[EventRecord, ...] = ()
    raw_text: str = ""
    failure: ChunkFailure | None = None

    @property
    def succeeded(self) -> bool:
        return self.failure is None


async def _run_one(index: int, request: ExtractionRequest, extractor: ChunkExtractor) -> ChunkOutcome:
    raw_text = await asyncio.to_thread(extractor, request)
    events = parse_events_response(raw_text)
    if not events:
        logger.warning("Chunk %d (%s) yielded no parseable events", index, request.page_hint or "all pages")
    else:
        logger.info("Chunk %d (%s) yielded %d event(s)", index, request.page_hint or "all pages", len(events))
    return ChunkOutcome(index=index, page_hint=request.page_hint, events=tuple(events), raw_text=raw_text)


async def run_chunks(requests: Sequence[ExtractionRequest], extractor: ChunkExtractor) -> list[ChunkOutcome]:
    """Run every chunk concurrently and return outcomes in dispatch order."""

    if not requests:
        raise ValueError("requests cannot be empty")

    settled = await asyncio.gather(
        *(_run_one(index, request, extractor) for index, request in enumerate(requests)),
        return_exceptions=True,
    )

    outcomes: list[ChunkOutcome] = []
    for index, (request, result) in enumerate(zip(requests, settled)):
        if isinstance(result, BaseException):
            if not isinstance(result, Exception):
                raise result
            logger.error("Chunk %d (%s) failed: %s", index, request.page_hint or "all pages", result)
            failure = ChunkFailure(index=index, page_hint=request.page_hint, error=str(result))
            outcomes.append(ChunkOutcome(index=index, page_hint=request.page_hint, failure=failure))
        else:
            outcomes.append(result)
    return outcomes


def manual_review_placeholder(raw_text: str) -> EventRecord:
    return EventRecord(
        event_number=None,
        event_name=MANUAL_REVIEW_EVENT_NAME,
        athletes=(),
        raw_text=raw_text[:PLACEHOLDER_RAW_TEXT_CHARS],
    )


def merge_outcomes(outcomes: Sequence[ChunkOutcome]) -> MergedExtraction:
    """Merge settled chunk outcomes, applying the failure and fallback policy."""

    failures = tuple(outcome.failure for outcome in outcomes if outcome.failure is not None)
    succeeded = [outcome for outcome in outcomes if outcome.succeeded]
    if not succeeded:
        raise AllChunksFailedError(failures=failures)

    merged = merge_events(event for outcome in succeeded for event in outcome.events)
    if merged:
        return MergedExtraction(events=tuple(merged), chunk_count=len(outcomes), failures=failures)

    logger.warning("No events survived parsing; storing a manual-review placeholder")
    raw_text = "\n".join(outcome.raw_text for outcome in succeeded if outcome.raw_text)
    return MergedExtraction(
        events=(manual_review_placeholder(raw_text),),
        chunk_count=len(outcomes),
        failures=failures,
        used_fallback=True,
    )


async def extract(
    document: bytes,
    extractor: ChunkExtractor,
    settings: ChunkingSettings | None = None,
) -> MergedExtraction:
    """Plan, run and merge the extraction of one meet program."""

    requests = build_requests(document, settings)
    logger.info("Extracting %d byte document in %d chunk(s)", len(document), len(requests))
    outcomes = await run_chunks(requests, extractor)
    return merge_outcomes(outcomes)


def extract_sync(
    document: bytes,
    extractor: ChunkExtractor,
    settings: ChunkingSettings | None = None,
) -> MergedExtraction:
    return asyncio.run(extract(document, extractor, settings))
