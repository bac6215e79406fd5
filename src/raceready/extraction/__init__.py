"""Meet-program extraction: tolerant parsing, chunk planning and merge."""

from .merge import merge_events
from .models import AthleteEntry, EventRecord, ExtractionRequest, HighlightTarget, MergedExtraction
from .orchestrator import AllChunksFailedError, ModelChunkExtractor, extract, extract_sync
from .parser import parse_events_response, parse_highlight_response
from .planner import plan_chunks

__all__ = [
    "AllChunksFailedError",
    "AthleteEntry",
    "EventRecord",
    "ExtractionRequest",
    "HighlightTarget",
    "MergedExtraction",
    "ModelChunkExtractor",
    "extract",
    "extract_sync",
    "merge_events",
    "parse_events_response",
    "parse_highlight_response",
    "plan_chunks",
]
