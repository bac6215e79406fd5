"""Tolerant parsing of structured model responses.

The model is asked for a single JSON object but may wrap it in code fences,
leave trailing commas behind, or stop mid-array when it hits its output
limit.  Parsing first tries the whole payload; when that fails, a
string-aware bracket scanner salvages every array element that closed
completely before the cut.
"""

from __future__ import annotations

import json
import logging
import math
import re
from typing import Any, Callable, TypeVar

from raceready.extraction.models import AthleteEntry, EventRecord, HighlightTarget

logger = logging.getLogger(__name__)

T = TypeVar("T")

_TRAILING_COMMA_RE = re.compile(r",\s*([}\]])")
_OPENING_FENCES = ("```json", "```")
_CLOSING_FENCE = "```"


def strip_code_fences(text: str) -> str:
    """Remove a literal leading ```json / ``` fence and a trailing ``` fence."""

    content = text.strip()
    for fence in _OPENING_FENCES:
        if content.startswith(fence):
            content = content[len(fence):]
            break
    if content.endswith(_CLOSING_FENCE):
        content = content[: -len(_CLOSING_FENCE)]
    return content.strip()


def repair_trailing_commas(text: str) -> str:
    return _TRAILING_COMMA_RE.sub(r"\1", text)


def _loads(text: str) -> Any | None:
    try:
        return json.loads(repair_trailing_commas(text))
    except (ValueError, RecursionError):
        # JSONDecodeError, oversized integer literals, deep nesting
        return None


def scan_array_objects(text: str, key: str) -> list[dict[str, Any]]:
    """Recover complete objects from the array stored under ``key``.

    Stops at the array's closing bracket or at end of input.  An object
    still open when the input ends is dropped, never completed.
    """

    key_index = text.find(f'"{key}"')
    if key_index < 0:
        return []
    array_start = text.find("[", key_index)
    if array_start < 0:
        return []

    recovered: list[dict[str, Any]] = []
    depth = 0
    object_start = -1
    in_string = False
    escaped = False

    for index in range(array_start + 1, len(text)):
        char = text[index]

        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char in "{[":
            if depth == 0 and char == "{":
                object_start = index
            depth += 1
        elif char in "}]":
            if depth == 0:
                if char == "]":
                    break
                continue
            depth -= 1
            if depth == 0 and char == "}" and object_start >= 0:
                candidate = _loads(text[object_start : index + 1])
                if isinstance(candidate, dict):
                    recovered.append(candidate)
                else:
                    logger.debug("Skipping malformed %s element at offset %d", key, object_start)
                object_start = -1

    return recovered


def _parse_array(text: str, key: str, normalize: Callable[[Any], T | None]) -> list[T]:
    content = strip_code_fences(text)

    parsed = _loads(content)
    if isinstance(parsed, dict) and isinstance(parsed.get(key), list):
        raw_items: list[Any] = parsed[key]
    else:
        raw_items = scan_array_objects(content, key)
        logger.debug("Direct parse failed; recovered %d %s element(s) by scanning", len(raw_items), key)

    results: list[T] = []
    for raw in raw_items:
        item = normalize(raw)
        if item is not None:
            results.append(item)
    return results


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _optional_positive_int(value: Any) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool) and value > 0:
        return value
    return None


def _normalize_event_number(value: Any) -> int | None:
    if not _is_number(value):
        return None
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    return value


def _normalize_athlete(raw: Any) -> AthleteEntry | None:
    if not isinstance(raw, dict):
        return None
    name = raw.get("name")
    if not isinstance(name, str) or not name.strip():
        return None
    return AthleteEntry(
        name=name,
        team=_optional_str(raw.get("team")),
        heat=_optional_positive_int(raw.get("heat")),
        lane=_optional_positive_int(raw.get("lane")),
        seed_time=_optional_str(raw.get("seedTime")),
    )


def normalize_event(raw: Any) -> EventRecord | None:
    """Convert one raw ``events`` element into an ``EventRecord`` or drop it."""

    if not isinstance(raw, dict):
        return None
    event_name = raw.get("eventName")
    if not isinstance(event_name, str) or not event_name.strip():
        return None

    raw_athletes = raw.get("athletes")
    athletes: list[AthleteEntry] = []
    if isinstance(raw_athletes, list):
        for item in raw_athletes:
            athlete = _normalize_athlete(item)
            if athlete is not None:
                athletes.append(athlete)

    raw_text = raw.get("rawText")
    return EventRecord(
        event_number=_normalize_event_number(raw.get("eventNumber")),
        event_name=event_name,
        athletes=tuple(athletes),
        raw_text=raw_text if isinstance(raw_text, str) else "",
    )


def normalize_highlight(raw: Any) -> HighlightTarget | None:
    """Convert one raw ``highlights`` element into a ``HighlightTarget``."""

    if not isinstance(raw, dict):
        return None
    page = raw.get("page")
    y_percent = raw.get("yPercent")
    if not isinstance(page, int) or isinstance(page, bool) or not _is_number(y_percent):
        return None

    x_start = raw.get("xStartPercent")
    x_end = raw.get("xEndPercent")
    return HighlightTarget(
        athlete_name=_optional_str(raw.get("name")) or "",
        event_label=_optional_str(raw.get("event")) or "",
        page=page,
        y_percent=float(y_percent),
        x_start_percent=float(x_start) if _is_number(x_start) else None,
        x_end_percent=float(x_end) if _is_number(x_end) else None,
        found=raw.get("found") is True,
    )


def parse_events_response(text: str) -> list[EventRecord]:
    """Best-effort parse of a ``{"events": [...]}`` model response.

    Never raises; an unusable payload yields an empty list.
    """

    return _parse_array(text, "events", normalize_event)


def parse_highlight_response(text: str) -> list[HighlightTarget]:
    """Best-effort parse of a ``{"highlights": [...]}`` model response."""

    return _parse_array(text, "highlights", normalize_highlight)
