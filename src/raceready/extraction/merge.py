"""Deduplicating merge of events recovered by overlapping chunk calls."""

from __future__ import annotations

from typing import Iterable

from raceready.extraction.models import EventRecord


def _merge_key(event: EventRecord) -> tuple[int | str, str]:
    number = event.event_number
    return ("null" if number is None else number, event.event_name)


def _sort_key(event: EventRecord) -> tuple[bool, int]:
    number = event.event_number
    return (number is None, 0 if number is None else number)


def merge_events(events: Iterable[EventRecord]) -> list[EventRecord]:
    """Merge records in chunk order into one ordered, unique event list.

    A later duplicate replaces the stored record only when it carries
    strictly more athletes; its athlete list is taken whole.  Output is
    sorted by event number with unnumbered events last, first-seen order
    kept among equal keys.
    """

    retained: dict[tuple[int | str, str], EventRecord] = {}

    for event in events:
        key = _merge_key(event)
        current = retained.get(key)
        if current is None or len(event.athletes) > len(current.athletes):
            retained[key] = event

    return sorted(retained.values(), key=_sort_key)
