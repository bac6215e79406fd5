"""Canonical data structures shared by extraction, matching and highlighting."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


MANUAL_REVIEW_EVENT_NAME = "Meet Content (Manual Review Required)"


@dataclass(frozen=True, slots=True)
class AthleteEntry:
    """One entrant row within an event."""

    name: str
    team: str | None = None
    heat: int | None = None
    lane: int | None = None
    seed_time: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"name": self.name}
        if self.team is not None:
            payload["team"] = self.team
        if self.heat is not None:
            payload["heat"] = self.heat
        if self.lane is not None:
            payload["lane"] = self.lane
        if self.seed_time is not None:
            payload["seedTime"] = self.seed_time
        return payload


@dataclass(frozen=True, slots=True)
class EventRecord:
    """One scheduled event with its entrants.

    Two records describe the same event iff ``identity_key`` matches; the
    name comparison is case-sensitive because the model reproduces the
    source text verbatim.
    """

    event_number: int | None
    event_name: str
    athletes: tuple[AthleteEntry, ...] = ()
    raw_text: str = ""

    @property
    def identity_key(self) -> tuple[int | None, str]:
        return (self.event_number, self.event_name)

    @property
    def needs_review(self) -> bool:
        return self.event_number is None and self.event_name == MANUAL_REVIEW_EVENT_NAME

    def to_dict(self) -> dict[str, Any]:
        return {
            "eventNumber": self.event_number,
            "eventName": self.event_name,
            "athletes": [athlete.to_dict() for athlete in self.athletes],
            "rawText": self.raw_text,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "EventRecord":
        """Rebuild a record from its stored camelCase shape."""

        athletes = tuple(
            AthleteEntry(
                name=str(item["name"]),
                team=item.get("team"),
                heat=item.get("heat"),
                lane=item.get("lane"),
                seed_time=item.get("seedTime"),
            )
            for item in payload.get("athletes") or []
        )
        return cls(
            event_number=payload.get("eventNumber"),
            event_name=str(payload["eventName"]),
            athletes=athletes,
            raw_text=str(payload.get("rawText") or ""),
        )


@dataclass(frozen=True, slots=True)
class ExtractionRequest:
    """One chunk call: the whole document plus an optional page-range hint."""

    document: bytes
    page_hint: str | None = None


@dataclass(frozen=True, slots=True)
class ChunkFailure:
    """Report for a chunk whose model call errored."""

    index: int
    page_hint: str | None
    error: str


@dataclass(frozen=True, slots=True)
class MergedExtraction:
    """Canonical, ordered, deduplicated extraction result for one document."""

    events: tuple[EventRecord, ...]
    chunk_count: int = 1
    failures: tuple[ChunkFailure, ...] = field(default_factory=tuple)
    used_fallback: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "events": [event.to_dict() for event in self.events],
            "chunk_count": self.chunk_count,
            "failed_chunks": [
                {"index": failure.index, "page_hint": failure.page_hint, "error": failure.error}
                for failure in self.failures
            ],
            "used_fallback": self.used_fallback,
        }


@dataclass(frozen=True, slots=True)
class HighlightTarget:
    """Model-reported location of one athlete row on the source document."""

    athlete_name: str
    event_label: str
    page: int
    y_percent: float
    x_start_percent: float | None = None
    x_end_percent: float | None = None
    found: bool = True
