"""Roster lookups over merged events for highlighting, summaries and e-mail."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Collection, Iterable

from raceready.extraction.models import AthleteEntry, EventRecord
from raceready.matching.identity import matches_identity


@dataclass(frozen=True, slots=True)
class RosterEntry:
    """One athlete row flattened together with its event context."""

    event_number: int | None
    event_name: str
    athlete_name: str
    team: str | None
    heat: int | None
    lane: int | None
    seed_time: str | None

    @property
    def event_label(self) -> str:
        return format_event_label(self.event_number, self.event_name)


def format_event_label(event_number: int | None, event_name: str) -> str:
    return f"#{event_number} {event_name}" if event_number else event_name


def event_label(event: EventRecord) -> str:
    return format_event_label(event.event_number, event.event_name)


def _same_team(athlete: AthleteEntry, team: str) -> bool:
    return bool(athlete.team) and athlete.team.lower() == team.lower()


def select_entries(events: Iterable[EventRecord], team: str, lanes: Collection[int]) -> list[RosterEntry]:
    """Athletes of ``team`` (case-insensitive) swimming in one of ``lanes``."""

    wanted_lanes = set(lanes)
    selected: list[RosterEntry] = []
    for event in events:
        for athlete in event.athletes:
            if not _same_team(athlete, team) or athlete.lane not in wanted_lanes:
                continue
            selected.append(
                RosterEntry(
                    event_number=event.event_number,
                    event_name=event.event_name,
                    athlete_name=athlete.name,
                    team=athlete.team,
                    heat=athlete.heat,
                    lane=athlete.lane,
                    seed_time=athlete.seed_time,
                )
            )
    return selected


def lanes_for_team(events: Iterable[EventRecord], team: str) -> list[int]:
    lanes = {
        athlete.lane
        for event in events
        for athlete in event.athletes
        if athlete.lane is not None and _same_team(athlete, team)
    }
    return sorted(lanes)


def describe_missing_entries(events: Iterable[EventRecord], team: str, lanes: Collection[int]) -> str:
    """Explain why a team/lane selection came back empty."""

    available = lanes_for_team(events, team)
    requested = ", ".join(str(lane) for lane in sorted(lanes))
    if available:
        occupied = ", ".join(str(lane) for lane in available)
        return f"No {team} athletes found in lane(s) {requested}. {team} athletes are in lane(s): {occupied}"
    return f'No athletes found for team "{team}" in this meet.'


def find_swimmer_events(
    events: Iterable[EventRecord],
    swimmer_name: str,
) -> list[tuple[EventRecord, AthleteEntry]]:
    """Events containing ``swimmer_name``, paired with the first matching row."""

    matches: list[tuple[EventRecord, AthleteEntry]] = []
    for event in events:
        for athlete in event.athletes:
            if matches_identity(swimmer_name, athlete.name):
                matches.append((event, athlete))
                break
    return matches
