"""Name matching and roster selection over merged events."""

from .identity import matches_identity, name_tokens
from .roster import RosterEntry, find_swimmer_events, lanes_for_team, select_entries

__all__ = [
    "RosterEntry",
    "find_swimmer_events",
    "lanes_for_team",
    "matches_identity",
    "name_tokens",
    "select_entries",
]
