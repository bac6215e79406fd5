"""Team/lane summary sheet rendered as a letter-size PDF."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
import logging
from typing import Collection, Iterable, Sequence

import pymupdf

from raceready.extraction.models import EventRecord
from raceready.matching.roster import RosterEntry, select_entries

logger = logging.getLogger(__name__)

PAGE_WIDTH = 612
PAGE_HEIGHT = 792
MARGIN = 50
LINE_HEIGHT = 16
EVENT_LABEL_MAX_CHARS = 30

_COLUMNS = (("Event", MARGIN), ("Athlete", 250), ("Heat", 400), ("Lane", 445), ("Seed", 490))
_TEXT_COLOR = (0.15, 0.15, 0.2)
_MUTED_COLOR = (0.4, 0.4, 0.5)
_HEADER_COLOR = (0.3, 0.3, 0.4)


@dataclass(frozen=True, slots=True)
class SummaryRow:
    event_label: str
    athlete_name: str
    heat: str
    lane: str
    seed_time: str


def _truncate(text: str, limit: int = EVENT_LABEL_MAX_CHARS) -> str:
    return text if len(text) <= limit else text[: limit - 2] + "..."


def to_summary_rows(entries: Iterable[RosterEntry]) -> list[SummaryRow]:
    return [
        SummaryRow(
            event_label=entry.event_label,
            athlete_name=entry.athlete_name or "Unknown",
            heat=str(entry.heat) if entry.heat else "-",
            lane=str(entry.lane) if entry.lane else "-",
            seed_time=entry.seed_time or "-",
        )
        for entry in entries
    ]


def collect_summary_rows(events: Iterable[EventRecord], team: str, lanes: Collection[int]) -> list[SummaryRow]:
    return to_summary_rows(select_entries(events, team, lanes))


class _SummaryWriter:
    def __init__(self, doc: pymupdf.Document) -> None:
        self._doc = doc
        self.page = doc.new_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)
        self.y = float(MARGIN)

    def text(self, x: float, value: str, *, size: float, bold: bool = False, color=_TEXT_COLOR) -> None:
        self.page.insert_text(
            (x, self.y),
            value,
            fontsize=size,
            fontname="hebo" if bold else "helv",
            color=color,
        )

    def rule(self, *, thickness: float, shade: float) -> None:
        self.page.draw_line(
            (MARGIN, self.y),
            (PAGE_WIDTH - MARGIN, self.y),
            color=(shade, shade, shade + 0.03),
            width=thickness,
        )

    def table_header(self) -> None:
        for label, x in _COLUMNS:
            self.text(x, label, size=10, bold=True, color=_HEADER_COLOR)
        self.y += 6
        self.rule(thickness=0.5, shade=0.85)
        self.y += LINE_HEIGHT

    def new_page(self) -> None:
        self.page = self._doc.new_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)
        self.y = float(MARGIN)
        self.table_header()


def render_summary_pdf(
    meet_name: str,
    team: str,
    lanes: Sequence[int],
    rows: Sequence[SummaryRow],
    *,
    generated_on: date | None = None,
) -> bytes:
    """Render ``rows`` as a paginated table and return the PDF bytes."""

    with pymupdf.open() as doc:
        writer = _SummaryWriter(doc)

        writer.text(MARGIN, meet_name, size=18, bold=True, color=(0.1, 0.1, 0.2))
        writer.y += 22
        writer.text(MARGIN, f"Team: {team}  |  Lanes: {', '.join(str(lane) for lane in lanes)}", size=11, color=_MUTED_COLOR)
        writer.y += 14
        writer.text(
            MARGIN,
            f"Generated: {(generated_on or date.today()).isoformat()}",
            size=9,
            color=(0.5, 0.5, 0.6),
        )
        writer.y += 14
        writer.rule(thickness=1, shade=0.8)
        writer.y += 20
        writer.table_header()

        if not rows:
            writer.text(MARGIN, "No athletes found matching the selected team and lanes.", size=11, color=(0.5, 0.5, 0.5))

        for row in rows:
            if writer.y > PAGE_HEIGHT - MARGIN - 40:
                writer.new_page()
            writer.text(_COLUMNS[0][1], _truncate(row.event_label), size=9)
            writer.text(_COLUMNS[1][1], row.athlete_name, size=9)
            writer.text(_COLUMNS[2][1], row.heat, size=9, color=_MUTED_COLOR)
            writer.text(_COLUMNS[3][1], row.lane, size=9, color=_MUTED_COLOR)
            writer.text(_COLUMNS[4][1], row.seed_time, size=9, color=_MUTED_COLOR)
            writer.y += 4
            writer.rule(thickness=0.25, shade=0.9)
            writer.y += LINE_HEIGHT - 4

        last_page = doc[-1]
        last_page.insert_text((MARGIN, PAGE_HEIGHT - 30), "Generated by RaceReady", fontsize=8, fontname="helv", color=(0.6, 0.6, 0.65))
        output = doc.tobytes()

    logger.info("Rendered summary with %d row(s)", len(rows))
    return output
