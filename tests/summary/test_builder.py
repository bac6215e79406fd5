from __future__ import annotations

from datetime import date

import pymupdf

from raceready.extraction.models import AthleteEntry, EventRecord
from raceready.summary.builder import SummaryRow, collect_summary_rows, render_summary_pdf


def _events() -> list[EventRecord]:
    return [
        EventRecord(
            event_number=12,
            event_name="Mixed 13-14 200 Yard Individual Medley Timed Final",
            athletes=(
                AthleteEntry(name="Jane Smith", team="DOL", heat=2, lane=4, seed_time="2:31.05"),
                AthleteEntry(name="Ann Park", team="SHK", heat=2, lane=4),
            ),
        ),
        EventRecord(
            event_number=None,
            event_name="Exhibition",
            athletes=(AthleteEntry(name="Tom Lee", team="dol", lane=5),),
        ),
    ]


def _page_texts(pdf_bytes: bytes) -> list[str]:
    with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:
        return [page.get_text() for page in doc]


def test_collect_summary_rows_fills_placeholders() -> None:
    rows = collect_summary_rows(_events(), "DOL", [4, 5])

    assert rows == [
        SummaryRow(
            event_label="#12 Mixed 13-14 200 Yard Individual Medley Timed Final",
            athlete_name="Jane Smith",
            heat="2",
            lane="4",
            seed_time="2:31.05",
        ),
        SummaryRow(event_label="Exhibition", athlete_name="Tom Lee", heat="-", lane="5", seed_time="-"),
    ]


def test_render_summary_pdf_lists_rows_and_header() -> None:
    rows = collect_summary_rows(_events(), "DOL", [4, 5])

    pdf_bytes = render_summary_pdf("Spring Invite", "DOL", [4, 5], rows, generated_on=date(2025, 3, 1))

    (text,) = _page_texts(pdf_bytes)
    assert "Spring Invite" in text
    assert "Team: DOL" in text
    assert "Lanes: 4, 5" in text
    assert "Generated: 2025-03-01" in text
    assert "Jane Smith" in text
    assert "2:31.05" in text
    assert "#12 Mixed 13-14 200 Yard Ind..." in text
    assert "Generated by RaceReady" in text


def test_render_summary_pdf_without_rows_says_so() -> None:
    (text,) = _page_texts(render_summary_pdf("Spring Invite", "XYZ", [1], []))

    assert "No athletes found matching the selected team and lanes." in text


def test_render_summary_pdf_paginates_long_tables() -> None:
    rows = [
        SummaryRow(event_label=f"#{number} Event", athlete_name=f"Swimmer {number}", heat="1", lane="4", seed_time="-")
        for number in range(1, 81)
    ]

    texts = _page_texts(render_summary_pdf("Champs", "DOL", [4], rows))

    assert len(texts) >= 2
    assert "Athlete" in texts[1]
    assert "Swimmer 80" in texts[-1]
    assert "Generated by RaceReady" in texts[-1]
    assert "Generated by RaceReady" not in texts[0]
