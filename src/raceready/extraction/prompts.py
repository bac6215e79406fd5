"""Prompt templates for the document model."""

from __future__ import annotations

from typing import Sequence


EVENTS_PROMPT = """You are reading a swim meet heat sheet (meet program) PDF.
Extract EVERY event and EVERY athlete entry listed in it.

For each event return:
- eventNumber: the event number as an integer, or null if none is printed
- eventName: the event title exactly as printed (e.g. "Girls 11-12 50 Yard Freestyle")
- athletes: one object per entry row with
  - name: athlete name exactly as printed
  - team: team/club abbreviation if printed
  - heat: heat number as an integer
  - lane: lane number as an integer
  - seedTime: seed time exactly as printed (e.g. "1:05.32", "NT")
- rawText: the event header line as printed

Rules:
- Reproduce names and event titles verbatim; do not translate or reformat them.
- Relay entries are athletes too; list each swimmer of a relay if printed.
- Omit fields you cannot read instead of guessing.
{page_focus}
Return ONLY valid JSON, no markdown:
{{
  "events": [
    {{"eventNumber": 1, "eventName": "Event Name", "athletes": [{{"name": "Last, First", "team": "ABC", "heat": 1, "lane": 4, "seedTime": "30.12"}}], "rawText": "Event 1 ..."}}
  ]
}}"""

_PAGE_FOCUS = """
Focus on {page_hint} of the document. Only return events whose heat listings
appear on those pages; other calls cover the remaining pages.
"""

HIGHLIGHT_PROMPT = """You are analyzing a swim meet heat sheet PDF. I need the EXACT positions of specific athlete rows so I can draw highlights on them.

Here are ALL the entries to find - do NOT miss any:
{entry_list}

For EACH entry above, find the row in the PDF where that athlete appears and return:
- page: 1-indexed page number
- yPercent: vertical position as percentage from TOP of page (0=top, 100=bottom). Must be precise to the CENTER of the text row.
- xStartPercent: horizontal start of the athlete's row content as percentage from LEFT (typically where the lane number starts)
- xEndPercent: horizontal end of the athlete's row content as percentage from LEFT (typically where the seed time ends)

IMPORTANT:
- Each entry listed above MUST appear in your response. There are {entry_count} entries total.
- Heat sheets list athletes in rows like: "Lane Name Team SeedTime"
- The same athlete may appear in multiple events on different pages - include EACH occurrence.
- Be very precise with yPercent - it should land exactly on the text row.
- Use "found": false for an entry you cannot locate.

Return ONLY valid JSON, no markdown:
{{
  "highlights": [
    {{"name": "Athlete Name", "event": "Event Name", "page": 1, "yPercent": 45.5, "xStartPercent": 5, "xEndPercent": 95, "found": true}}
  ]
}}"""


def build_events_prompt(page_hint: str | None = None) -> str:
    page_focus = _PAGE_FOCUS.format(page_hint=page_hint) if page_hint else ""
    return EVENTS_PROMPT.format(page_focus=page_focus)


def build_highlight_prompt(entry_lines: Sequence[str]) -> str:
    return HIGHLIGHT_PROMPT.format(entry_list="\n".join(entry_lines), entry_count=len(entry_lines))
