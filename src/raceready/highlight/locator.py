"""Ask the document model where selected athlete rows sit on the page."""

from __future__ import annotations

import logging
from typing import Sequence

from raceready.extraction.models import HighlightTarget
from raceready.extraction.orchestrator import DocumentModel
from raceready.extraction.parser import parse_highlight_response
from raceready.extraction.prompts import build_highlight_prompt
from raceready.matching.roster import RosterEntry

logger = logging.getLogger(__name__)


def describe_entry(entry: RosterEntry) -> str:
    return f'"{entry.athlete_name}" ({entry.team}, Heat {entry.heat or 0}, Lane {entry.lane}) in {entry.event_name}'


def locate_targets(
    model: DocumentModel,
    document: bytes,
    entries: Sequence[RosterEntry],
) -> list[HighlightTarget]:
    """Return model-reported row positions for ``entries``.

    Entries the model could not place come back with ``found=False``; an
    unusable response yields an empty list.
    """

    if not entries:
        return []

    prompt = build_highlight_prompt([describe_entry(entry) for entry in entries])
    raw_text = model.complete(document, prompt)
    targets = parse_highlight_response(raw_text)
    if not targets:
        logger.warning("Highlight response held no usable positions: %s", raw_text[:500])

    found = sum(1 for target in targets if target.found)
    logger.info("Model located %d/%d highlight position(s)", found, len(entries))
    return targets
