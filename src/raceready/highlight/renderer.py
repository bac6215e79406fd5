"""Draw resolved highlight shapes onto a PDF with PyMuPDF."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Iterable

import pymupdf

from raceready.extraction.models import HighlightTarget
from raceready.highlight.geometry import DrawInstruction, resolve_highlights

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class HighlightResult:
    pdf_bytes: bytes
    drawn: int


def page_sizes(doc: pymupdf.Document) -> list[tuple[float, float]]:
    return [(page.rect.width, page.rect.height) for page in doc]


def _draw(page: pymupdf.Page, instruction: DrawInstruction) -> None:
    # PyMuPDF measures y downward from the top edge.
    height = page.rect.height
    if instruction.shape == "circle":
        center = pymupdf.Point(instruction.x, height - instruction.y)
        page.draw_circle(
            center,
            instruction.radius,
            color=None,
            fill=instruction.color,
            fill_opacity=instruction.opacity,
            width=0,
        )
        return

    rect = pymupdf.Rect(
        instruction.x,
        height - (instruction.y + instruction.height),
        instruction.x + instruction.width,
        height - instruction.y,
    )
    page.draw_rect(
        rect,
        color=None,
        fill=instruction.color,
        fill_opacity=instruction.opacity,
        width=0,
    )


def highlight_pdf(
    pdf_bytes: bytes,
    targets: Iterable[HighlightTarget],
    *,
    style: str = "row",
    color: str = "#FFFF00",
) -> HighlightResult:
    """Return a copy of ``pdf_bytes`` with every resolvable target highlighted."""

    with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:
        instructions = resolve_highlights(targets, page_sizes(doc), style=style, color=color)
        for instruction in instructions:
            _draw(doc[instruction.page - 1], instruction)
        output = doc.tobytes()

    logger.info("Drew %d %s highlight(s)", len(instructions), style)
    return HighlightResult(pdf_bytes=output, drawn=len(instructions))
