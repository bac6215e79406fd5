"""Translate model-reported row positions into page-local highlight shapes.

Coordinates produced here use a bottom-left origin (PDF user space).  A
target pointing at a page that does not exist, or one the model marked as
not found, is skipped: a highlight on the wrong page is worse than none.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import re
from typing import Iterable, Sequence

from raceready.extraction.models import HighlightTarget

logger = logging.getLogger(__name__)

HIGHLIGHT_STYLES = ("row", "name", "margin")

ROW_HEIGHT = 12.0
NAME_MAX_WIDTH = 200.0
MARGIN_X = 8.0
MARGIN_RADIUS = 4.0
DEFAULT_X_START_PERCENT = 3.0
DEFAULT_X_END_PERCENT = 97.0

_OPACITY = {"row": 0.3, "name": 0.35, "margin": 0.9}
_HEX_COLOR_RE = re.compile(r"^#?([0-9A-Fa-f]{6})$")


@dataclass(frozen=True, slots=True)
class DrawInstruction:
    """One shape to draw on a 1-indexed page."""

    page: int
    shape: str
    x: float
    y: float
    width: float = 0.0
    height: float = 0.0
    radius: float = 0.0
    color: tuple[float, float, float] = (1.0, 1.0, 0.0)
    opacity: float = 1.0


def hex_to_rgb(color: str) -> tuple[float, float, float]:
    match = _HEX_COLOR_RE.match(color.strip())
    if match is None:
        raise ValueError(f"color must be a #RRGGBB hex string, got {color!r}")
    digits = match.group(1)
    return (
        int(digits[0:2], 16) / 255,
        int(digits[2:4], 16) / 255,
        int(digits[4:6], 16) / 255,
    )


def _resolve_one(
    target: HighlightTarget,
    width: float,
    height: float,
    *,
    style: str,
    color: tuple[float, float, float],
) -> DrawInstruction:
    y = height - (target.y_percent / 100) * height
    opacity = _OPACITY[style]

    if style == "margin":
        return DrawInstruction(
            page=target.page,
            shape="circle",
            x=MARGIN_X,
            y=y,
            radius=MARGIN_RADIUS,
            color=color,
            opacity=opacity,
        )

    x_start_percent = DEFAULT_X_START_PERCENT if target.x_start_percent is None else target.x_start_percent
    x_end_percent = DEFAULT_X_END_PERCENT if target.x_end_percent is None else target.x_end_percent
    x_start = (x_start_percent / 100) * width
    band_width = (x_end_percent / 100) * width - x_start
    if style == "name":
        band_width = min(band_width, NAME_MAX_WIDTH)

    return DrawInstruction(
        page=target.page,
        shape="rect",
        x=x_start,
        y=y - ROW_HEIGHT / 2,
        width=band_width,
        height=ROW_HEIGHT,
        color=color,
        opacity=opacity,
    )


def resolve_highlights(
    targets: Iterable[HighlightTarget],
    page_sizes: Sequence[tuple[float, float]],
    *,
    style: str = "row",
    color: str = "#FFFF00",
) -> list[DrawInstruction]:
    """Compute draw instructions for every resolvable target.

    ``page_sizes`` holds ``(width, height)`` per page, first page first.
    """

    if style not in HIGHLIGHT_STYLES:
        raise ValueError(f"style must be one of {', '.join(HIGHLIGHT_STYLES)}, got {style!r}")
    rgb = hex_to_rgb(color)

    instructions: list[DrawInstruction] = []
    for target in targets:
        if not target.found or not 1 <= target.page <= len(page_sizes):
            logger.debug("Skipping unresolvable highlight for %r on page %d", target.athlete_name, target.page)
            continue
        width, height = page_sizes[target.page - 1]
        instructions.append(_resolve_one(target, width, height, style=style, color=rgb))
    return instructions
