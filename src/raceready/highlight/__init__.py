"""PDF highlighting of selected athlete rows."""

from .geometry import HIGHLIGHT_STYLES, DrawInstruction, resolve_highlights
from .locator import locate_targets
from .renderer import HighlightResult, highlight_pdf

__all__ = [
    "HIGHLIGHT_STYLES",
    "DrawInstruction",
    "HighlightResult",
    "highlight_pdf",
    "locate_targets",
    "resolve_highlights",
]
