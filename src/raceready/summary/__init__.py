"""Team/lane summary exports."""

from .builder import SummaryRow, collect_summary_rows, render_summary_pdf

__all__ = ["SummaryRow", "collect_summary_rows", "render_summary_pdf"]
