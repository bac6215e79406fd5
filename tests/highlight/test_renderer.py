from __future__ import annotations

import pymupdf
import pytest

from raceready.extraction.models import HighlightTarget
from raceready.highlight.renderer import highlight_pdf


def _build_pdf(pages: int = 2) -> bytes:
    doc = pymupdf.open()
    for number in range(1, pages + 1):
        page = doc.new_page(width=612, height=792)
        page.insert_text((72, 198), f"Event {number}  Jane Smith  DOL  Lane 4")
    data = doc.tobytes()
    doc.close()
    return data


def _target(page: int, y_percent: float, *, found: bool = True) -> HighlightTarget:
    return HighlightTarget(
        athlete_name="Jane Smith",
        event_label="#1 Girls 50 Free",
        page=page,
        y_percent=y_percent,
        x_start_percent=10.0,
        x_end_percent=90.0,
        found=found,
    )


def test_highlight_pdf_draws_on_the_reported_page() -> None:
    result = highlight_pdf(_build_pdf(), [_target(2, 25.0), _target(1, 50.0, found=False), _target(5, 10.0)])

    assert result.drawn == 1
    with pymupdf.open(stream=result.pdf_bytes, filetype="pdf") as doc:
        assert doc.page_count == 2
        assert doc[0].get_drawings() == []
        (drawing,) = doc[1].get_drawings()
        # 25% down a 792pt page, measured from the top edge
        assert drawing["rect"].y0 == pytest.approx(198.0 - 6.0, abs=0.5)
        assert drawing["rect"].y1 == pytest.approx(198.0 + 6.0, abs=0.5)
        assert drawing["rect"].x0 == pytest.approx(61.2, abs=0.5)
        assert "Jane Smith" in doc[1].get_text()


def test_margin_style_draws_circle() -> None:
    result = highlight_pdf(_build_pdf(1), [_target(1, 50.0)], style="margin", color="#00AA00")

    assert result.drawn == 1
    with pymupdf.open(stream=result.pdf_bytes, filetype="pdf") as doc:
        (drawing,) = doc[0].get_drawings()
        assert drawing["rect"].x0 == pytest.approx(4.0, abs=0.5)
        assert drawing["rect"].x1 == pytest.approx(12.0, abs=0.5)


def test_no_targets_leaves_document_unmarked() -> None:
    result = highlight_pdf(_build_pdf(1), [])

    assert result.drawn == 0
    with pymupdf.open(stream=result.pdf_bytes, filetype="pdf") as doc:
        assert doc[0].get_drawings() == []
