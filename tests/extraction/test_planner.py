from __future__ import annotations

import pytest

from raceready.extraction.config import ChunkingSettings
from raceready.extraction.planner import build_requests, estimate_pages, plan_chunks


def _settings(**overrides: int) -> ChunkingSettings:
    values = {
        "single_shot_max_bytes": 1_000,
        "bytes_per_page": 100,
        "pages_per_chunk": 10,
        "max_chunks": 6,
    }
    values.update(overrides)
    return ChunkingSettings(**values)


def test_small_document_is_single_shot() -> None:
    assert plan_chunks(1_000, _settings()) == [None]
    assert plan_chunks(0, _settings()) == [None]


def test_just_over_threshold_uses_two_chunks() -> None:
    # 11 estimated pages -> ceil(11 / 10) = 2 chunks
    assert plan_chunks(1_001, _settings()) == ["pages 1-5", "pages 6-11"]


def test_chunk_count_is_capped() -> None:
    hints = plan_chunks(100_000, _settings())

    assert len(hints) == 6
    assert hints[0] == "pages 1-166"
    assert hints[-1] == "pages 831-1000"


def test_bands_are_contiguous_and_ascending() -> None:
    hints = plan_chunks(3_250, _settings())
    bounds = [tuple(int(part) for part in hint.removeprefix("pages ").split("-")) for hint in hints]

    assert len(hints) == 4
    assert bounds[0][0] == 1
    assert bounds[-1][1] == 33
    for (_, previous_end), (start, end) in zip(bounds, bounds[1:]):
        assert start == previous_end + 1
        assert start <= end


def test_pages_never_fewer_than_chunks() -> None:
    hints = plan_chunks(150, _settings(single_shot_max_bytes=100, bytes_per_page=1_000))

    assert hints == ["pages 1-1", "pages 2-2"]


def test_negative_length_is_rejected() -> None:
    with pytest.raises(ValueError, match="negative"):
        plan_chunks(-1, _settings())


def test_estimate_pages_rounds_up() -> None:
    assert estimate_pages(1, bytes_per_page=100) == 1
    assert estimate_pages(201, bytes_per_page=100) == 3


def test_build_requests_sends_whole_document_to_every_chunk() -> None:
    document = b"%PDF-" + b"x" * 1_500

    requests = build_requests(document, _settings())

    assert len(requests) == 2
    assert all(request.document == document for request in requests)
    assert [request.page_hint for request in requests] == ["pages 1-8", "pages 9-16"]


def test_default_settings_keep_typical_programs_single_shot() -> None:
    assert build_requests(b"x" * 200_000)[0].page_hint is None
