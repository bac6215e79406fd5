"""CLI command that extracts a meet program PDF and stores its events."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from raceready.cli.common import build_model, configure_runtime, default_db_path, emit, fail
from raceready.extraction.config import ChunkingSettings
from raceready.extraction.orchestrator import AllChunksFailedError, ModelChunkExtractor, extract_sync
from raceready.llm.config import ModelSettings
from raceready.storage.repository import MeetRepository

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    configure_runtime()
    parser = argparse.ArgumentParser(description="Extract events from a meet program PDF and store them")
    parser.add_argument("--pdf", required=True, help="Path to the meet program PDF")
    parser.add_argument("--db-path", default=None, help="SQLite database path")
    args = parser.parse_args(argv)

    pdf_path = Path(args.pdf)
    try:
        document = pdf_path.read_bytes()
    except OSError as exc:
        return fail(f"Failed to read PDF: {exc}")

    try:
        model_settings = ModelSettings.from_env()
        chunking = ChunkingSettings.from_env()
    except ValueError as exc:
        return fail(str(exc))

    extractor = ModelChunkExtractor(build_model(model_settings))

    with MeetRepository(args.db_path or default_db_path()) as repository:
        meet_id = repository.create_meet(pdf_path.name, source_path=str(pdf_path))
        try:
            extraction = extract_sync(document, extractor, chunking)
        except AllChunksFailedError as exc:
            logger.error("Extraction failed for meet %d: %s", meet_id, exc)
            repository.mark_failed(meet_id, str(exc))
            emit({"success": False, "meet_id": meet_id, "error": str(exc)})
            return 1

        stored = repository.save_extraction(meet_id, extraction)

    payload = {"success": True, "meet_id": meet_id, "stored_events": stored}
    payload.update(extraction.to_dict())
    emit(payload)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
