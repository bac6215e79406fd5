"""CLI command that highlights a team's lane entries on the original PDF."""

from __future__ import annotations

import argparse
from pathlib import Path

from raceready.cli.common import build_model, configure_runtime, default_db_path, emit, fail, write_output
from raceready.highlight.geometry import HIGHLIGHT_STYLES
from raceready.highlight.locator import locate_targets
from raceready.highlight.renderer import highlight_pdf
from raceready.llm.config import ModelSettings
from raceready.llm.openrouter import ModelRequestError
from raceready.matching.roster import describe_missing_entries, select_entries
from raceready.storage.repository import MeetNotFoundError, MeetRepository


def main(argv: list[str] | None = None) -> int:
    configure_runtime()
    parser = argparse.ArgumentParser(description="Highlight a team's lane entries on a stored meet PDF")
    parser.add_argument("--meet-id", type=int, required=True, help="Stored meet identifier")
    parser.add_argument("--team", required=True, help="Team name or abbreviation")
    parser.add_argument("--lanes", type=int, nargs="+", required=True, help="Lane numbers to highlight")
    parser.add_argument("--style", choices=HIGHLIGHT_STYLES, default="row", help="Highlight style")
    parser.add_argument("--color", default="#FFFF00", help="Highlight color as #RRGGBB")
    parser.add_argument("--output", required=True, help="Where to write the highlighted PDF")
    parser.add_argument("--db-path", default=None, help="SQLite database path")
    args = parser.parse_args(argv)

    with MeetRepository(args.db_path or default_db_path()) as repository:
        try:
            meet = repository.get_meet(args.meet_id)
        except MeetNotFoundError as exc:
            return fail(str(exc))
        events = repository.list_events(meet.id)

    if not meet.source_path:
        return fail("Meet or PDF not found")

    entries = select_entries(events, args.team, args.lanes)
    if not entries:
        return fail(describe_missing_entries(events, args.team, args.lanes))

    try:
        document = Path(meet.source_path).read_bytes()
    except OSError as exc:
        return fail(f"Failed to read PDF: {exc}")

    try:
        model_settings = ModelSettings.from_env()
    except ValueError as exc:
        return fail(str(exc))

    try:
        targets = locate_targets(build_model(model_settings), document, entries)
    except ModelRequestError as exc:
        return fail(str(exc))

    try:
        result = highlight_pdf(document, targets, style=args.style, color=args.color)
    except ValueError as exc:
        return fail(str(exc))

    output = write_output(args.output, result.pdf_bytes)
    emit(
        {
            "success": True,
            "output": str(output),
            "highlights_found": sum(1 for target in targets if target.found),
            "highlights_drawn": result.drawn,
            "athletes_searched": len(entries),
        }
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
