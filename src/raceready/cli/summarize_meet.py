"""CLI command that renders a team/lane summary PDF from stored events."""

from __future__ import annotations

import argparse

from raceready.cli.common import configure_runtime, default_db_path, emit, fail, write_output
from raceready.storage.repository import MeetNotFoundError, MeetRepository
from raceready.summary.builder import collect_summary_rows, render_summary_pdf


def main(argv: list[str] | None = None) -> int:
    configure_runtime()
    parser = argparse.ArgumentParser(description="Render a team/lane summary PDF for a stored meet")
    parser.add_argument("--meet-id", type=int, required=True, help="Stored meet identifier")
    parser.add_argument("--team", required=True, help="Team name or abbreviation")
    parser.add_argument("--lanes", type=int, nargs="+", required=True, help="Lane numbers to include")
    parser.add_argument("--output", required=True, help="Where to write the summary PDF")
    parser.add_argument("--db-path", default=None, help="SQLite database path")
    args = parser.parse_args(argv)

    with MeetRepository(args.db_path or default_db_path()) as repository:
        try:
            meet = repository.get_meet(args.meet_id)
        except MeetNotFoundError as exc:
            return fail(str(exc))
        events = repository.list_events(meet.id)

    rows = collect_summary_rows(events, args.team, args.lanes)
    pdf_bytes = render_summary_pdf(meet.display_name, args.team, args.lanes, rows)
    output = write_output(args.output, pdf_bytes)

    emit({"success": True, "output": str(output), "entries_count": len(rows)})
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
