"""CLI command that subscribes an e-mail address to a swimmer's schedule."""

from __future__ import annotations

import argparse

from raceready.cli.common import configure_runtime, default_db_path, emit, fail
from raceready.storage.repository import MeetNotFoundError, MeetRepository


def main(argv: list[str] | None = None) -> int:
    configure_runtime()
    parser = argparse.ArgumentParser(description="Subscribe an e-mail address to a swimmer's meet schedule")
    parser.add_argument("--meet-id", type=int, required=True, help="Stored meet identifier")
    parser.add_argument("--email", required=True, help="Recipient e-mail address")
    parser.add_argument("--swimmer", required=True, help="Swimmer name as the family knows it")
    parser.add_argument("--db-path", default=None, help="SQLite database path")
    args = parser.parse_args(argv)

    with MeetRepository(args.db_path or default_db_path()) as repository:
        try:
            created = repository.add_subscriber(args.meet_id, args.email, args.swimmer)
        except (MeetNotFoundError, ValueError) as exc:
            return fail(str(exc))

    emit({"success": True, "created": created})
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
