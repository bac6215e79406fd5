"""CLI command that composes subscriber schedule e-mails for a stored meet.

Delivery is handed to a sender; this entry point uses one that writes each
message to an HTML file so an external mailer can pick it up.
"""

from __future__ import annotations

import argparse
import re
from pathlib import Path

from raceready.cli.common import configure_runtime, default_db_path, emit, fail
from raceready.notify.composer import OutgoingEmail, dispatch_notifications
from raceready.storage.repository import MeetNotFoundError, MeetRepository

_UNSAFE_FILENAME_RE = re.compile(r"[^A-Za-z0-9@._-]+")


class FileOutboxSender:
    """Write each outgoing message to ``<out_dir>/<recipient>.html``."""

    def __init__(self, out_dir: Path) -> None:
        self._out_dir = out_dir
        self.written: list[Path] = []

    def send(self, message: OutgoingEmail) -> None:
        self._out_dir.mkdir(parents=True, exist_ok=True)
        target = self._out_dir / f"{_UNSAFE_FILENAME_RE.sub('_', message.to)}.html"
        target.write_text(
            f"<!-- To: {message.to} | Subject: {message.subject} -->\n{message.html}\n",
            encoding="utf-8",
        )
        self.written.append(target)


def main(argv: list[str] | None = None) -> int:
    configure_runtime()
    parser = argparse.ArgumentParser(description="Compose schedule e-mails for every meet subscriber")
    parser.add_argument("--meet-id", type=int, required=True, help="Stored meet identifier")
    parser.add_argument("--out-dir", required=True, help="Directory receiving one HTML file per recipient")
    parser.add_argument("--db-path", default=None, help="SQLite database path")
    args = parser.parse_args(argv)

    with MeetRepository(args.db_path or default_db_path()) as repository:
        try:
            meet = repository.get_meet(args.meet_id)
        except MeetNotFoundError as exc:
            return fail(str(exc))
        events = repository.list_events(meet.id)
        subscribers = repository.list_subscribers(meet.id)

    if not subscribers:
        emit({"success": True, "sent": 0, "failed": 0, "message": "No subscribers"})
        return 0

    sender = FileOutboxSender(Path(args.out_dir))
    report = dispatch_notifications(meet.display_name, events, subscribers, sender)
    emit(
        {
            "success": True,
            "sent": report.sent,
            "failed": report.failed,
            "errors": report.errors,
            "files": [str(path) for path in sender.written],
        }
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
