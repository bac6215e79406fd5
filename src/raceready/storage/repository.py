"""SQLite-backed persistence for meets, merged events and subscribers."""

from __future__ import annotations

from dataclasses import dataclass
import json
from pathlib import Path
import sqlite3

from raceready.extraction.models import EventRecord, MergedExtraction
from raceready.notify.composer import Subscriber
from raceready.storage.schema import apply_runtime_pragmas, ensure_schema


@dataclass(slots=True)
class MeetNotFoundError(LookupError):
    meet_id: int

    def __str__(self) -> str:
        return f"Meet not found (meet_id={self.meet_id})"


@dataclass(slots=True)
class ExtractionAlreadyStoredError(RuntimeError):
    meet_id: int

    def __str__(self) -> str:
        return f"Events already stored for meet (meet_id={self.meet_id})"


@dataclass(slots=True)
class MeetRow:
    id: int
    file_name: str
    source_path: str | None
    status: str
    error_message: str | None
    needs_review: bool

    @property
    def display_name(self) -> str:
        name = self.file_name.removesuffix(".pdf")
        return name or "Swim Meet"


class MeetRepository:
    """Thin persistence layer over the meets, events and subscribers tables."""

    def __init__(self, db_path: str | Path) -> None:
        self._db_path = Path(db_path)
        self._connection = sqlite3.connect(str(self._db_path))
        self._connection.row_factory = sqlite3.Row
        apply_runtime_pragmas(self._connection)
        ensure_schema(self._connection)

    @property
    def connection(self) -> sqlite3.Connection:
        return self._connection

    def close(self) -> None:
        self._connection.close()

    def __enter__(self) -> "MeetRepository":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def create_meet(self, file_name: str, *, source_path: str | None = None) -> int:
        cursor = self._connection.execute(
            "INSERT INTO meets(file_name, source_path, status) VALUES(?, ?, 'processing')",
            (file_name, source_path),
        )
        self._connection.commit()
        return int(cursor.lastrowid)

    def get_meet(self, meet_id: int) -> MeetRow:
        row = self._connection.execute(
            """
            SELECT id, file_name, source_path, status, error_message, needs_review
            FROM meets WHERE id = ?
            """,
            (meet_id,),
        ).fetchone()
        if row is None:
            raise MeetNotFoundError(meet_id)
        return MeetRow(
            id=int(row["id"]),
            file_name=row["file_name"],
            source_path=row["source_path"],
            status=row["status"],
            error_message=row["error_message"],
            needs_review=bool(row["needs_review"]),
        )

    def mark_failed(self, meet_id: int, message: str) -> None:
        self.get_meet(meet_id)
        self._connection.execute(
            "UPDATE meets SET status = 'failed', error_message = ? WHERE id = ?",
            (message, meet_id),
        )
        self._connection.commit()

    def save_extraction(self, meet_id: int, extraction: MergedExtraction) -> int:
        """Store a meet's merged events once and mark the meet completed.

        Returns
        -------
        int
            Number of events inserted.
        """
        self.get_meet(meet_id)
        existing = self._connection.execute(
            "SELECT COUNT(*) FROM events WHERE meet_id = ?", (meet_id,)
        ).fetchone()[0]
        if existing:
            raise ExtractionAlreadyStoredError(meet_id)

        rows = [
            (
                meet_id,
                position,
                event.event_number,
                event.event_name,
                json.dumps([athlete.to_dict() for athlete in event.athletes], ensure_ascii=False),
                event.raw_text,
            )
            for position, event in enumerate(extraction.events)
        ]
        with self._connection:
            self._connection.executemany(
                """
                INSERT INTO events(meet_id, position, event_number, event_name, athletes, raw_text)
                VALUES(?, ?, ?, ?, ?, ?)
                """,
                rows,
            )
            self._connection.execute(
                """
                UPDATE meets SET status = 'completed', error_message = NULL, needs_review = ?
                WHERE id = ?
                """,
                (1 if extraction.used_fallback else 0, meet_id),
            )
        return len(rows)

    def list_events(self, meet_id: int) -> list[EventRecord]:
        rows = self._connection.execute(
            """
            SELECT event_number, event_name, athletes, raw_text
            FROM events WHERE meet_id = ? ORDER BY position
            """,
            (meet_id,),
        ).fetchall()
        return [
            EventRecord.from_dict(
                {
                    "eventNumber": row["event_number"],
                    "eventName": row["event_name"],
                    "athletes": json.loads(row["athletes"]),
                    "rawText": row["raw_text"],
                }
            )
            for row in rows
        ]

    def add_subscriber(self, meet_id: int, email: str, swimmer_name: str) -> bool:
        """Register a subscription; returns False when it already existed."""

        email_value = email.strip()
        name_value = swimmer_name.strip()
        if not email_value or "@" not in email_value:
            raise ValueError("email must be a valid address")
        if not name_value:
            raise ValueError("swimmer_name cannot be empty")

        self.get_meet(meet_id)
        cursor = self._connection.execute(
            "INSERT OR IGNORE INTO subscribers(meet_id, email, swimmer_name) VALUES(?, ?, ?)",
            (meet_id, email_value, name_value),
        )
        self._connection.commit()
        return cursor.rowcount > 0

    def list_subscribers(self, meet_id: int) -> list[Subscriber]:
        rows = self._connection.execute(
            "SELECT email, swimmer_name FROM subscribers WHERE meet_id = ? ORDER BY id",
            (meet_id,),
        ).fetchall()
        return [Subscriber(email=row["email"], swimmer_name=row["swimmer_name"]) for row in rows]
