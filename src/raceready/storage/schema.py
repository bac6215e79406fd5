"""SQLite schema and pragmas for meet, event and subscriber storage."""

from __future__ import annotations

import sqlite3


PRAGMA_BUSY_TIMEOUT_MS = 5000


def apply_runtime_pragmas(connection: sqlite3.Connection) -> None:
    """Apply runtime pragmas recommended for local concurrent access."""

    connection.execute("PRAGMA journal_mode=WAL;")
    connection.execute(f"PRAGMA busy_timeout={PRAGMA_BUSY_TIMEOUT_MS};")
    connection.execute("PRAGMA synchronous=NORMAL;")
    connection.execute("PRAGMA foreign_keys=ON;")


def ensure_schema(connection: sqlite3.Connection) -> None:
    """Create meet storage tables if missing."""

    connection.executescript(
        """
        CREATE TABLE IF NOT EXISTS meets (
            id INTEGER PRIMARY KEY,
            file_name TEXT NOT NULL,
            source_path TEXT,
            status TEXT NOT NULL DEFAULT 'pending'
                CHECK(status IN ('pending', 'processing', 'completed', 'failed')),
            error_message TEXT,
            needs_review INTEGER NOT NULL DEFAULT 0,
            created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS events (
            id INTEGER PRIMARY KEY,
            meet_id INTEGER NOT NULL,
            position INTEGER NOT NULL,
            event_number INTEGER,
            event_name TEXT NOT NULL,
            athletes TEXT NOT NULL DEFAULT '[]',
            raw_text TEXT NOT NULL DEFAULT '',
            FOREIGN KEY(meet_id) REFERENCES meets(id) ON DELETE CASCADE,
            UNIQUE(meet_id, position)
        );

        CREATE INDEX IF NOT EXISTS idx_events_meet_position
        ON events(meet_id, position);

        CREATE TABLE IF NOT EXISTS subscribers (
            id INTEGER PRIMARY KEY,
            meet_id INTEGER NOT NULL,
            email TEXT NOT NULL,
            swimmer_name TEXT NOT NULL,
            created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(meet_id) REFERENCES meets(id) ON DELETE CASCADE,
            UNIQUE(meet_id, email, swimmer_name)
        );
        """
    )
    connection.commit()
