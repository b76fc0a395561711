"""SQLite-backed primary store for conferences."""

import sqlite3
import threading
from datetime import datetime

import structlog

from conferences.records.schemas import Conference

logger = structlog.get_logger()


def _to_row(conference: Conference) -> tuple[str | None, str | None]:
    """Serialize the mutable columns of a conference."""
    date = conference.date.isoformat() if conference.date is not None else None
    return conference.name, date


def _from_row(row: tuple[int, str | None, str | None]) -> Conference:
    """Build a Conference from an ``(id, name, date)`` row."""
    conference_id, name, date = row
    return Conference(
        id=conference_id,
        name=name,
        date=datetime.fromisoformat(date) if date is not None else None,
    )


class SqliteConferenceStore:
    """Durable conference table in a SQLite database.

    Thread-safe via a lock around the shared connection. Identifiers come
    from AUTOINCREMENT, so a deleted id is never handed out again.
    """

    def __init__(self, path: str) -> None:
        """Initialize store (call initialize() before use).

        Args:
            path: Database file path, or ":memory:".
        """
        self._path = path
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.Lock()

    def initialize(self) -> None:
        """Open the database and create the conference table if missing."""
        self._conn = sqlite3.connect(self._path, check_same_thread=False)
        self._conn.execute("""
            CREATE TABLE IF NOT EXISTS conference (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT,
                date TEXT
            )
            """)
        self._conn.commit()
        logger.info("conference_store_initialized", path=self._path)

    def insert(self, conference: Conference) -> Conference:
        """Insert a conference and return it with its new id.

        Args:
            conference: Conference without an id.

        Returns:
            Copy of the conference carrying the assigned id.
        """
        with self._lock:
            assert self._conn is not None
            cursor = self._conn.execute(
                "INSERT INTO conference (name, date) VALUES (?, ?)",
                _to_row(conference),
            )
            self._conn.commit()
            conference_id = cursor.lastrowid

        return conference.model_copy(update={"id": conference_id})

    def replace(self, conference_id: int, conference: Conference) -> Conference:
        """Upsert the full conference under the given id.

        Args:
            conference_id: Target identifier.
            conference: New state for every mutable field.

        Returns:
            The stored conference.
        """
        name, date = _to_row(conference)
        with self._lock:
            assert self._conn is not None
            self._conn.execute(
                """
                INSERT INTO conference (id, name, date) VALUES (?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET name = excluded.name, date = excluded.date
                """,
                (conference_id, name, date),
            )
            self._conn.commit()

        return conference.model_copy(update={"id": conference_id})

    def find_by_id(self, conference_id: int) -> Conference | None:
        with self._lock:
            assert self._conn is not None
            row = self._conn.execute(
                "SELECT id, name, date FROM conference WHERE id = ?",
                (conference_id,),
            ).fetchone()

        return _from_row(row) if row is not None else None

    def list_all(self) -> list[Conference]:
        with self._lock:
            assert self._conn is not None
            rows = self._conn.execute("SELECT id, name, date FROM conference").fetchall()

        return [_from_row(row) for row in rows]

    def delete_by_id(self, conference_id: int) -> None:
        with self._lock:
            assert self._conn is not None
            self._conn.execute("DELETE FROM conference WHERE id = ?", (conference_id,))
            self._conn.commit()

    def exists_by_id(self, conference_id: int) -> bool:
        with self._lock:
            assert self._conn is not None
            row = self._conn.execute(
                "SELECT 1 FROM conference WHERE id = ?", (conference_id,)
            ).fetchone()

        return row is not None

    def ping(self) -> None:
        """Run a trivial query; raises sqlite3.Error when unusable."""
        with self._lock:
            if self._conn is None:
                raise sqlite3.ProgrammingError("Connection is not open")
            self._conn.execute("SELECT 1 FROM conference LIMIT 1")

    def close(self) -> None:
        """Close the database connection."""
        with self._lock:
            if self._conn:
                self._conn.close()
                self._conn = None
                logger.info("conference_store_closed")
