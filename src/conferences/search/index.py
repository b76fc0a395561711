"""FTS5-backed full-text search index for conferences."""

import sqlite3
import threading
from collections.abc import Iterator

import structlog

from conferences.records.schemas import Conference
from conferences.search.query import (
    FTS_TABLE,
    HitRow,
    MatchQuery,
    hits_to_conferences,
    translate_query,
)

logger = structlog.get_logger()


class Fts5SearchIndex:
    """SQLite FTS5 index holding one document per conference.

    The document rowid is the conference id, and the id is also stored
    as an indexed column so ``id:42`` queries work. Thread-safe via a
    lock; the connection uses check_same_thread=False since requests
    are served from worker threads.
    """

    def __init__(self, path: str = ":memory:") -> None:
        """Initialize search index (call initialize() before use).

        Args:
            path: Database file path, ":memory:" for a process-local index.
        """
        self._path = path
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.Lock()

    def initialize(self) -> None:
        """Open the database and create the FTS5 virtual table."""
        self._conn = sqlite3.connect(self._path, check_same_thread=False)
        self._conn.execute(f"""
            CREATE VIRTUAL TABLE IF NOT EXISTS {FTS_TABLE} USING fts5(
                id,
                name,
                date,
                tokenize='unicode61'
            )
            """)
        self._conn.commit()
        logger.info("search_index_initialized", path=self._path)

    def put(self, conference: Conference) -> None:
        """Index or re-index a conference (handles create + update).

        Args:
            conference: Full conference state; must carry an id.
        """
        if conference.id is None:
            raise ValueError("Cannot index a conference without an id")

        date = conference.date.isoformat() if conference.date is not None else None
        with self._lock:
            assert self._conn is not None
            with self._conn:
                self._conn.execute(
                    f"DELETE FROM {FTS_TABLE} WHERE rowid = ?", (conference.id,)
                )
                self._conn.execute(
                    f"INSERT INTO {FTS_TABLE} (rowid, id, name, date) VALUES (?, ?, ?, ?)",
                    (conference.id, str(conference.id), conference.name, date),
                )

        logger.debug("search_document_upserted", conference_id=conference.id)

    def delete_by_id(self, conference_id: int) -> None:
        with self._lock:
            assert self._conn is not None
            self._conn.execute(
                f"DELETE FROM {FTS_TABLE} WHERE rowid = ?", (conference_id,)
            )
            self._conn.commit()

        logger.debug("search_document_deleted", conference_id=conference_id)

    def clear(self) -> None:
        with self._lock:
            assert self._conn is not None
            self._conn.execute(f"DELETE FROM {FTS_TABLE}")
            self._conn.commit()

    def search(self, query: str) -> Iterator[Conference]:
        """Run a query in FTS5 syntax.

        Nothing is executed until the result is first iterated, and the
        result can only be consumed once. Queries FTS5 rejects yield
        no results.

        Args:
            query: Raw FTS5 query string.

        Returns:
            Iterator of matching conferences in index order.
        """
        return hits_to_conferences(self._iter_hits(translate_query(query)))

    def _iter_hits(self, match: MatchQuery) -> Iterator[HitRow]:
        """Fetch hit rows one at a time, releasing the lock between rows.

        The cursor is closed when iteration ends, including when the
        caller stops early or closes the iterator.
        """
        with self._lock:
            assert self._conn is not None
            try:
                cursor = self._conn.execute(match.sql, match.params)
            except sqlite3.OperationalError as e:
                logger.warning("search_query_failed", query=match.expression, error=str(e))
                return

        try:
            while True:
                with self._lock:
                    try:
                        row = cursor.fetchone()
                    except sqlite3.OperationalError as e:
                        logger.warning(
                            "search_query_failed", query=match.expression, error=str(e)
                        )
                        return
                if row is None:
                    return
                yield row
        finally:
            with self._lock:
                # Closing the connection already finalized the statement.
                if self._conn is not None:
                    cursor.close()

    def ping(self) -> None:
        """Run a trivial query; raises sqlite3.Error when unusable."""
        with self._lock:
            if self._conn is None:
                raise sqlite3.ProgrammingError("Connection is not open")
            self._conn.execute(f"SELECT rowid FROM {FTS_TABLE} LIMIT 1")

    def close(self) -> None:
        """Close the database connection."""
        with self._lock:
            if self._conn:
                self._conn.close()
                self._conn = None
                logger.info("search_index_closed")
