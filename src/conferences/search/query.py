"""Translation between free-text queries, FTS5 statements and conferences.

The query grammar belongs to FTS5 (``name:devoxx``, ``AND``/``OR``/``NOT``,
``"quoted phrases"``, ``prefix*``). The raw string is handed over as a
single MATCH clause without parsing or escaping.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import datetime

from conferences.records.schemas import Conference

FTS_TABLE = "conference_fts"

HitRow = tuple[int, str | None, str | None]


@dataclass(frozen=True)
class MatchQuery:
    """A single FTS5 MATCH clause over the conference table.

    Attributes:
        expression: Query string exactly as supplied by the caller.
    """

    expression: str

    @property
    def sql(self) -> str:
        return f"SELECT rowid, name, date FROM {FTS_TABLE} WHERE {FTS_TABLE} MATCH ?"

    @property
    def params(self) -> tuple[str]:
        return (self.expression,)


def translate_query(raw: str) -> MatchQuery:
    """Wrap a caller query as one MATCH clause."""
    return MatchQuery(expression=raw)


def hit_to_conference(row: HitRow) -> Conference:
    """Rebuild a Conference from an index hit row.

    Args:
        row: ``(rowid, name, date)`` where rowid is the conference id.

    Returns:
        The conference as it was last indexed.
    """
    conference_id, name, date = row
    return Conference(
        id=conference_id,
        name=name,
        date=datetime.fromisoformat(date) if date else None,
    )


def hits_to_conferences(rows: Iterable[HitRow]) -> Iterator[Conference]:
    """Lazily map index hit rows to conferences.

    Closing the returned iterator also closes ``rows`` when it is a
    generator, so an abandoned search releases its cursor.
    """
    try:
        for row in rows:
            yield hit_to_conference(row)
    finally:
        close = getattr(rows, "close", None)
        if close is not None:
            close()
