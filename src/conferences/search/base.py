"""Search index capability for conference records."""

from collections.abc import Iterator
from typing import Protocol, runtime_checkable

from conferences.records.schemas import Conference


@runtime_checkable
class SearchIndex(Protocol):
    """Derived, query-string searchable view of the primary store.

    The index may lag behind the primary store and is never consulted to
    decide whether a conference exists.
    """

    def put(self, conference: Conference) -> None:
        """Index the full conference, replacing any previous document."""
        ...

    def delete_by_id(self, conference_id: int) -> None:
        """Drop the document for ``conference_id`` if present."""
        ...

    def search(self, query: str) -> Iterator[Conference]:
        """Lazily yield conferences matching the index's query grammar."""
        ...

    def clear(self) -> None:
        """Remove every document."""
        ...
