"""Primary store capability for conference records."""

from typing import Protocol, runtime_checkable

from conferences.records.schemas import Conference


@runtime_checkable
class ConferenceStore(Protocol):
    """Authoritative keyed storage for conferences.

    The store is the sole assigner of identifiers and the source of truth
    for whether a conference exists.
    """

    def insert(self, conference: Conference) -> Conference:
        """Persist a new conference and return it with its assigned id."""
        ...

    def replace(self, conference_id: int, conference: Conference) -> Conference:
        """Overwrite every field of the conference stored under ``conference_id``."""
        ...

    def find_by_id(self, conference_id: int) -> Conference | None:
        """Exact lookup by id."""
        ...

    def list_all(self) -> list[Conference]:
        """All stored conferences, in store-defined order."""
        ...

    def delete_by_id(self, conference_id: int) -> None:
        """Remove a conference; a missing id is not an error."""
        ...

    def exists_by_id(self, conference_id: int) -> bool:
        """Whether a conference with this id is stored."""
        ...
