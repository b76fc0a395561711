"""Dual-write coordination between the primary store and the search index.

Every mutation commits to the primary store first and is then mirrored
into the search index with the full resulting conference. Index failures
are best-effort: they are logged as IndexSyncError and never undo or
fail the committed primary write. Divergence is repaired by reindex().
"""

from collections.abc import Iterator

import structlog

from conferences.records.errors import (
    IdAlreadyPresentError,
    IdMismatchError,
    IndexSyncError,
    MissingIdError,
    RecordNotFoundError,
)
from conferences.records.merge import merge
from conferences.records.schemas import Conference, ConferencePatch
from conferences.search.base import SearchIndex
from conferences.storage.base import ConferenceStore

logger = structlog.get_logger()


class ConferenceSyncService:
    """CRUD and search over conferences, keeping both stores in step.

    Holds no state besides the two store references; callers may share
    one instance across threads.
    """

    def __init__(self, store: ConferenceStore, index: SearchIndex) -> None:
        self._store = store
        self._index = index

    def create(self, conference: Conference) -> Conference:
        """Insert a new conference and index it.

        Args:
            conference: Conference without an id.

        Returns:
            The stored conference with its assigned id.

        Raises:
            IdAlreadyPresentError: If the conference already has an id.
        """
        logger.debug("conference_create", conference=conference.model_dump(mode="json"))
        if conference.id is not None:
            raise IdAlreadyPresentError()

        result = self._store.insert(conference)
        self._reindex_one(result)
        return result

    def update(self, conference_id: int, conference: Conference) -> Conference:
        """Replace a stored conference wholesale and reindex it.

        Raises:
            MissingIdError: If the body has no id.
            IdMismatchError: If the body id differs from ``conference_id``.
            RecordNotFoundError: If no such conference is stored.
        """
        logger.debug("conference_update", conference_id=conference_id)
        self._check_target(conference_id, conference.id)

        result = self._store.replace(conference_id, conference)
        self._reindex_one(result)
        return result

    def partial_update(self, conference_id: int, patch: ConferencePatch) -> Conference:
        """Merge a sparse patch into a stored conference and reindex the result.

        Raises:
            MissingIdError: If the patch has no id.
            IdMismatchError: If the patch id differs from ``conference_id``.
            RecordNotFoundError: If no such conference is stored, including
                when it is deleted between validation and merge.
        """
        logger.debug(
            "conference_partial_update",
            conference_id=conference_id,
            fields=sorted(patch.present_fields()),
        )
        self._check_target(conference_id, patch.id)

        existing = self._store.find_by_id(conference_id)
        if existing is None:
            raise RecordNotFoundError(conference_id)

        result = self._store.replace(conference_id, merge(existing, patch))
        self._reindex_one(result)
        return result

    def delete(self, conference_id: int) -> None:
        """Remove a conference from both stores; unknown ids are ignored."""
        logger.debug("conference_delete", conference_id=conference_id)
        self._store.delete_by_id(conference_id)
        try:
            self._index.delete_by_id(conference_id)
        except Exception as e:
            self._report_sync_failure("delete", conference_id, e)

    def list_all(self) -> list[Conference]:
        """All conferences from the primary store, in store order."""
        return self._store.list_all()

    def get(self, conference_id: int) -> Conference:
        """Exact lookup in the primary store.

        Raises:
            RecordNotFoundError: If no such conference is stored.
        """
        conference = self._store.find_by_id(conference_id)
        if conference is None:
            raise RecordNotFoundError(conference_id)
        return conference

    def search(self, query: str) -> Iterator[Conference]:
        """Query the search index; the primary store is not consulted.

        Args:
            query: Query in the index's own grammar, passed through as-is.

        Returns:
            One-shot lazy iterator of matching conferences.
        """
        logger.debug("conference_search", query=query)
        return self._index.search(query)

    def reindex(self) -> int:
        """Rebuild the search index from the primary store.

        The index is cleared before the store is read, so a conference
        committed while the rebuild runs is either in the snapshot or
        indexed by its own write afterwards.

        Returns:
            Number of conferences indexed.
        """
        self._index.clear()
        conferences = self._store.list_all()
        for conference in conferences:
            self._index.put(conference)

        logger.info("search_index_rebuilt", document_count=len(conferences))
        return len(conferences)

    def _check_target(self, conference_id: int, body_id: int | None) -> None:
        """Apply the id rules shared by full and partial updates."""
        if body_id is None:
            raise MissingIdError()
        if body_id != conference_id:
            raise IdMismatchError(conference_id, body_id)
        if not self._store.exists_by_id(conference_id):
            raise RecordNotFoundError(conference_id)

    def _reindex_one(self, conference: Conference) -> None:
        """Mirror a committed conference into the index."""
        assert conference.id is not None
        try:
            self._index.put(conference)
        except Exception as e:
            self._report_sync_failure("put", conference.id, e)

    def _report_sync_failure(
        self, operation: str, conference_id: int, cause: Exception
    ) -> None:
        """Log an index failure that followed a committed primary mutation."""
        error = IndexSyncError(operation, conference_id)
        error.__cause__ = cause
        logger.error(
            "search_index_sync_failed",
            operation=operation,
            conference_id=conference_id,
            error=str(cause),
            exc_info=error,
        )
