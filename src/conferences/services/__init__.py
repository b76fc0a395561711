"""Application services."""

from conferences.services.sync import ConferenceSyncService

__all__ = ["ConferenceSyncService"]
