"""Primary store capability and its SQLite implementation."""

from conferences.storage.base import ConferenceStore
from conferences.storage.sqlite import SqliteConferenceStore

__all__ = [
    "ConferenceStore",
    "SqliteConferenceStore",
]
