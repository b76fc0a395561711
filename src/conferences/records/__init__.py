"""Conference record model, merge patches and error taxonomy."""

from conferences.records.errors import (
    ENTITY_NAME,
    ConferenceError,
    IdAlreadyPresentError,
    IdMismatchError,
    IndexSyncError,
    MissingIdError,
    RecordNotFoundError,
    RecordValidationError,
)
from conferences.records.merge import merge
from conferences.records.schemas import Conference, ConferencePatch

__all__ = [
    "ENTITY_NAME",
    "Conference",
    "ConferenceError",
    "ConferencePatch",
    "IdAlreadyPresentError",
    "IdMismatchError",
    "IndexSyncError",
    "MissingIdError",
    "RecordNotFoundError",
    "RecordValidationError",
    "merge",
]
