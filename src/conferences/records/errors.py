"""Exceptions raised by conference operations."""

# Unprefixed; app_name already namespaces the alert and error headers.
ENTITY_NAME = "conference"


class ConferenceError(Exception):
    """Base class for conference operation failures.

    Attributes:
        code: Machine-readable reason code.
    """

    code = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class RecordValidationError(ConferenceError):
    """Raised when identifier rules reject a create or update."""


class IdAlreadyPresentError(RecordValidationError):
    """A new conference arrived with an id already set."""

    code = "idexists"

    def __init__(self) -> None:
        super().__init__("A new conference cannot already have an ID")


class MissingIdError(RecordValidationError):
    """An update body carries no id."""

    code = "idnull"

    def __init__(self) -> None:
        super().__init__("Invalid id")


class IdMismatchError(RecordValidationError):
    """An update body id differs from the target id."""

    code = "idinvalid"

    def __init__(self, path_id: int, body_id: int) -> None:
        super().__init__("Invalid ID")
        self.path_id = path_id
        self.body_id = body_id


class RecordNotFoundError(ConferenceError):
    """No conference with the given id exists in the primary store."""

    code = "idnotfound"

    def __init__(self, conference_id: int) -> None:
        super().__init__("Entity not found")
        self.conference_id = conference_id


class IndexSyncError(ConferenceError):
    """The search index failed to follow a committed primary-store mutation.

    Attributes:
        operation: Index operation that failed ("put" or "delete").
        conference_id: Identifier of the affected conference.
    """

    code = "indexsync"

    def __init__(self, operation: str, conference_id: int) -> None:
        super().__init__(f"Search index {operation} failed for conference {conference_id}")
        self.operation = operation
        self.conference_id = conference_id
