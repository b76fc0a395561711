"""Pydantic schemas for conference records and merge patches."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, Field

# Ids are stored as SQLite INTEGER, a signed 64-bit value.
MIN_ID = -(2**63)
MAX_ID = 2**63 - 1

ConferenceId = Annotated[int, Field(ge=MIN_ID, le=MAX_ID)]


class Conference(BaseModel):
    """A conference as held by the primary store and the search index.

    Attributes:
        id: Identifier assigned by the primary store on insert.
        name: Conference name.
        date: Instant the conference takes place.
    """

    id: ConferenceId | None = None
    name: str | None = None
    date: datetime | None = None


class ConferencePatch(BaseModel):
    """Sparse update body for merge-patch requests.

    Omitted fields and fields sent as null leave the stored value
    unchanged.
    """

    id: ConferenceId | None = None
    name: str | None = None
    date: datetime | None = None

    def present_fields(self) -> dict[str, object]:
        """Fields the client supplied with a non-null value, id excluded.

        Returns:
            Mapping of field name to patch value.
        """
        return self.model_dump(exclude_unset=True, exclude_none=True, exclude={"id"})
