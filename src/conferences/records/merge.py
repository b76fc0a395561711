"""Merge-patch application for conference records."""

from conferences.records.schemas import Conference, ConferencePatch


def merge(existing: Conference, patch: ConferencePatch) -> Conference:
    """Apply a sparse patch on top of an existing conference.

    Present patch fields overwrite, absent ones keep the existing value.
    An empty string counts as present. The id is never taken from the
    patch; callers validate it against the target beforehand.

    Args:
        existing: Conference as currently stored.
        patch: Client-supplied partial update.

    Returns:
        A new Conference; ``existing`` is left untouched.
    """
    return existing.model_copy(update=patch.present_fields())
