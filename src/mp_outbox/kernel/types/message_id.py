"""Message identifiers – UUID v7, time-ordered and stable across redelivery."""

from __future__ import annotations

import uuid


def new_message_id() -> str:
    """Return a fresh UUID v7 as its canonical string form."""
    import uuid_utils

    return str(uuid_utils.uuid7())


def canonical_message_id(value: str) -> str:
    """Return *value* as a lower-case hyphenated UUID string.

    Accepts every spelling :class:`uuid.UUID` parses (upper-case, braced,
    hyphen-less, ``urn:uuid:``), so one UUID always maps to one identity.
    Raises :class:`ValueError` when *value* is not a UUID.
    """
    try:
        return str(uuid.UUID(value))
    except (AttributeError, TypeError) as exc:
        raise ValueError(f"not a UUID: {value!r}") from exc


def is_valid_message_id(value: str) -> bool:
    """Return ``True`` if *value* parses as a UUID (any version)."""
    try:
        canonical_message_id(value)
    except ValueError:
        return False
    return True


__all__ = ["canonical_message_id", "is_valid_message_id", "new_message_id"]
