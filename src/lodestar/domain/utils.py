"""Domain layer utilities."""

import threading
from collections.abc import Iterable
from datetime import datetime, timezone

from ulid import monotonic

_ID_LOCK = threading.Lock()


def new_entity_id(prefix: str) -> str:
    """Generate a new entity id of the form ``<prefix>-<ULID>``.

    ULIDs combine a millisecond timestamp with a random component and sort
    lexicographically by creation time. Generation is serialized across threads
    so ids stay monotonic within a process.

    Args:
        prefix: Short kind tag, e.g. ``"item"`` or ``"timeframe"``.

    Returns:
        The new identifier.
    """
    with _ID_LOCK:
        return f"{prefix}-{monotonic.new()}"


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_iso(value: datetime) -> str:
    """Render an aware datetime as an ISO-8601 string."""
    return value.isoformat()


def from_iso(value: str) -> datetime:
    """Parse an ISO-8601 string, treating naive values as UTC."""
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def id_tuple(ids: Iterable[str]) -> tuple[str, ...]:
    """Freeze a collection of ids. A bare string is one id, not its characters."""
    if isinstance(ids, str):
        return (ids,)
    return tuple(ids)
