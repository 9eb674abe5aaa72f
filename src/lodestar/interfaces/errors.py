"""Errors raised by repository adapters."""


class RepositoryError(Exception):
    """Base class for all repository-related errors."""

    def __init__(self, kind: str, key: str, message: str | None = None) -> None:
        if message is None:
            message = f"{kind} ({key}) repository error"
        super().__init__(message)
        self.kind = kind
        self.key = key


class RevisionConflictError(RepositoryError):
    """Raised when the stored revision advanced since the aggregate was loaded."""

    def __init__(self, kind: str, key: str, head: int | None, expected: int) -> None:
        shown = "unknown" if head is None else head
        super().__init__(
            kind,
            key,
            f"{kind} ({key}) revision conflict: head={shown}, expected={expected}",
        )
        self.head = head
        self.expected = expected


class DocumentDecodeError(RepositoryError):
    """Raised when a stored document cannot be turned back into an entity."""

    def __init__(self, kind: str, key: str, reason: str) -> None:
        super().__init__(kind, key, f"Cannot decode {kind} ({key}): {reason}")
        self.reason = reason


class StoreUnavailableError(RepositoryError):
    """Raised when the backing store cannot be reached or fails at the driver level."""

    def __init__(self, kind: str, key: str, reason: str) -> None:
        super().__init__(kind, key, f"{kind} ({key}) store unavailable: {reason}")
        self.reason = reason
