"""Domain-layer error definitions."""

# ============================================================================
#                           General domain errors
# ============================================================================


class DomainError(Exception):
    """Base class for domain-layer errors."""


class NotFoundError(DomainError, LookupError):
    """Raised when an id does not exist in the container it was looked up in.

    Args:
        kind: Kind of the missing entity (e.g. "item", "initiative").
        entity_id: The id that was not found.
        container_kind: Kind of the container searched (e.g. "initiative", "roadmap").
        container_id: Id of the container searched.
    """

    def __init__(
        self, kind: str, entity_id: str, container_kind: str, container_id: str
    ) -> None:
        super().__init__(
            f"{kind.capitalize()} with ID '{entity_id}' not found in "
            f"{container_kind} '{container_id}'"
        )
        self.kind = kind
        self.entity_id = entity_id
        self.container_kind = container_kind
        self.container_id = container_id


# ============================================================================
#                       Value and patch related errors
# ============================================================================


class UnknownEnumValueError(DomainError, ValueError):
    """Raised when a string does not name any member of a value-object enum."""

    def __init__(self, enum_name: str, value: object) -> None:
        super().__init__(f"Invalid {enum_name} value: {value}")
        self.enum_name = enum_name
        self.value = value


class InvalidPatchError(DomainError, ValueError):
    """Raised when a patch tries to clear a field that must always hold a value."""

    def __init__(self, kind: str, key: str, field: str) -> None:
        super().__init__(f"Invalid {kind} ({key}) patch: {field} cannot be cleared")
        self.kind = kind
        self.key = key
        self.field = field
