"""Module including value objects used across the domain layer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Self

from lodestar.domain.errors import UnknownEnumValueError


class _StringEnum(Enum):
    """Enum whose members round-trip through their lower-case string form."""

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Parse a member from a string, ignoring case and surrounding spaces.

        Raises:
            UnknownEnumValueError: If ``value`` is not a string or names no member.
        """
        if not isinstance(value, str):
            raise UnknownEnumValueError(cls.__name__.lower(), value)
        normalized = value.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        raise UnknownEnumValueError(cls.__name__.lower(), value)

    @classmethod
    def coerce(cls, value: Self | str) -> Self:
        """Return ``value`` as a member, parsing it first when given a string."""
        if isinstance(value, cls):
            return value
        return cls.from_string(value)  # type: ignore[arg-type]

    def __str__(self) -> str:
        return self.value


class Status(_StringEnum):
    """Lifecycle status of a roadmap item."""

    PLANNED = "planned"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELED = "canceled"

    @property
    def is_planned(self) -> bool:
        return self is Status.PLANNED

    @property
    def is_in_progress(self) -> bool:
        return self is Status.IN_PROGRESS

    @property
    def is_completed(self) -> bool:
        return self is Status.COMPLETED

    @property
    def is_canceled(self) -> bool:
        return self is Status.CANCELED

    @property
    def is_active(self) -> bool:
        """Planned or in progress."""
        return self in (Status.PLANNED, Status.IN_PROGRESS)


class Priority(_StringEnum):
    """Priority of an initiative or note."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def is_high(self) -> bool:
        return self is Priority.HIGH

    @property
    def is_medium(self) -> bool:
        return self is Priority.MEDIUM

    @property
    def is_low(self) -> bool:
        return self is Priority.LOW


class Category(_StringEnum):
    """Kind of work an initiative or note describes."""

    FEATURE = "feature"
    ENHANCEMENT = "enhancement"
    BUG = "bug"
    ARCHITECTURE = "architecture"
    TECH_DEBT = "tech-debt"
    RESEARCH = "research"
    DOCUMENTATION = "documentation"
    OTHER = "other"

    @property
    def is_feature(self) -> bool:
        return self is Category.FEATURE

    @property
    def is_enhancement(self) -> bool:
        return self is Category.ENHANCEMENT

    @property
    def is_bug(self) -> bool:
        return self is Category.BUG

    @property
    def is_architecture(self) -> bool:
        return self is Category.ARCHITECTURE

    @property
    def is_tech_debt(self) -> bool:
        return self is Category.TECH_DEBT

    @property
    def is_research(self) -> bool:
        return self is Category.RESEARCH

    @property
    def is_documentation(self) -> bool:
        return self is Category.DOCUMENTATION

    @property
    def is_other(self) -> bool:
        return self is Category.OTHER


@dataclass(frozen=True, slots=True)
class EventContext:
    """Ancestor ids handed to a mutation so it can stamp outgoing events.

    Entities never hold references to their parents; a context is the only way
    a nested entity learns where it lives.
    """

    roadmap_id: str
    timeframe_id: str
    initiative_id: str | None = None

    def for_initiative(self, initiative_id: str) -> EventContext:
        """Return a copy of this context narrowed to ``initiative_id``."""
        return EventContext(self.roadmap_id, self.timeframe_id, initiative_id)


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of a soft-invariant check. Returned as data, never raised."""

    valid: bool
    message: str | None = None

    @classmethod
    def ok(cls) -> ValidationResult:
        return cls(valid=True)

    @classmethod
    def failed(cls, message: str) -> ValidationResult:
        return cls(valid=False, message=message)
