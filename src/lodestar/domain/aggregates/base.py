"""Base class for all roadmap entities."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import ClassVar, Self, TypeVar

from lodestar.domain.events import DomainEvent

E = TypeVar("E", bound="Entity")


@dataclass(frozen=True, slots=True)
class Entity:
    """Generic base class for immutable roadmap entities.

    Entities never change in place: every mutation returns a new instance. Events
    raised by a mutation ride along on the returned instance in ``pending_events``
    until a container absorbs them (see `absorb`), so the aggregate root ends up
    holding every event produced by one command, in order.

    ``pending_events`` is excluded from equality; two entities with the same
    fields are equal whether or not they carry events.
    """

    KIND: ClassVar[str]
    """Human-readable entity kind used in error messages (e.g. "item")."""

    pending_events: tuple[DomainEvent, ...] = field(
        default=(), kw_only=True, compare=False, repr=False
    )

    # --- Events ---

    @property
    def domain_events(self) -> tuple[DomainEvent, ...]:
        """Events raised on this entity (or absorbed from its children) since load."""
        return self.pending_events

    def clear_events(self) -> Self:
        """Return this entity without pending events."""
        if not self.pending_events:
            return self
        return dataclasses.replace(self, pending_events=())

    def _with_events(self, *events: DomainEvent | None) -> Self:
        """Return this entity with ``events`` appended; ``None`` entries are skipped."""
        raised = tuple(event for event in events if event is not None)
        if not raised:
            return self
        return dataclasses.replace(self, pending_events=self.pending_events + raised)

    @staticmethod
    def absorb(child: E) -> tuple[E, tuple[DomainEvent, ...]]:
        """Split a child into its event-free form and the events it carried.

        Containers store the event-free child and re-expose the events themselves,
        which keeps every event on exactly one level of the tree.
        """
        return child.clear_events(), child.pending_events
