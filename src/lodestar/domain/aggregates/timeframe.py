"""RoadmapTimeframe: an ordered bucket of initiatives."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, ClassVar

from lodestar.domain import events
from lodestar.domain.errors import NotFoundError
from lodestar.domain.unsettable import UNSET, Unsettable, resolve
from lodestar.domain.utils import new_entity_id
from lodestar.domain.value_objects import EventContext

from .base import Entity
from .initiative import RoadmapInitiative


@dataclass(frozen=True, slots=True)
class TimeframePatch:
    """Partial update for a `RoadmapTimeframe`: rename and/or reorder."""

    name: Unsettable[str] = UNSET
    order: Unsettable[int] = UNSET


@dataclass(frozen=True, slots=True)
class RoadmapTimeframe(Entity):
    """A named slot on the roadmap (e.g. "Now", "Q3") holding initiatives.

    ``order`` positions the timeframe on its roadmap. Uniqueness and contiguity of
    orders are not enforced here; see `RoadmapTimeframeService`.
    """

    KIND: ClassVar[str] = "timeframe"

    id: str
    name: str
    order: int
    initiatives: dict[str, RoadmapInitiative] = field(default_factory=dict, hash=False)

    # --- Construction Paths ---

    @classmethod
    def create(
        cls,
        name: str,
        order: int,
        initial_initiatives: Iterable[RoadmapInitiative] = (),
        *,
        entity_id: str | None = None,
    ) -> RoadmapTimeframe:
        """Create a new timeframe, optionally seeded with initiatives."""
        timeframe = cls(
            id=entity_id or new_entity_id(cls.KIND), name=name, order=order
        )
        for initiative in initial_initiatives:
            timeframe = timeframe.add_initiative(initiative)
        return timeframe

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RoadmapTimeframe:
        """Rebuild a timeframe (and everything below it) from its persisted form."""
        initiatives = [
            RoadmapInitiative.from_dict(initiative)
            for initiative in data.get("initiatives", ())
        ]
        return cls(
            id=data["id"],
            name=data["name"],
            order=int(data["order"]),
            initiatives={initiative.id: initiative for initiative in initiatives},
        )

    # --- Initiatives ---

    def get_initiative(self, initiative_id: str) -> RoadmapInitiative | None:
        return self.initiatives.get(initiative_id)

    def add_initiative(
        self, initiative: RoadmapInitiative, context: EventContext | None = None
    ) -> RoadmapTimeframe:
        """Add (or replace) an initiative.

        Events carried by ``initiative`` move onto the returned timeframe. A
        context carrying the roadmap id additionally raises
        `RoadmapInitiativeAdded` tagged with this timeframe's id.
        """
        stored, carried = self.absorb(initiative)
        added = None
        if context is not None:
            added = events.RoadmapInitiativeAdded(
                roadmap_id=context.roadmap_id,
                timeframe_id=self.id,
                initiative_id=initiative.id,
                title=initiative.title,
                category=initiative.category,
                priority=initiative.priority,
            )
        timeframe = dataclasses.replace(
            self, initiatives={**self.initiatives, initiative.id: stored}
        )
        return timeframe._with_events(added, *carried)

    def remove_initiative(self, initiative_id: str) -> RoadmapTimeframe:
        """Remove an initiative.

        Raises:
            NotFoundError: If no initiative with ``initiative_id`` is in this timeframe.
        """
        if initiative_id not in self.initiatives:
            raise NotFoundError(
                RoadmapInitiative.KIND, initiative_id, self.KIND, self.id
            )
        return dataclasses.replace(
            self,
            initiatives={
                key: value
                for key, value in self.initiatives.items()
                if key != initiative_id
            },
        )

    # --- Mutations ---

    def update(self, patch: TimeframePatch) -> RoadmapTimeframe:
        """Return a copy renamed and/or reordered per ``patch``."""
        name = resolve(
            patch.name, self.name, field="name", kind=self.KIND, key=self.id
        )
        order = resolve(
            patch.order,
            self.order,
            field="order",
            kind=self.KIND,
            key=self.id,
            convert=int,
        )
        return dataclasses.replace(self, name=name, order=order)

    # --- Serialization ---

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "order": self.order,
            "initiatives": [
                initiative.to_dict() for initiative in self.initiatives.values()
            ],
        }
