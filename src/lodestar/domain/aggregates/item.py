"""RoadmapItem: the leaf entity of the roadmap aggregate."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, ClassVar

from lodestar.domain import events
from lodestar.domain.unsettable import UNSET, Unsettable, resolve
from lodestar.domain.utils import id_tuple, new_entity_id
from lodestar.domain.value_objects import EventContext, Status

from .base import Entity


@dataclass(frozen=True, slots=True)
class ItemPatch:
    """Partial update for a `RoadmapItem`. UNSET fields are left unchanged."""

    title: Unsettable[str] = UNSET
    description: Unsettable[str] = UNSET
    status: Unsettable[Status | str] = UNSET
    related_entities: Unsettable[Iterable[str]] = UNSET
    notes: Unsettable[str] = UNSET


@dataclass(frozen=True, slots=True)
class RoadmapItem(Entity):
    """A single piece of work inside an initiative."""

    KIND: ClassVar[str] = "item"

    id: str
    title: str
    description: str
    status: Status = Status.PLANNED
    related_entities: tuple[str, ...] = ()
    notes: str = ""

    # --- Construction Paths ---

    @classmethod
    def create(  # pylint: disable=too-many-arguments
        cls,
        title: str,
        description: str,
        status: Status | str | None = None,
        related_entities: Iterable[str] = (),
        notes: str = "",
        *,
        entity_id: str | None = None,
    ) -> RoadmapItem:
        """Create a new item with a generated id. Status defaults to planned."""
        return cls(
            id=entity_id or new_entity_id(cls.KIND),
            title=title,
            description=description,
            status=Status.coerce(status) if status is not None else Status.PLANNED,
            related_entities=id_tuple(related_entities),
            notes=notes,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RoadmapItem:
        """Rebuild an item from its persisted form."""
        return cls(
            id=data["id"],
            title=data["title"],
            description=data.get("description", ""),
            status=Status.from_string(data.get("status", Status.PLANNED.value)),
            related_entities=id_tuple(data.get("related_entities", ())),
            notes=data.get("notes", ""),
        )

    # --- Mutations ---

    def update(
        self, patch: ItemPatch, context: EventContext | None = None
    ) -> RoadmapItem:
        """Return a copy with the patch applied.

        A status change is recorded as a `RoadmapItemStatusChanged` event only
        when ``context`` names the roadmap, timeframe and initiative.
        """

        def _resolve(field, convert=None):
            return resolve(
                getattr(patch, field),
                getattr(self, field),
                field=field,
                kind=self.KIND,
                key=self.id,
                convert=convert,
            )

        updated = dataclasses.replace(
            self,
            title=_resolve("title"),
            description=_resolve("description"),
            status=_resolve("status", Status.coerce),
            related_entities=_resolve("related_entities", id_tuple),
            notes=_resolve("notes"),
        )

        if (
            updated.status != self.status
            and context is not None
            and context.initiative_id is not None
        ):
            updated = updated._with_events(
                events.RoadmapItemStatusChanged(
                    roadmap_id=context.roadmap_id,
                    timeframe_id=context.timeframe_id,
                    initiative_id=context.initiative_id,
                    item_id=self.id,
                    old_status=self.status,
                    new_status=updated.status,
                )
            )
        return updated

    def add_related_entity(self, entity_id: str) -> RoadmapItem:
        """Link another entity by id. No-op if already linked."""
        if entity_id in self.related_entities:
            return self
        return dataclasses.replace(
            self, related_entities=(*self.related_entities, entity_id)
        )

    def remove_related_entity(self, entity_id: str) -> RoadmapItem:
        """Unlink an entity by id. No-op if not linked."""
        if entity_id not in self.related_entities:
            return self
        return dataclasses.replace(
            self,
            related_entities=tuple(e for e in self.related_entities if e != entity_id),
        )

    # --- Serialization ---

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": str(self.status),
            "related_entities": list(self.related_entities),
            "notes": self.notes,
        }
