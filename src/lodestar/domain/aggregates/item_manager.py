"""Item collection owned by an initiative."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

from lodestar.domain import events
from lodestar.domain.errors import NotFoundError
from lodestar.domain.value_objects import EventContext

from .base import Entity
from .item import RoadmapItem


@dataclass(frozen=True, slots=True)
class ItemManager(Entity):
    """Immutable map of items keyed by id, in insertion order.

    The manager does not know its initiative's id; the initiative passes it in
    through ``context`` when an `RoadmapItemAdded` event should be raised.
    """

    KIND: ClassVar[str] = "items"

    initiative_id: str
    items: dict[str, RoadmapItem] = field(default_factory=dict, hash=False)

    def add_item(
        self, item: RoadmapItem, context: EventContext | None = None
    ) -> ItemManager:
        """Add (or replace) an item.

        Events carried by ``item`` move onto the returned manager. A complete
        ``context`` additionally raises `RoadmapItemAdded`.
        """
        stored, carried = self.absorb(item)
        added = None
        if context is not None and context.initiative_id is not None:
            added = events.RoadmapItemAdded(
                roadmap_id=context.roadmap_id,
                timeframe_id=context.timeframe_id,
                initiative_id=context.initiative_id,
                item_id=item.id,
                title=item.title,
                status=item.status,
            )
        manager = ItemManager(
            initiative_id=self.initiative_id,
            items={**self.items, item.id: stored},
            pending_events=self.pending_events,
        )
        return manager._with_events(added, *carried)

    def remove_item(self, item_id: str) -> ItemManager:
        """Remove an item.

        Raises:
            NotFoundError: If the initiative holds no item with ``item_id``.
        """
        if item_id not in self.items:
            raise NotFoundError(
                RoadmapItem.KIND, item_id, "initiative", self.initiative_id
            )
        remaining = {key: value for key, value in self.items.items() if key != item_id}
        return ItemManager(
            initiative_id=self.initiative_id,
            items=remaining,
            pending_events=self.pending_events,
        )

    def get_item(self, item_id: str) -> RoadmapItem | None:
        return self.items.get(item_id)

    def has_item(self, item_id: str) -> bool:
        return item_id in self.items

    @property
    def count(self) -> int:
        return len(self.items)

    def to_list(self) -> list[dict[str, Any]]:
        return [item.to_dict() for item in self.items.values()]
