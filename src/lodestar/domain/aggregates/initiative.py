"""RoadmapInitiative: a classified group of items inside a timeframe."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, ClassVar

from lodestar.domain.unsettable import UNSET, Unsettable, resolve
from lodestar.domain.utils import new_entity_id
from lodestar.domain.value_objects import Category, EventContext, Priority

from . import initiative_events
from .base import Entity
from .item import RoadmapItem
from .item_manager import ItemManager


@dataclass(frozen=True, slots=True)
class InitiativePatch:
    """Partial update for a `RoadmapInitiative`. UNSET fields are left unchanged."""

    title: Unsettable[str] = UNSET
    description: Unsettable[str] = UNSET
    category: Unsettable[Category | str] = UNSET
    priority: Unsettable[Priority | str] = UNSET


@dataclass(frozen=True, slots=True)
class RoadmapInitiative(Entity):
    """A body of work with a category and a priority, holding items."""

    KIND: ClassVar[str] = "initiative"

    id: str
    title: str
    description: str
    category: Category
    priority: Priority
    item_manager: ItemManager

    # --- Construction Paths ---

    @classmethod
    def create(  # pylint: disable=too-many-arguments
        cls,
        title: str,
        description: str,
        category: Category | str,
        priority: Priority | str,
        initial_items: Iterable[RoadmapItem] = (),
        *,
        entity_id: str | None = None,
    ) -> RoadmapInitiative:
        """Create a new initiative, optionally seeded with items."""
        initiative_id = entity_id or new_entity_id(cls.KIND)
        manager = ItemManager(initiative_id=initiative_id)
        for item in initial_items:
            manager = manager.add_item(item)
        manager, carried = cls.absorb(manager)
        return cls(
            id=initiative_id,
            title=title,
            description=description,
            category=Category.coerce(category),
            priority=Priority.coerce(priority),
            item_manager=manager,
            pending_events=carried,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RoadmapInitiative:
        """Rebuild an initiative (and its items) from its persisted form."""
        items = [RoadmapItem.from_dict(item) for item in data.get("items", ())]
        return cls(
            id=data["id"],
            title=data["title"],
            description=data.get("description", ""),
            category=Category.from_string(data["category"]),
            priority=Priority.from_string(data["priority"]),
            item_manager=ItemManager(
                initiative_id=data["id"], items={item.id: item for item in items}
            ),
        )

    # --- Items ---

    @property
    def items(self) -> tuple[RoadmapItem, ...]:
        return tuple(self.item_manager.items.values())

    @property
    def item_count(self) -> int:
        return self.item_manager.count

    def get_item(self, item_id: str) -> RoadmapItem | None:
        return self.item_manager.get_item(item_id)

    def has_item(self, item_id: str) -> bool:
        return self.item_manager.has_item(item_id)

    def add_item(
        self, item: RoadmapItem, context: EventContext | None = None
    ) -> RoadmapInitiative:
        """Add (or replace) an item.

        With a context carrying the roadmap and timeframe ids, a
        `RoadmapItemAdded` event tagged with this initiative's id is raised.
        Events already carried by ``item`` are re-exposed on the result.
        """
        item_context = context.for_initiative(self.id) if context else None
        return self._with_manager(self.item_manager.add_item(item, item_context))

    def remove_item(self, item_id: str) -> RoadmapInitiative:
        """Remove an item.

        Raises:
            NotFoundError: If no item with ``item_id`` exists in this initiative.
        """
        return self._with_manager(self.item_manager.remove_item(item_id))

    def _with_manager(self, manager: ItemManager) -> RoadmapInitiative:
        stored, carried = self.absorb(manager)
        return dataclasses.replace(self, item_manager=stored)._with_events(*carried)

    # --- Classification ---

    def update(
        self, patch: InitiativePatch, context: EventContext | None = None
    ) -> RoadmapInitiative:
        """Return a copy with the patch applied.

        Priority and category changes raise events when ``context`` is given and
        the new value differs from the current one.
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
            category=_resolve("category", Category.coerce),
            priority=_resolve("priority", Priority.coerce),
        )
        return updated._with_events(
            initiative_events.priority_changed(
                self.id, self.priority, updated.priority, context
            ),
            initiative_events.category_changed(
                self.id, self.category, updated.category, context
            ),
        )

    def update_priority(
        self, priority: Priority | str, context: EventContext | None = None
    ) -> RoadmapInitiative:
        return self.update(InitiativePatch(priority=priority), context)

    def update_category(
        self, category: Category | str, context: EventContext | None = None
    ) -> RoadmapInitiative:
        return self.update(InitiativePatch(category=category), context)

    # --- Serialization ---

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": str(self.category),
            "priority": str(self.priority),
            "items": self.item_manager.to_list(),
        }
