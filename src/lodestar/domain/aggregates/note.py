"""RoadmapNote: a free-standing note cross-referenced to roadmap items by id."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar

from lodestar.domain.unsettable import UNSET, Unsettable, resolve
from lodestar.domain.utils import from_iso, id_tuple, new_entity_id, to_iso, utcnow
from lodestar.domain.value_objects import Category, Priority

from .base import Entity

# pylint: disable=too-many-instance-attributes


@dataclass(frozen=True, slots=True)
class NotePatch:
    """Partial update for a `RoadmapNote`."""

    title: Unsettable[str] = UNSET
    content: Unsettable[str] = UNSET
    category: Unsettable[Category | str] = UNSET
    priority: Unsettable[Priority | str] = UNSET
    timeline: Unsettable[str] = UNSET
    related_items: Unsettable[Iterable[str]] = UNSET


@dataclass(frozen=True, slots=True)
class RoadmapNote(Entity):
    """A note living outside the roadmap aggregate, with its own repository."""

    KIND: ClassVar[str] = "note"

    id: str
    title: str
    content: str
    category: Category
    priority: Priority
    timeline: str
    created_at: datetime
    updated_at: datetime
    related_items: tuple[str, ...] = ()

    @classmethod
    def create(  # pylint: disable=too-many-arguments
        cls,
        title: str,
        content: str,
        category: Category | str,
        priority: Priority | str,
        timeline: str,
        related_items: Iterable[str] = (),
        *,
        entity_id: str | None = None,
    ) -> RoadmapNote:
        now = utcnow()
        return cls(
            id=entity_id or new_entity_id(cls.KIND),
            title=title,
            content=content,
            category=Category.coerce(category),
            priority=Priority.coerce(priority),
            timeline=timeline,
            created_at=now,
            updated_at=now,
            related_items=id_tuple(related_items),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RoadmapNote:
        return cls(
            id=data["id"],
            title=data["title"],
            content=data.get("content", ""),
            category=Category.from_string(data["category"]),
            priority=Priority.from_string(data["priority"]),
            timeline=data.get("timeline", ""),
            created_at=from_iso(data["created_at"]),
            updated_at=from_iso(data["updated_at"]),
            related_items=id_tuple(data.get("related_items", ())),
        )

    def update(self, patch: NotePatch) -> RoadmapNote:
        """Return a copy with the patch applied. Always refreshes ``updated_at``."""

        def _resolve(field, convert=None):
            return resolve(
                getattr(patch, field),
                getattr(self, field),
                field=field,
                kind=self.KIND,
                key=self.id,
                convert=convert,
            )

        return dataclasses.replace(
            self,
            title=_resolve("title"),
            content=_resolve("content"),
            category=_resolve("category", Category.coerce),
            priority=_resolve("priority", Priority.coerce),
            timeline=_resolve("timeline"),
            related_items=_resolve("related_items", id_tuple),
            updated_at=utcnow(),
        )

    def add_related_item(self, item_id: str) -> RoadmapNote:
        if item_id in self.related_items:
            return self
        return dataclasses.replace(
            self, related_items=(*self.related_items, item_id), updated_at=utcnow()
        )

    def remove_related_item(self, item_id: str) -> RoadmapNote:
        if item_id not in self.related_items:
            return self
        return dataclasses.replace(
            self,
            related_items=tuple(i for i in self.related_items if i != item_id),
            updated_at=utcnow(),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "category": str(self.category),
            "priority": str(self.priority),
            "timeline": self.timeline,
            "related_items": list(self.related_items),
            "created_at": to_iso(self.created_at),
            "updated_at": to_iso(self.updated_at),
        }
