"""Commands on the items of a roadmap."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from lodestar.domain.aggregates import Roadmap, RoadmapItem
from lodestar.domain.value_objects import EventContext, Status

from .base import RoadmapCommandService

if TYPE_CHECKING:
    from lodestar.domain.aggregates import ItemPatch

logger = logging.getLogger(__name__)

# pylint: disable=too-many-arguments


class ItemCommandService(RoadmapCommandService):
    """Add, update, remove and move items."""

    def add_item(
        self,
        roadmap_id: str,
        timeframe_id: str,
        initiative_id: str,
        title: str,
        description: str,
        status: Status | str | None = None,
        related_entities: Iterable[str] = (),
        notes: str = "",
    ) -> Roadmap | None:
        logger.debug("Adding item %r to initiative %s", title, initiative_id)
        with self.uow:
            if (roadmap := self._load(roadmap_id)) is None:
                return None
            timeframe = self._timeframe(roadmap, timeframe_id)
            initiative = self._initiative(timeframe, initiative_id)
            item = RoadmapItem.create(
                title=title,
                description=description,
                status=status,
                related_entities=related_entities,
                notes=notes,
            )
            context = EventContext(roadmap.id, timeframe.id)
            updated = self._replace_initiative(
                roadmap, timeframe, initiative.add_item(item, context)
            )
            saved = self._persist(updated, roadmap.revision)
        return self._publish(saved)

    def update_item(
        self,
        roadmap_id: str,
        timeframe_id: str,
        initiative_id: str,
        item_id: str,
        patch: ItemPatch,
    ) -> Roadmap | None:
        """Apply ``patch`` to an item; a status change raises an event."""
        with self.uow:
            if (roadmap := self._load(roadmap_id)) is None:
                return None
            timeframe = self._timeframe(roadmap, timeframe_id)
            initiative = self._initiative(timeframe, initiative_id)
            item = self._item(initiative, item_id)
            context = EventContext(roadmap.id, timeframe.id, initiative.id)
            updated_item = item.update(patch, context)
            if updated_item == item:
                logger.debug("UpdateItem %s: no changes; noop", item_id)
                return roadmap
            updated = self._replace_initiative(
                roadmap,
                timeframe,
                initiative.remove_item(item.id).add_item(updated_item),
            )
            saved = self._persist(updated, roadmap.revision)
        return self._publish(saved)

    def remove_item(
        self, roadmap_id: str, timeframe_id: str, initiative_id: str, item_id: str
    ) -> Roadmap | None:
        with self.uow:
            if (roadmap := self._load(roadmap_id)) is None:
                return None
            timeframe = self._timeframe(roadmap, timeframe_id)
            initiative = self._initiative(timeframe, initiative_id)
            updated = self._replace_initiative(
                roadmap, timeframe, initiative.remove_item(item_id)
            )
            saved = self._persist(updated, roadmap.revision)
        return self._publish(saved)

    def move_item(
        self,
        roadmap_id: str,
        source_timeframe_id: str,
        source_initiative_id: str,
        target_timeframe_id: str,
        target_initiative_id: str,
        item_id: str,
    ) -> Roadmap | None:
        """Move an item between initiatives, possibly across timeframes.

        Source, target and item are all resolved before anything changes. When
        both initiatives share a timeframe the target is looked up again on the
        roadmap that already lacks the item, so the removal is not lost. The
        target raises `RoadmapItemAdded`.
        """
        with self.uow:
            if (roadmap := self._load(roadmap_id)) is None:
                return None
            source_timeframe = self._timeframe(roadmap, source_timeframe_id)
            source = self._initiative(source_timeframe, source_initiative_id)
            item = self._item(source, item_id)
            self._initiative(
                self._timeframe(roadmap, target_timeframe_id), target_initiative_id
            )
            if (source_timeframe_id, source_initiative_id) == (
                target_timeframe_id,
                target_initiative_id,
            ):
                logger.debug(
                    "MoveItem %s: already in initiative %s; noop",
                    item_id,
                    target_initiative_id,
                )
                return roadmap

            without = self._replace_initiative(
                roadmap, source_timeframe, source.remove_item(item.id)
            )
            target_timeframe = self._timeframe(without, target_timeframe_id)
            target = self._initiative(target_timeframe, target_initiative_id)
            context = EventContext(roadmap.id, target_timeframe.id)
            updated = self._replace_initiative(
                without, target_timeframe, target.add_item(item, context)
            )
            saved = self._persist(updated, roadmap.revision)
        return self._publish(saved)
