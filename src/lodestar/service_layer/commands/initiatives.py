"""Commands on the initiatives of a roadmap."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from lodestar.domain.aggregates import Roadmap, RoadmapInitiative
from lodestar.domain.services import RoadmapPriorityService
from lodestar.domain.value_objects import Category, EventContext, Priority

from .base import RoadmapCommandService

if TYPE_CHECKING:
    from lodestar.domain.aggregates import InitiativePatch
    from lodestar.interfaces.unit_of_work import AbstractUnitOfWork
    from lodestar.service_layer.dispatcher import EventDispatcher

logger = logging.getLogger(__name__)


class InitiativeCommandService(RoadmapCommandService):
    """Add, update, remove, move and rebalance initiatives."""

    def __init__(
        self,
        uow: AbstractUnitOfWork,
        dispatcher: EventDispatcher,
        priority_service: RoadmapPriorityService | None = None,
    ) -> None:
        super().__init__(uow, dispatcher)
        self.priority_service = priority_service or RoadmapPriorityService()

    def add_initiative(  # pylint: disable=too-many-arguments
        self,
        roadmap_id: str,
        timeframe_id: str,
        title: str,
        description: str,
        category: Category | str,
        priority: Priority | str,
    ) -> Roadmap | None:
        logger.debug("Adding initiative %r to timeframe %s", title, timeframe_id)
        with self.uow:
            if (roadmap := self._load(roadmap_id)) is None:
                return None
            timeframe = self._timeframe(roadmap, timeframe_id)
            initiative = RoadmapInitiative.create(
                title=title,
                description=description,
                category=category,
                priority=priority,
            )
            context = EventContext(roadmap.id, timeframe.id)
            updated = self._replace_timeframe(
                roadmap, timeframe.add_initiative(initiative, context)
            )
            saved = self._persist(updated, roadmap.revision)
        return self._publish(saved)

    def update_initiative(
        self,
        roadmap_id: str,
        timeframe_id: str,
        initiative_id: str,
        patch: InitiativePatch,
    ) -> Roadmap | None:
        """Apply ``patch``; priority and category changes raise events."""
        with self.uow:
            if (roadmap := self._load(roadmap_id)) is None:
                return None
            timeframe = self._timeframe(roadmap, timeframe_id)
            initiative = self._initiative(timeframe, initiative_id)
            context = EventContext(roadmap.id, timeframe.id)
            updated_initiative = initiative.update(patch, context)
            if updated_initiative == initiative:
                logger.debug("UpdateInitiative %s: no changes; noop", initiative_id)
                return roadmap
            updated = self._replace_initiative(roadmap, timeframe, updated_initiative)
            saved = self._persist(updated, roadmap.revision)
        return self._publish(saved)

    def remove_initiative(
        self, roadmap_id: str, timeframe_id: str, initiative_id: str
    ) -> Roadmap | None:
        with self.uow:
            if (roadmap := self._load(roadmap_id)) is None:
                return None
            timeframe = self._timeframe(roadmap, timeframe_id)
            updated = self._replace_timeframe(
                roadmap, timeframe.remove_initiative(initiative_id)
            )
            saved = self._persist(updated, roadmap.revision)
        return self._publish(saved)

    def move_initiative(
        self,
        roadmap_id: str,
        source_timeframe_id: str,
        target_timeframe_id: str,
        initiative_id: str,
    ) -> Roadmap | None:
        """Move an initiative (with its items) to another timeframe.

        Both timeframes and the initiative are resolved before anything changes.
        The target raises `RoadmapInitiativeAdded`. Moving to the timeframe the
        initiative is already in stores nothing.
        """
        with self.uow:
            if (roadmap := self._load(roadmap_id)) is None:
                return None
            source = self._timeframe(roadmap, source_timeframe_id)
            initiative = self._initiative(source, initiative_id)
            target = self._timeframe(roadmap, target_timeframe_id)
            if source.id == target.id:
                logger.debug(
                    "MoveInitiative %s: already in timeframe %s; noop",
                    initiative_id,
                    target.id,
                )
                return roadmap

            without = self._replace_timeframe(
                roadmap, source.remove_initiative(initiative.id)
            )
            context = EventContext(roadmap.id, target.id)
            updated = self._replace_timeframe(
                without, target.add_initiative(initiative, context)
            )
            saved = self._persist(updated, roadmap.revision)
        return self._publish(saved)

    def rebalance_priorities(self, roadmap_id: str) -> Roadmap | None:
        """Downgrade excess high-priority initiatives and store the result."""
        with self.uow:
            if (roadmap := self._load(roadmap_id)) is None:
                return None
            rebalanced = self.priority_service.rebalance(roadmap)
            if rebalanced is roadmap:
                logger.debug("RebalancePriorities %s: no changes; noop", roadmap_id)
                return roadmap
            saved = self._persist(rebalanced, roadmap.revision)
        return self._publish(saved)
