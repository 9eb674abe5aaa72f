"""Shared protocol for roadmap command services."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from lodestar.domain.errors import NotFoundError

if TYPE_CHECKING:
    from lodestar.domain.aggregates import (
        Roadmap,
        RoadmapInitiative,
        RoadmapItem,
        RoadmapTimeframe,
    )
    from lodestar.interfaces.unit_of_work import AbstractUnitOfWork
    from lodestar.service_layer.dispatcher import EventDispatcher

logger = logging.getLogger(__name__)


class RoadmapCommandService:
    """Base class for services that mutate the roadmap aggregate.

    Every mutating operation follows the same steps:

    1. inside ``with self.uow``, load the root (a missing root returns ``None``);
    2. navigate to the target entity, raising `NotFoundError` for a missing id;
    3. apply the entity mutation with an `EventContext`;
    4. rebuild each ancestor by removing and re-adding the mutated child;
    5. save the rebuilt root with a revision check and commit;
    6. after the unit of work closes, dispatch the root's pending events.

    Any exception before the commit leaves the unit of work to roll back, so
    nothing is partially persisted. Events are dispatched only after a commit.

    Args:
        uow: Unit of work providing the roadmap repository.
        dispatcher: Dispatcher receiving the events of each committed command.
    """

    def __init__(self, uow: AbstractUnitOfWork, dispatcher: EventDispatcher) -> None:
        self.uow = uow
        self.dispatcher = dispatcher

    # --- Loading and navigation ---

    def _load(self, roadmap_id: str) -> Roadmap | None:
        roadmap = self.uow.roadmaps.find_by_id(roadmap_id)
        if roadmap is None:
            logger.debug("Roadmap %s not found; nothing to do", roadmap_id)
        return roadmap

    @staticmethod
    def _timeframe(roadmap: Roadmap, timeframe_id: str) -> RoadmapTimeframe:
        if (timeframe := roadmap.get_timeframe(timeframe_id)) is None:
            raise NotFoundError("timeframe", timeframe_id, "roadmap", roadmap.id)
        return timeframe

    @staticmethod
    def _initiative(
        timeframe: RoadmapTimeframe, initiative_id: str
    ) -> RoadmapInitiative:
        if (initiative := timeframe.get_initiative(initiative_id)) is None:
            raise NotFoundError("initiative", initiative_id, "timeframe", timeframe.id)
        return initiative

    @staticmethod
    def _item(initiative: RoadmapInitiative, item_id: str) -> RoadmapItem:
        if (item := initiative.get_item(item_id)) is None:
            raise NotFoundError("item", item_id, "initiative", initiative.id)
        return item

    # --- Rebuilding ---

    @staticmethod
    def _replace_timeframe(roadmap: Roadmap, timeframe: RoadmapTimeframe) -> Roadmap:
        return roadmap.remove_timeframe(timeframe.id).add_timeframe(timeframe)

    @classmethod
    def _replace_initiative(
        cls,
        roadmap: Roadmap,
        timeframe: RoadmapTimeframe,
        initiative: RoadmapInitiative,
    ) -> Roadmap:
        rebuilt = timeframe.remove_initiative(initiative.id).add_initiative(initiative)
        return cls._replace_timeframe(roadmap, rebuilt)

    # --- Persistence and dispatch ---

    def _persist(self, roadmap: Roadmap, expected_revision: int) -> Roadmap:
        """Save ``roadmap`` one revision past ``expected_revision`` and commit."""
        committed = roadmap.bump_revision()
        self.uow.roadmaps.save(committed, expected_revision=expected_revision)
        self.uow.commit()
        return committed

    def _publish(self, roadmap: Roadmap) -> Roadmap:
        """Dispatch the events carried by a committed roadmap and return it.

        The returned roadmap still carries its events so callers can trace what
        the command raised.
        """
        if roadmap.domain_events:
            logger.debug(
                "Dispatching %d event(s) for roadmap %s",
                len(roadmap.domain_events),
                roadmap.id,
            )
            self.dispatcher.dispatch_all(roadmap.domain_events)
        return roadmap
