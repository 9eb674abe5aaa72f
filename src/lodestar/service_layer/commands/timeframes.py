"""Commands on the timeframes of a roadmap."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from lodestar.domain.aggregates import Roadmap, RoadmapTimeframe
from lodestar.domain.services import RoadmapTimeframeService

from .base import RoadmapCommandService

if TYPE_CHECKING:
    from lodestar.domain.aggregates import TimeframePatch
    from lodestar.interfaces.unit_of_work import AbstractUnitOfWork
    from lodestar.service_layer.dispatcher import EventDispatcher

logger = logging.getLogger(__name__)


class TimeframeCommandService(RoadmapCommandService):
    """Add, update, remove and renumber timeframes."""

    def __init__(
        self,
        uow: AbstractUnitOfWork,
        dispatcher: EventDispatcher,
        timeframe_service: RoadmapTimeframeService | None = None,
    ) -> None:
        super().__init__(uow, dispatcher)
        self.timeframe_service = timeframe_service or RoadmapTimeframeService()

    def add_timeframe(self, roadmap_id: str, name: str, order: int) -> Roadmap | None:
        logger.debug(
            "Adding timeframe %r (order %d) to roadmap %s", name, order, roadmap_id
        )
        with self.uow:
            if (roadmap := self._load(roadmap_id)) is None:
                return None
            timeframe = RoadmapTimeframe.create(name=name, order=order)
            updated = roadmap.add_timeframe(timeframe, announce=True)
            saved = self._persist(updated, roadmap.revision)
        return self._publish(saved)

    def update_timeframe(
        self, roadmap_id: str, timeframe_id: str, patch: TimeframePatch
    ) -> Roadmap | None:
        with self.uow:
            if (roadmap := self._load(roadmap_id)) is None:
                return None
            timeframe = self._timeframe(roadmap, timeframe_id)
            updated_timeframe = timeframe.update(patch)
            if updated_timeframe == timeframe:
                logger.debug("UpdateTimeframe %s: no changes; noop", timeframe_id)
                return roadmap
            updated = self._replace_timeframe(roadmap, updated_timeframe)
            saved = self._persist(updated, roadmap.revision)
        return self._publish(saved)

    def remove_timeframe(self, roadmap_id: str, timeframe_id: str) -> Roadmap | None:
        """Remove a timeframe together with every initiative and item in it."""
        with self.uow:
            if (roadmap := self._load(roadmap_id)) is None:
                return None
            updated = roadmap.remove_timeframe(timeframe_id)
            saved = self._persist(updated, roadmap.revision)
        return self._publish(saved)

    def normalize_timeframes(self, roadmap_id: str) -> Roadmap | None:
        """Renumber timeframe orders to ``0..n-1`` and store the result."""
        with self.uow:
            if (roadmap := self._load(roadmap_id)) is None:
                return None
            normalized = self.timeframe_service.normalize_ordering(roadmap)
            if normalized is roadmap:
                logger.debug("NormalizeTimeframes %s: no changes; noop", roadmap_id)
                return roadmap
            saved = self._persist(normalized, roadmap.revision)
        return self._publish(saved)
