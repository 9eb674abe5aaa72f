"""Commands on the roadmap root itself."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from lodestar.domain.aggregates import (
    Roadmap,
    RoadmapInitiative,
    RoadmapItem,
    RoadmapTimeframe,
)
from lodestar.domain.services import RoadmapValidationService

from .base import RoadmapCommandService

if TYPE_CHECKING:
    from lodestar.domain.aggregates import RoadmapPatch
    from lodestar.interfaces.unit_of_work import AbstractUnitOfWork
    from lodestar.service_layer.dispatcher import EventDispatcher

logger = logging.getLogger(__name__)


def build_item(data: Mapping[str, Any]) -> RoadmapItem:
    return RoadmapItem.create(
        title=data["title"],
        description=data.get("description", ""),
        status=data.get("status"),
        related_entities=data.get("related_entities", ()),
        notes=data.get("notes", ""),
        entity_id=data.get("id"),
    )


def build_initiative(data: Mapping[str, Any]) -> RoadmapInitiative:
    return RoadmapInitiative.create(
        title=data["title"],
        description=data.get("description", ""),
        category=data["category"],
        priority=data["priority"],
        initial_items=[build_item(item) for item in data.get("items", ())],
        entity_id=data.get("id"),
    )


def build_timeframe(data: Mapping[str, Any]) -> RoadmapTimeframe:
    """Build a timeframe (and everything under it) from nested plain mappings.

    Expected keys: ``name``, ``order``, optional ``id`` and ``initiatives``; each
    initiative takes ``title``, ``category``, ``priority``, optional
    ``description``, ``id`` and ``items``; each item takes ``title`` and optional
    ``description``, ``status``, ``related_entities``, ``notes`` and ``id``.
    """
    return RoadmapTimeframe.create(
        name=data["name"],
        order=int(data["order"]),
        initial_initiatives=[
            build_initiative(initiative) for initiative in data.get("initiatives", ())
        ],
        entity_id=data.get("id"),
    )


class RoadmapEntityCommandService(RoadmapCommandService):
    """Create, update, delete and normalize whole roadmaps."""

    def __init__(
        self,
        uow: AbstractUnitOfWork,
        dispatcher: EventDispatcher,
        validation_service: RoadmapValidationService | None = None,
    ) -> None:
        super().__init__(uow, dispatcher)
        self.validation_service = validation_service or RoadmapValidationService()

    def create_roadmap(  # pylint: disable=too-many-arguments
        self,
        title: str,
        description: str,
        version: str,
        owner: str,
        initial_timeframes: Iterable[Mapping[str, Any]] = (),
        *,
        roadmap_id: str | None = None,
    ) -> Roadmap:
        """Create and store a roadmap, folding in nested timeframe data."""
        roadmap = Roadmap.create(
            title=title,
            description=description,
            version=version,
            owner=owner,
            initial_timeframes=[build_timeframe(tf) for tf in initial_timeframes],
            entity_id=roadmap_id,
        )
        logger.debug("Creating roadmap %s (%s)", roadmap.id, title)
        with self.uow:
            saved = self._persist(roadmap, expected_revision=0)
        return self._publish(saved)

    def update_roadmap(self, roadmap_id: str, patch: RoadmapPatch) -> Roadmap | None:
        with self.uow:
            if (roadmap := self._load(roadmap_id)) is None:
                return None
            updated = roadmap.update(patch)
            saved = self._persist(updated, roadmap.revision)
        return self._publish(saved)

    def delete_roadmap(self, roadmap_id: str) -> bool:
        with self.uow:
            deleted = self.uow.roadmaps.delete(roadmap_id)
            if deleted:
                self.uow.commit()
            else:
                logger.debug("Roadmap %s not found; nothing to delete", roadmap_id)
        return deleted

    def normalize_roadmap(self, roadmap_id: str) -> Roadmap | None:
        """Normalize timeframe ordering and rebalance priorities, then store."""
        with self.uow:
            if (roadmap := self._load(roadmap_id)) is None:
                return None
            normalized = self.validation_service.normalize_roadmap(roadmap)
            if normalized is roadmap:
                logger.debug("NormalizeRoadmap %s: no changes; noop", roadmap_id)
                return roadmap
            saved = self._persist(normalized, roadmap.revision)
        return self._publish(saved)
