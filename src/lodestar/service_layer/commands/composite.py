"""One façade over every roadmap command service.

Update operations take keyword changes (``title="New"``) instead of patch
objects; fields that are not passed stay unchanged. An unknown field name raises
``TypeError`` from the patch constructor.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from lodestar.domain.aggregates import (
    InitiativePatch,
    ItemPatch,
    NotePatch,
    RoadmapPatch,
    TimeframePatch,
)
from lodestar.domain.services import (
    RoadmapPriorityService,
    RoadmapTimeframeService,
    RoadmapValidationService,
)

from .initiatives import InitiativeCommandService
from .items import ItemCommandService
from .notes import RoadmapNoteCommandService
from .roadmaps import RoadmapEntityCommandService
from .timeframes import TimeframeCommandService

if TYPE_CHECKING:
    from lodestar.domain.aggregates import Roadmap, RoadmapNote
    from lodestar.domain.value_objects import Category, Priority, Status
    from lodestar.interfaces.unit_of_work import AbstractUnitOfWork
    from lodestar.service_layer.dispatcher import EventDispatcher

# pylint: disable=too-many-arguments,too-many-public-methods


class CompositeRoadmapCommandService:
    """Delegates to the per-concept command services, sharing one unit of work.

    Args:
        uow: Unit of work shared by every sub-service.
        dispatcher: Dispatcher shared by every sub-service.
        validation_service: Domain services to use; its priority and timeframe
            services are handed to the initiative and timeframe commands so the
            configured limits apply everywhere.
    """

    def __init__(
        self,
        uow: AbstractUnitOfWork,
        dispatcher: EventDispatcher,
        validation_service: RoadmapValidationService | None = None,
    ) -> None:
        validation_service = validation_service or RoadmapValidationService(
            RoadmapPriorityService(), RoadmapTimeframeService()
        )
        self.roadmaps = RoadmapEntityCommandService(uow, dispatcher, validation_service)
        self.timeframes = TimeframeCommandService(
            uow, dispatcher, validation_service.timeframe_service
        )
        self.initiatives = InitiativeCommandService(
            uow, dispatcher, validation_service.priority_service
        )
        self.items = ItemCommandService(uow, dispatcher)
        self.notes = RoadmapNoteCommandService(uow, dispatcher)

    # --- Roadmaps ---

    def create_roadmap(
        self,
        title: str,
        description: str,
        version: str,
        owner: str,
        initial_timeframes: Iterable[Mapping[str, Any]] = (),
        *,
        roadmap_id: str | None = None,
    ) -> Roadmap:
        return self.roadmaps.create_roadmap(
            title,
            description,
            version,
            owner,
            initial_timeframes,
            roadmap_id=roadmap_id,
        )

    def update_roadmap(self, roadmap_id: str, **changes: Any) -> Roadmap | None:
        return self.roadmaps.update_roadmap(roadmap_id, RoadmapPatch(**changes))

    def delete_roadmap(self, roadmap_id: str) -> bool:
        return self.roadmaps.delete_roadmap(roadmap_id)

    def normalize_roadmap(self, roadmap_id: str) -> Roadmap | None:
        return self.roadmaps.normalize_roadmap(roadmap_id)

    # --- Timeframes ---

    def add_timeframe(self, roadmap_id: str, name: str, order: int) -> Roadmap | None:
        return self.timeframes.add_timeframe(roadmap_id, name, order)

    def update_timeframe(
        self, roadmap_id: str, timeframe_id: str, **changes: Any
    ) -> Roadmap | None:
        return self.timeframes.update_timeframe(
            roadmap_id, timeframe_id, TimeframePatch(**changes)
        )

    def remove_timeframe(self, roadmap_id: str, timeframe_id: str) -> Roadmap | None:
        return self.timeframes.remove_timeframe(roadmap_id, timeframe_id)

    def normalize_timeframes(self, roadmap_id: str) -> Roadmap | None:
        return self.timeframes.normalize_timeframes(roadmap_id)

    # --- Initiatives ---

    def add_initiative(
        self,
        roadmap_id: str,
        timeframe_id: str,
        title: str,
        description: str,
        category: Category | str,
        priority: Priority | str,
    ) -> Roadmap | None:
        return self.initiatives.add_initiative(
            roadmap_id, timeframe_id, title, description, category, priority
        )

    def update_initiative(
        self, roadmap_id: str, timeframe_id: str, initiative_id: str, **changes: Any
    ) -> Roadmap | None:
        return self.initiatives.update_initiative(
            roadmap_id, timeframe_id, initiative_id, InitiativePatch(**changes)
        )

    def remove_initiative(
        self, roadmap_id: str, timeframe_id: str, initiative_id: str
    ) -> Roadmap | None:
        return self.initiatives.remove_initiative(
            roadmap_id, timeframe_id, initiative_id
        )

    def move_initiative(
        self,
        roadmap_id: str,
        source_timeframe_id: str,
        target_timeframe_id: str,
        initiative_id: str,
    ) -> Roadmap | None:
        return self.initiatives.move_initiative(
            roadmap_id, source_timeframe_id, target_timeframe_id, initiative_id
        )

    def rebalance_priorities(self, roadmap_id: str) -> Roadmap | None:
        return self.initiatives.rebalance_priorities(roadmap_id)

    # --- Items ---

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
        return self.items.add_item(
            roadmap_id,
            timeframe_id,
            initiative_id,
            title,
            description,
            status=status,
            related_entities=related_entities,
            notes=notes,
        )

    def update_item(
        self,
        roadmap_id: str,
        timeframe_id: str,
        initiative_id: str,
        item_id: str,
        **changes: Any,
    ) -> Roadmap | None:
        return self.items.update_item(
            roadmap_id, timeframe_id, initiative_id, item_id, ItemPatch(**changes)
        )

    def remove_item(
        self, roadmap_id: str, timeframe_id: str, initiative_id: str, item_id: str
    ) -> Roadmap | None:
        return self.items.remove_item(roadmap_id, timeframe_id, initiative_id, item_id)

    def move_item(
        self,
        roadmap_id: str,
        source_timeframe_id: str,
        source_initiative_id: str,
        target_timeframe_id: str,
        target_initiative_id: str,
        item_id: str,
    ) -> Roadmap | None:
        return self.items.move_item(
            roadmap_id,
            source_timeframe_id,
            source_initiative_id,
            target_timeframe_id,
            target_initiative_id,
            item_id,
        )

    # --- Notes ---

    def create_note(
        self,
        title: str,
        content: str,
        category: Category | str,
        priority: Priority | str,
        timeline: str,
        related_items: Iterable[str] = (),
    ) -> RoadmapNote:
        return self.notes.create_note(
            title, content, category, priority, timeline, related_items
        )

    def update_note(self, note_id: str, **changes: Any) -> RoadmapNote | None:
        return self.notes.update_note(note_id, NotePatch(**changes))

    def delete_note(self, note_id: str) -> bool:
        return self.notes.delete_note(note_id)
