"""Read side: lookups and analysis that never write.

Each query opens the unit of work only to read and lets it roll back on exit.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from lodestar.domain.services import RoadmapTimeframeService, RoadmapValidationService
from lodestar.domain.value_objects import Category, Priority

if TYPE_CHECKING:
    from lodestar.domain.aggregates import Roadmap, RoadmapNote
    from lodestar.domain.services import RoadmapValidationReport, TimeframeSuggestion
    from lodestar.interfaces.unit_of_work import AbstractUnitOfWork

logger = logging.getLogger(__name__)


class RoadmapQueryService:
    """Queries over stored roadmaps and notes.

    Args:
        uow: Unit of work providing the repositories.
        validation_service: Used by `check_roadmap`; defaults to the stock limits.
    """

    def __init__(
        self,
        uow: AbstractUnitOfWork,
        validation_service: RoadmapValidationService | None = None,
    ) -> None:
        self.uow = uow
        self.validation_service = validation_service or RoadmapValidationService()

    # --- Roadmaps ---

    def get_roadmap(self, roadmap_id: str) -> Roadmap | None:
        with self.uow:
            return self.uow.roadmaps.find_by_id(roadmap_id)

    def get_all_roadmaps(self) -> list[Roadmap]:
        with self.uow:
            return self.uow.roadmaps.find_all()

    def get_roadmaps_by_owner(self, owner: str) -> list[Roadmap]:
        with self.uow:
            return self.uow.roadmaps.find_by_owner(owner)

    def get_roadmaps_by_version(self, version: str) -> list[Roadmap]:
        with self.uow:
            return self.uow.roadmaps.find_by_version(version)

    # --- Notes ---

    def get_note(self, note_id: str) -> RoadmapNote | None:
        with self.uow:
            return self.uow.notes.find_by_id(note_id)

    def get_all_notes(self) -> list[RoadmapNote]:
        with self.uow:
            return self.uow.notes.find_all()

    def get_notes_by_category(self, category: Category | str) -> list[RoadmapNote]:
        with self.uow:
            return self.uow.notes.find_by_category(Category.coerce(category))

    def get_notes_by_priority(self, priority: Priority | str) -> list[RoadmapNote]:
        with self.uow:
            return self.uow.notes.find_by_priority(Priority.coerce(priority))

    def get_notes_by_timeline(self, timeline: str) -> list[RoadmapNote]:
        with self.uow:
            return self.uow.notes.find_by_timeline(timeline)

    # --- Analysis ---

    def check_roadmap(self, roadmap_id: str) -> RoadmapValidationReport | None:
        """Run every roadmap rule against the stored roadmap."""
        roadmap = self.get_roadmap(roadmap_id)
        if roadmap is None:
            logger.debug("Roadmap %s not found; nothing to check", roadmap_id)
            return None
        report = self.validation_service.validate_roadmap(roadmap)
        logger.debug(
            "Checked roadmap %s: %d problem(s)", roadmap_id, len(report.errors)
        )
        return report

    def suggest_timeframe_structure(
        self, roadmap_id: str
    ) -> TimeframeSuggestion | None:
        roadmap = self.get_roadmap(roadmap_id)
        if roadmap is None:
            return None
        return RoadmapTimeframeService.suggest_structure(roadmap)
