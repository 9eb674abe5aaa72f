"""Whole-roadmap validation and normalization."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .priority import RoadmapPriorityService
from .timeframe import RoadmapTimeframeService

if TYPE_CHECKING:
    from lodestar.domain.aggregates import Roadmap


@dataclass(frozen=True, slots=True)
class RoadmapValidationReport:
    """Every soft-invariant violation found on a roadmap."""

    valid: bool
    errors: tuple[str, ...] = ()


class RoadmapValidationService:
    """Runs every roadmap rule at once and can repair the repairable ones."""

    def __init__(
        self,
        priority_service: RoadmapPriorityService | None = None,
        timeframe_service: RoadmapTimeframeService | None = None,
    ) -> None:
        self.priority_service = priority_service or RoadmapPriorityService()
        self.timeframe_service = timeframe_service or RoadmapTimeframeService()

    def validate_roadmap(self, roadmap: Roadmap) -> RoadmapValidationReport:
        errors: list[str] = []

        for result in (
            self.priority_service.validate(roadmap),
            self.timeframe_service.validate(roadmap),
        ):
            if not result.valid and result.message:
                errors.append(result.message)

        for field_name in ("title", "version", "owner"):
            if not getattr(roadmap, field_name).strip():
                errors.append(f"Roadmap must have a {field_name}")

        for timeframe in roadmap.timeframes:
            titles: set[str] = set()
            for initiative in timeframe.initiatives.values():
                normalized = initiative.title.strip().lower()
                if normalized in titles:
                    errors.append(
                        f'Duplicate initiative title "{initiative.title}" '
                        f'in timeframe "{timeframe.name}"'
                    )
                else:
                    titles.add(normalized)

        return RoadmapValidationReport(valid=not errors, errors=tuple(errors))

    def normalize_roadmap(self, roadmap: Roadmap) -> Roadmap:
        """Normalize timeframe ordering, then rebalance priorities."""
        normalized = self.timeframe_service.normalize_ordering(roadmap)
        return self.priority_service.rebalance(normalized)
