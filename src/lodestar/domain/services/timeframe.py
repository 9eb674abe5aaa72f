"""Timeframe count and ordering checks, normalization and structure hints."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from lodestar.domain.aggregates.timeframe import TimeframePatch
from lodestar.domain.value_objects import ValidationResult

if TYPE_CHECKING:
    from lodestar.domain.aggregates import Roadmap

MAX_TIMEFRAMES = 10


@dataclass(frozen=True, slots=True)
class TimeframeSuggestion:
    """Initiative titles bucketed by how soon their priority suggests doing them."""

    short_term: list[str] = field(default_factory=list)
    medium_term: list[str] = field(default_factory=list)
    long_term: list[str] = field(default_factory=list)


class RoadmapTimeframeService:
    """Checks and repairs timeframe ordering on a roadmap.

    Args:
        max_timeframes: Upper bound on timeframes per roadmap.
    """

    def __init__(self, max_timeframes: int = MAX_TIMEFRAMES) -> None:
        self.max_timeframes = max_timeframes

    def validate(self, roadmap: Roadmap) -> ValidationResult:
        """Check the timeframe count, then look for duplicate orders.

        Every repeated order is reported, once per extra occurrence.
        """
        timeframes = roadmap.timeframes
        if len(timeframes) > self.max_timeframes:
            return ValidationResult.failed(
                f"Too many timeframes ({len(timeframes)}). "
                f"Maximum allowed is {self.max_timeframes}."
            )

        seen: set[int] = set()
        duplicates: list[int] = []
        for timeframe in timeframes:
            if timeframe.order in seen:
                duplicates.append(timeframe.order)
            else:
                seen.add(timeframe.order)

        if duplicates:
            return ValidationResult.failed(
                "Duplicate timeframe orders detected: "
                + ", ".join(str(order) for order in duplicates)
            )
        return ValidationResult.ok()

    def normalize_ordering(self, roadmap: Roadmap) -> Roadmap:
        """Reassign orders to 0..n-1 following the current (stable) sort.

        Timeframes are removed and re-added in rank order; only those whose order
        differs from their rank are updated. A roadmap that is already normalized
        is returned unchanged.
        """
        ordered = roadmap.timeframes
        if all(timeframe.order == rank for rank, timeframe in enumerate(ordered)):
            return roadmap

        normalized = roadmap
        for timeframe in ordered:
            normalized = normalized.remove_timeframe(timeframe.id)
        for rank, timeframe in enumerate(ordered):
            if timeframe.order != rank:
                timeframe = timeframe.update(TimeframePatch(order=rank))
            normalized = normalized.add_timeframe(timeframe)
        return normalized

    @staticmethod
    def suggest_structure(roadmap: Roadmap) -> TimeframeSuggestion:
        """Bucket initiative titles by priority: high, medium, everything else."""
        suggestion = TimeframeSuggestion()
        for _, initiative in roadmap.get_all_initiatives():
            if initiative.priority.is_high:
                suggestion.short_term.append(initiative.title)
            elif initiative.priority.is_medium:
                suggestion.medium_term.append(initiative.title)
            else:
                suggestion.long_term.append(initiative.title)
        return suggestion
