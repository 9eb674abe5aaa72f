"""Priority budget checks and rebalancing."""

from __future__ import annotations

from typing import TYPE_CHECKING

from lodestar.domain.value_objects import EventContext, Priority, ValidationResult

if TYPE_CHECKING:
    from lodestar.domain.aggregates import Roadmap, RoadmapInitiative

MAX_HIGH_PRIORITY_INITIATIVES = 5


class RoadmapPriorityService:
    """Keeps the number of high-priority initiatives on a roadmap within budget.

    Args:
        max_high_priority: How many initiatives may hold `Priority.HIGH` at once.
    """

    def __init__(self, max_high_priority: int = MAX_HIGH_PRIORITY_INITIATIVES) -> None:
        self.max_high_priority = max_high_priority

    def count_high_priority(self, roadmap: Roadmap) -> int:
        return sum(
            1
            for _, initiative in roadmap.get_all_initiatives()
            if initiative.priority.is_high
        )

    def validate(self, roadmap: Roadmap) -> ValidationResult:
        count = self.count_high_priority(roadmap)
        if count > self.max_high_priority:
            return ValidationResult.failed(
                f"Too many high-priority initiatives ({count}). "
                f"Maximum allowed is {self.max_high_priority}."
            )
        return ValidationResult.ok()

    def rebalance(self, roadmap: Roadmap) -> Roadmap:
        """Downgrade the excess high-priority initiatives to medium.

        Each high-priority initiative is scored ``order * 10 - item_count`` using
        its timeframe's order, so initiatives in later timeframes and with fewer
        items go first. Ties keep the order of `Roadmap.get_all_initiatives`.
        Every downgrade raises a `RoadmapInitiativePriorityChanged` event on the
        returned roadmap.
        """
        high = [
            (timeframe_id, initiative)
            for timeframe_id, initiative in roadmap.get_all_initiatives()
            if initiative.priority.is_high
        ]
        excess = len(high) - self.max_high_priority
        if excess <= 0:
            return roadmap

        def _score(candidate: tuple[str, RoadmapInitiative]) -> int:
            timeframe_id, initiative = candidate
            timeframe = roadmap.get_timeframe(timeframe_id)
            assert timeframe is not None
            return timeframe.order * 10 - initiative.item_count

        ranked = sorted(high, key=_score, reverse=True)

        rebalanced = roadmap
        for timeframe_id, initiative in ranked[:excess]:
            context = EventContext(rebalanced.id, timeframe_id)
            downgraded = initiative.update_priority(Priority.MEDIUM, context)
            timeframe = rebalanced.get_timeframe(timeframe_id)
            assert timeframe is not None
            timeframe = timeframe.remove_initiative(initiative.id).add_initiative(
                downgraded
            )
            rebalanced = rebalanced.remove_timeframe(timeframe_id).add_timeframe(
                timeframe
            )
        return rebalanced
