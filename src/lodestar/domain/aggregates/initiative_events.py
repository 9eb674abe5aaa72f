"""Event factories for initiative classification changes.

Both helpers return ``None`` when the value did not actually change or when no
context was supplied, so callers can pass the result straight to an entity's
event list.
"""

from lodestar.domain import events
from lodestar.domain.value_objects import Category, EventContext, Priority


def priority_changed(
    initiative_id: str,
    old: Priority,
    new: Priority,
    context: EventContext | None,
) -> events.RoadmapInitiativePriorityChanged | None:
    if context is None or old == new:
        return None
    return events.RoadmapInitiativePriorityChanged(
        roadmap_id=context.roadmap_id,
        timeframe_id=context.timeframe_id,
        initiative_id=initiative_id,
        old_priority=old,
        new_priority=new,
    )


def category_changed(
    initiative_id: str,
    old: Category,
    new: Category,
    context: EventContext | None,
) -> events.RoadmapInitiativeCategoryChanged | None:
    if context is None or old == new:
        return None
    return events.RoadmapInitiativeCategoryChanged(
        roadmap_id=context.roadmap_id,
        timeframe_id=context.timeframe_id,
        initiative_id=initiative_id,
        old_category=old,
        new_category=new,
    )
