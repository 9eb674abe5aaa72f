"""Default handlers for roadmap domain events.

Handlers only log. They run after the aggregate write has committed and must
never be relied on for the roadmap's own consistency.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from lodestar.domain import events

if TYPE_CHECKING:
    from .dispatcher import EventDispatcher

logger = logging.getLogger(__name__)


def log_roadmap_created(event: events.RoadmapCreated) -> None:
    logger.info("Roadmap created: %s (%s)", event.title, event.roadmap_id)


def log_timeframe_added(event: events.RoadmapTimeframeAdded) -> None:
    logger.info(
        "Timeframe added to %s: %s (order %s)",
        event.roadmap_id,
        event.name,
        event.order,
    )


def log_initiative_added(event: events.RoadmapInitiativeAdded) -> None:
    logger.info(
        "Initiative placed in timeframe %s: %s (%s, %s)",
        event.timeframe_id,
        event.title,
        event.category,
        event.priority,
    )


def log_item_added(event: events.RoadmapItemAdded) -> None:
    logger.info(
        "Item placed in initiative %s: %s [%s]",
        event.initiative_id,
        event.title,
        event.status,
    )


def log_item_status_changed(event: events.RoadmapItemStatusChanged) -> None:
    logger.info(
        "Item status changed: %s %s -> %s",
        event.item_id,
        event.old_status,
        event.new_status,
    )
    if event.new_status.is_completed:
        logger.info("Item %s completed; updating related entities", event.item_id)


def log_initiative_priority_changed(
    event: events.RoadmapInitiativePriorityChanged,
) -> None:
    logger.info(
        "Initiative priority changed: %s %s -> %s",
        event.initiative_id,
        event.old_priority,
        event.new_priority,
    )
    if event.new_priority.is_high and not event.old_priority.is_high:
        logger.info(
            "Initiative %s escalated to high priority; sending notifications",
            event.initiative_id,
        )


def log_initiative_category_changed(
    event: events.RoadmapInitiativeCategoryChanged,
) -> None:
    logger.info(
        "Initiative category changed: %s %s -> %s",
        event.initiative_id,
        event.old_category,
        event.new_category,
    )
    if event.new_category.is_tech_debt and not event.old_category.is_tech_debt:
        logger.info(
            "Initiative %s categorized as tech debt; updating metrics",
            event.initiative_id,
        )


EVENT_HANDLERS: dict[type[events.DomainEvent], list[Callable[..., None]]] = {
    events.RoadmapCreated: [log_roadmap_created],
    events.RoadmapTimeframeAdded: [log_timeframe_added],
    events.RoadmapInitiativeAdded: [log_initiative_added],
    events.RoadmapItemAdded: [log_item_added],
    events.RoadmapItemStatusChanged: [log_item_status_changed],
    events.RoadmapInitiativePriorityChanged: [log_initiative_priority_changed],
    events.RoadmapInitiativeCategoryChanged: [log_initiative_category_changed],
}


def register_roadmap_event_handlers(
    dispatcher: EventDispatcher,
    handlers: dict[type[events.DomainEvent], list[Callable[..., None]]] | None = None,
) -> EventDispatcher:
    """Register ``handlers`` (default: `EVENT_HANDLERS`) on ``dispatcher``.

    A handler already registered for an event type is not added twice, so the
    process-wide dispatcher can be wired more than once.
    """
    for event_type, event_handlers in (handlers or EVENT_HANDLERS).items():
        registered = dispatcher.handlers_for(event_type)
        for handler in event_handlers:
            if handler not in registered:
                dispatcher.register(event_type, handler)
    return dispatcher
