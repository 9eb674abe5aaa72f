"""Wire the unit of work, dispatcher and services into an `AppContainer`."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from lodestar import config
from lodestar.adapters.db.engine import make_engine
from lodestar.adapters.unit_of_work import SqlAlchemyUnitOfWork
from lodestar.domain.services import (
    RoadmapPriorityService,
    RoadmapTimeframeService,
    RoadmapValidationService,
)
from lodestar.interfaces.unit_of_work import AbstractUnitOfWork
from lodestar.service_layer.commands import CompositeRoadmapCommandService
from lodestar.service_layer.dispatcher import EventDispatcher, get_default_dispatcher
from lodestar.service_layer.event_handlers import register_roadmap_event_handlers
from lodestar.service_layer.queries import RoadmapQueryService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppContainer:
    """Everything an entrypoint needs, already wired."""

    commands: CompositeRoadmapCommandService
    queries: RoadmapQueryService
    dispatcher: EventDispatcher
    uow: AbstractUnitOfWork


def build_write_uow(url: str) -> AbstractUnitOfWork:
    """Build a new unit of work for write operations."""
    engine = make_engine(url)
    return SqlAlchemyUnitOfWork(engine)


def build_dispatcher(dispatcher: EventDispatcher | None = None) -> EventDispatcher:
    """Register the roadmap event handlers (default: on the process-wide dispatcher)."""
    if dispatcher is None:
        dispatcher = get_default_dispatcher()
    return register_roadmap_event_handlers(dispatcher)


def build_validation_service(limits: config.RoadmapLimits) -> RoadmapValidationService:
    return RoadmapValidationService(
        priority_service=RoadmapPriorityService(limits.max_high_priority),
        timeframe_service=RoadmapTimeframeService(limits.max_timeframes),
    )


def bootstrap(
    url: str | None = None,
    *,
    uow: AbstractUnitOfWork | None = None,
    dispatcher: EventDispatcher | None = None,
) -> AppContainer:
    """Assemble the application.

    Args:
        url: Database URL. Read from `LODESTAR_DB_URL` when neither this nor
            ``uow`` is given.
        uow: Use this unit of work instead of building a SQLAlchemy one.
        dispatcher: Use this dispatcher instead of the process-wide one. Its
            handlers are left as they are.

    Raises:
        DatabaseUrlNotSetError: If no URL or unit of work is given and
            `LODESTAR_DB_URL` is unset.
        InvalidSettingError: If a roadmap limit setting is malformed.
    """
    limits = config.get_roadmap_limits()
    if uow is None:
        uow = build_write_uow(url if url is not None else config.get_db_url())
    if dispatcher is None:
        dispatcher = build_dispatcher()

    validation_service = build_validation_service(limits)
    logger.debug(
        "Bootstrapped with %s (max_high_priority=%d, max_timeframes=%d)",
        type(uow).__name__,
        limits.max_high_priority,
        limits.max_timeframes,
    )
    return AppContainer(
        commands=CompositeRoadmapCommandService(uow, dispatcher, validation_service),
        queries=RoadmapQueryService(uow, validation_service),
        dispatcher=dispatcher,
        uow=uow,
    )
