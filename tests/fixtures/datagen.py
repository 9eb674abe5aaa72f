"""Fixtures for generating roadmap test data.

The sample roadmap uses fixed ids so tests can navigate it directly:

    roadmap-1
    ├── tf-now (order 0, "Now")
    │   ├── init-auth   "Authentication"  feature   high
    │   │   ├── item-login  "Login form"      planned
    │   │   └── item-sso    "Single sign-on"  in-progress
    │   └── init-debt   "Cleanup"         tech-debt low
    └── tf-next (order 1, "Next")
        └── init-search "Search"          enhancement medium
            └── item-index  "Index documents" planned
"""

from __future__ import annotations

import copy
from collections.abc import Callable
from typing import Any

import pytest

from lodestar.adapters.repositories import InMemoryStoreData
from lodestar.adapters.unit_of_work import InMemoryUnitOfWork
from lodestar.domain.aggregates import (
    Roadmap,
    RoadmapInitiative,
    RoadmapItem,
    RoadmapNote,
    RoadmapTimeframe,
)
from lodestar.domain.events import DOMAIN_EVENT_REGISTRY, DomainEvent
from lodestar.service_layer.commands import build_timeframe
from lodestar.service_layer.dispatcher import EventDispatcher

# pylint: disable=redefined-outer-name

ROADMAP_ID = "roadmap-1"

SAMPLE_TIMEFRAMES: list[dict[str, Any]] = [
    {
        "id": "tf-now",
        "name": "Now",
        "order": 0,
        "initiatives": [
            {
                "id": "init-auth",
                "title": "Authentication",
                "description": "Let people sign in",
                "category": "feature",
                "priority": "high",
                "items": [
                    {"id": "item-login", "title": "Login form"},
                    {
                        "id": "item-sso",
                        "title": "Single sign-on",
                        "status": "in-progress",
                        "related_entities": ["init-search"],
                    },
                ],
            },
            {
                "id": "init-debt",
                "title": "Cleanup",
                "category": "tech-debt",
                "priority": "low",
            },
        ],
    },
    {
        "id": "tf-next",
        "name": "Next",
        "order": 1,
        "initiatives": [
            {
                "id": "init-search",
                "title": "Search",
                "category": "enhancement",
                "priority": "medium",
                "items": [{"id": "item-index", "title": "Index documents"}],
            }
        ],
    },
]


def sample_timeframes() -> list[dict[str, Any]]:
    """Return a fresh deep copy of the sample nested timeframe data."""
    return copy.deepcopy(SAMPLE_TIMEFRAMES)


def build_sample_roadmap(**overrides: Any) -> Roadmap:
    """Build the sample roadmap (without pending events)."""
    fields: dict[str, Any] = {
        "title": "Platform roadmap",
        "description": "What the platform team works on",
        "version": "1.0",
        "owner": "platform-team",
        "entity_id": ROADMAP_ID,
    }
    fields.update(overrides)
    timeframes = [build_timeframe(tf) for tf in sample_timeframes()]
    return Roadmap.create(initial_timeframes=timeframes, **fields).clear_events()


def make_initiative(
    title: str = "Initiative",
    *,
    priority: str = "high",
    category: str = "feature",
    items: int = 0,
    entity_id: str | None = None,
) -> RoadmapInitiative:
    """Build an initiative with ``items`` placeholder items."""
    return RoadmapInitiative.create(
        title=title,
        description="",
        category=category,
        priority=priority,
        initial_items=[
            RoadmapItem.create(f"{title} item {n}", "") for n in range(items)
        ],
        entity_id=entity_id,
    )


def make_timeframe(
    name: str, order: int, *initiatives: RoadmapInitiative, entity_id: str | None = None
) -> RoadmapTimeframe:
    return RoadmapTimeframe.create(
        name=name, order=order, initial_initiatives=initiatives, entity_id=entity_id
    )


def make_roadmap(*timeframes: RoadmapTimeframe, **fields: Any) -> Roadmap:
    """Build a bare roadmap around ``timeframes`` (without pending events)."""
    defaults: dict[str, Any] = {
        "title": "Roadmap",
        "description": "",
        "version": "1.0",
        "owner": "owner",
    }
    defaults.update(fields)
    return Roadmap.create(initial_timeframes=timeframes, **defaults).clear_events()


@pytest.fixture
def sample_roadmap() -> Roadmap:
    return build_sample_roadmap()


@pytest.fixture
def make_note() -> Callable[..., RoadmapNote]:
    """Factory fixture: build a `RoadmapNote` with keyword overrides."""

    def _make_note(**overrides: Any) -> RoadmapNote:
        fields: dict[str, Any] = {
            "title": "Decision log",
            "content": "We chose SQLite for local use.",
            "category": "architecture",
            "priority": "medium",
            "timeline": "Q3",
            "related_items": ("item-login",),
        }
        fields.update(overrides)
        return RoadmapNote.create(**fields)

    return _make_note


@pytest.fixture
def store() -> InMemoryStoreData:
    return InMemoryStoreData()


@pytest.fixture
def uow(store: InMemoryStoreData) -> InMemoryUnitOfWork:
    return InMemoryUnitOfWork(store)


@pytest.fixture
def seeded_uow(uow: InMemoryUnitOfWork, sample_roadmap: Roadmap) -> InMemoryUnitOfWork:
    """In-memory unit of work holding the sample roadmap at revision 1."""
    with uow:
        uow.roadmaps.save(sample_roadmap.bump_revision())
        uow.commit()
    return uow


@pytest.fixture
def recorded_events() -> list[DomainEvent]:
    return []


@pytest.fixture
def dispatcher(recorded_events: list[DomainEvent]) -> EventDispatcher:
    """A fresh dispatcher that records every roadmap event it is handed."""
    recording = EventDispatcher()
    for event_type in DOMAIN_EVENT_REGISTRY:
        recording.register(event_type, recorded_events.append)
    return recording
