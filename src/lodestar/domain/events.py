"""Events"""

import abc
from dataclasses import dataclass, field
from datetime import datetime

from lodestar.domain.utils import utcnow
from lodestar.domain.value_objects import Category, Priority, Status


@dataclass(frozen=True, slots=True)
class DomainEvent(abc.ABC):
    """Base class for all domain events.
    Requires a way to determine the owning aggregate ID.
    """

    occurred_on: datetime = field(default_factory=utcnow, kw_only=True, compare=False)

    @property
    @abc.abstractmethod
    def aggregate_id(self) -> str:
        """Return the ID of the aggregate this event belongs to."""

    @property
    def event_type(self) -> str:
        """Name handlers register against."""
        return type(self).__name__


@dataclass(frozen=True, slots=True)
class RoadmapCreated(DomainEvent):
    """Event indicating that a roadmap has been created."""

    roadmap_id: str
    title: str
    version: str

    @property
    def aggregate_id(self) -> str:
        return self.roadmap_id


@dataclass(frozen=True, slots=True)
class RoadmapTimeframeAdded(DomainEvent):
    """Event indicating that a timeframe has been added to a roadmap."""

    roadmap_id: str
    timeframe_id: str
    name: str
    order: int

    @property
    def aggregate_id(self) -> str:
        return self.roadmap_id


@dataclass(frozen=True, slots=True)
class RoadmapInitiativeAdded(DomainEvent):
    """Event indicating that an initiative has been placed in a timeframe."""

    roadmap_id: str
    timeframe_id: str
    initiative_id: str
    title: str
    category: Category
    priority: Priority

    @property
    def aggregate_id(self) -> str:
        return self.roadmap_id


@dataclass(frozen=True, slots=True)
class RoadmapItemAdded(DomainEvent):
    """Event indicating that an item has been placed in an initiative."""

    roadmap_id: str
    timeframe_id: str
    initiative_id: str
    item_id: str
    title: str
    status: Status

    @property
    def aggregate_id(self) -> str:
        return self.roadmap_id


@dataclass(frozen=True, slots=True)
class RoadmapItemStatusChanged(DomainEvent):
    """Event indicating that an item's status has changed."""

    roadmap_id: str
    timeframe_id: str
    initiative_id: str
    item_id: str
    old_status: Status
    new_status: Status

    @property
    def aggregate_id(self) -> str:
        return self.roadmap_id


@dataclass(frozen=True, slots=True)
class RoadmapInitiativePriorityChanged(DomainEvent):
    """Event indicating that an initiative's priority has changed."""

    roadmap_id: str
    timeframe_id: str
    initiative_id: str
    old_priority: Priority
    new_priority: Priority

    @property
    def aggregate_id(self) -> str:
        return self.roadmap_id


@dataclass(frozen=True, slots=True)
class RoadmapInitiativeCategoryChanged(DomainEvent):
    """Event indicating that an initiative's category has changed."""

    roadmap_id: str
    timeframe_id: str
    initiative_id: str
    old_category: Category
    new_category: Category

    @property
    def aggregate_id(self) -> str:
        return self.roadmap_id


# Registry of domain event types, keyed by the name handlers register against
DOMAIN_EVENT_REGISTRY: dict[str, type[DomainEvent]] = {
    "RoadmapCreated": RoadmapCreated,
    "RoadmapTimeframeAdded": RoadmapTimeframeAdded,
    "RoadmapInitiativeAdded": RoadmapInitiativeAdded,
    "RoadmapItemAdded": RoadmapItemAdded,
    "RoadmapItemStatusChanged": RoadmapItemStatusChanged,
    "RoadmapInitiativePriorityChanged": RoadmapInitiativePriorityChanged,
    "RoadmapInitiativeCategoryChanged": RoadmapInitiativeCategoryChanged,
}
