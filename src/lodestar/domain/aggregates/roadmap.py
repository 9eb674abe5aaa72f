"""Roadmap: the aggregate root."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar

from lodestar.domain import events
from lodestar.domain.errors import NotFoundError
from lodestar.domain.unsettable import UNSET, Unsettable, resolve
from lodestar.domain.utils import from_iso, new_entity_id, to_iso, utcnow

from .base import Entity
from .initiative import RoadmapInitiative
from .timeframe import RoadmapTimeframe

# pylint: disable=too-many-instance-attributes


@dataclass(frozen=True, slots=True)
class RoadmapPatch:
    """Partial update for a `Roadmap`'s own fields."""

    title: Unsettable[str] = UNSET
    description: Unsettable[str] = UNSET
    version: Unsettable[str] = UNSET
    owner: Unsettable[str] = UNSET


@dataclass(frozen=True, slots=True)
class Roadmap(Entity):
    """Aggregate root. All reads and writes of nested entities flow through here.

    ``timeframes_by_id`` keeps insertion order; the `timeframes` property exposes
    them sorted by ``order`` with insertion order breaking ties. ``revision`` is
    the persistence counter used for optimistic concurrency and is not touched by
    domain mutations.
    """

    KIND: ClassVar[str] = "roadmap"

    id: str
    title: str
    description: str
    version: str
    owner: str
    created_at: datetime
    updated_at: datetime
    timeframes_by_id: dict[str, RoadmapTimeframe] = field(
        default_factory=dict, hash=False
    )
    revision: int = 0

    # --- Construction Paths ---

    @classmethod
    def create(  # pylint: disable=too-many-arguments
        cls,
        title: str,
        description: str,
        version: str,
        owner: str,
        initial_timeframes: Iterable[RoadmapTimeframe] = (),
        *,
        entity_id: str | None = None,
    ) -> Roadmap:
        """Create a new roadmap and fold in any initial timeframes.

        The returned roadmap carries a `RoadmapCreated` event followed by any
        events the initial timeframes carried.
        """
        now = utcnow()
        roadmap_id = entity_id or new_entity_id(cls.KIND)
        timeframes: dict[str, RoadmapTimeframe] = {}
        carried: list[events.DomainEvent] = []
        for timeframe in initial_timeframes:
            stored, timeframe_events = cls.absorb(timeframe)
            timeframes[timeframe.id] = stored
            carried.extend(timeframe_events)
        roadmap = cls(
            id=roadmap_id,
            title=title,
            description=description,
            version=version,
            owner=owner,
            created_at=now,
            updated_at=now,
            timeframes_by_id=timeframes,
        )
        created = events.RoadmapCreated(
            roadmap_id=roadmap_id, title=title, version=version
        )
        return roadmap._with_events(created, *carried)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Roadmap:
        """Rebuild a roadmap from its persisted form (full depth)."""
        timeframes = [
            RoadmapTimeframe.from_dict(timeframe)
            for timeframe in data.get("timeframes", ())
        ]
        return cls(
            id=data["id"],
            title=data["title"],
            description=data.get("description", ""),
            version=data["version"],
            owner=data["owner"],
            created_at=from_iso(data["created_at"]),
            updated_at=from_iso(data["updated_at"]),
            timeframes_by_id={timeframe.id: timeframe for timeframe in timeframes},
            revision=int(data.get("revision", 0)),
        )

    # --- Timeframes ---

    @property
    def timeframes(self) -> list[RoadmapTimeframe]:
        """Timeframes sorted by ``order``; ties keep insertion order."""
        return sorted(self.timeframes_by_id.values(), key=lambda tf: tf.order)

    def get_timeframe(self, timeframe_id: str) -> RoadmapTimeframe | None:
        return self.timeframes_by_id.get(timeframe_id)

    def add_timeframe(
        self, timeframe: RoadmapTimeframe, *, announce: bool = False
    ) -> Roadmap:
        """Add (or replace) a timeframe and refresh ``updated_at``.

        Events carried by ``timeframe`` move onto the returned roadmap. With
        ``announce`` a `RoadmapTimeframeAdded` event is raised first.
        """
        stored, carried = self.absorb(timeframe)
        added = None
        if announce:
            added = events.RoadmapTimeframeAdded(
                roadmap_id=self.id,
                timeframe_id=timeframe.id,
                name=timeframe.name,
                order=timeframe.order,
            )
        roadmap = dataclasses.replace(
            self,
            timeframes_by_id={**self.timeframes_by_id, timeframe.id: stored},
            updated_at=utcnow(),
        )
        return roadmap._with_events(added, *carried)

    def remove_timeframe(self, timeframe_id: str) -> Roadmap:
        """Remove a timeframe and refresh ``updated_at``.

        Raises:
            NotFoundError: If no timeframe with ``timeframe_id`` is on this roadmap.
        """
        if timeframe_id not in self.timeframes_by_id:
            raise NotFoundError(RoadmapTimeframe.KIND, timeframe_id, self.KIND, self.id)
        return dataclasses.replace(
            self,
            timeframes_by_id={
                key: value
                for key, value in self.timeframes_by_id.items()
                if key != timeframe_id
            },
            updated_at=utcnow(),
        )

    def get_all_initiatives(self) -> list[tuple[str, RoadmapInitiative]]:
        """Flatten to ``(timeframe_id, initiative)`` pairs in timeframe order."""
        return [
            (timeframe.id, initiative)
            for timeframe in self.timeframes
            for initiative in timeframe.initiatives.values()
        ]

    # --- Mutations ---

    def update(self, patch: RoadmapPatch) -> Roadmap:
        """Return a copy with the patch applied. Always refreshes ``updated_at``."""

        def _resolve(field_name):
            return resolve(
                getattr(patch, field_name),
                getattr(self, field_name),
                field=field_name,
                kind=self.KIND,
                key=self.id,
            )

        return dataclasses.replace(
            self,
            title=_resolve("title"),
            description=_resolve("description"),
            version=_resolve("version"),
            owner=_resolve("owner"),
            updated_at=utcnow(),
        )

    def bump_revision(self) -> Roadmap:
        """Return a copy whose revision is one past this one. Events are kept."""
        return dataclasses.replace(self, revision=self.revision + 1)

    # --- Serialization ---

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "version": self.version,
            "owner": self.owner,
            "timeframes": [timeframe.to_dict() for timeframe in self.timeframes],
            "created_at": to_iso(self.created_at),
            "updated_at": to_iso(self.updated_at),
            "revision": self.revision,
        }
