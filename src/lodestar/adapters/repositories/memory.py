"""In-memory repository adapters."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from lodestar.interfaces.errors import RevisionConflictError
from lodestar.interfaces.repositories import RoadmapNoteRepository, RoadmapRepository

from .codec import decode_note, decode_roadmap

if TYPE_CHECKING:
    from lodestar.domain.aggregates import Roadmap, RoadmapNote
    from lodestar.domain.value_objects import Category, Priority

    from .memory_store import InMemoryStoreData

logger = logging.getLogger(__name__)


class InMemoryRoadmapRepository(RoadmapRepository):
    """Roadmap repository backed by `InMemoryStoreData`.

    Remembers which ids it wrote (with the revision each save expected) and
    which it deleted, so a unit of work can publish just those keys.
    """

    def __init__(self, data: InMemoryStoreData) -> None:
        self._data = data
        self.saved: dict[str, int | None] = {}
        self.deleted: set[str] = set()

    def find_by_id(self, roadmap_id: str) -> Roadmap | None:
        if (document := self._data.roadmaps.get(roadmap_id)) is None:
            return None
        return decode_roadmap(document)

    def find_all(self) -> list[Roadmap]:
        return [
            decode_roadmap(self._data.roadmaps[key])
            for key in sorted(self._data.roadmaps)
        ]

    def find_by_owner(self, owner: str) -> list[Roadmap]:
        return [roadmap for roadmap in self.find_all() if roadmap.owner == owner]

    def find_by_version(self, version: str) -> list[Roadmap]:
        return [roadmap for roadmap in self.find_all() if roadmap.version == version]

    def save(self, roadmap: Roadmap, expected_revision: int | None = None) -> None:
        if expected_revision is not None:
            stored = self._data.roadmaps.get(roadmap.id)
            head = 0 if stored is None else int(stored["revision"])
            if head != expected_revision:
                raise RevisionConflictError(
                    self.KIND, roadmap.id, head, expected_revision
                )
        self._data.roadmaps[roadmap.id] = roadmap.to_dict()
        # first save in the block carries the revision loaded from the store
        self.saved.setdefault(roadmap.id, expected_revision)
        self.deleted.discard(roadmap.id)
        logger.debug("Stored roadmap %s at revision %s", roadmap.id, roadmap.revision)

    def delete(self, roadmap_id: str) -> bool:
        if self._data.roadmaps.pop(roadmap_id, None) is None:
            return False
        self.saved.pop(roadmap_id, None)
        self.deleted.add(roadmap_id)
        return True


class InMemoryRoadmapNoteRepository(RoadmapNoteRepository):
    """Note repository backed by `InMemoryStoreData`."""

    def __init__(self, data: InMemoryStoreData) -> None:
        self._data = data
        self.saved: set[str] = set()
        self.deleted: set[str] = set()

    def find_by_id(self, note_id: str) -> RoadmapNote | None:
        if (document := self._data.notes.get(note_id)) is None:
            return None
        return decode_note(document)

    def find_all(self) -> list[RoadmapNote]:
        return [decode_note(self._data.notes[key]) for key in sorted(self._data.notes)]

    def find_by_category(self, category: Category) -> list[RoadmapNote]:
        return [note for note in self.find_all() if note.category == category]

    def find_by_priority(self, priority: Priority) -> list[RoadmapNote]:
        return [note for note in self.find_all() if note.priority == priority]

    def find_by_timeline(self, timeline: str) -> list[RoadmapNote]:
        return [note for note in self.find_all() if note.timeline == timeline]

    def save(self, note: RoadmapNote) -> None:
        self._data.notes[note.id] = note.to_dict()
        self.saved.add(note.id)
        self.deleted.discard(note.id)

    def delete(self, note_id: str) -> bool:
        if self._data.notes.pop(note_id, None) is None:
            return False
        self.saved.discard(note_id)
        self.deleted.add(note_id)
        return True
