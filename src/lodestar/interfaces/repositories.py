"""Repository contracts for roadmaps and notes.

Both stores follow a load-whole / replace-whole contract: readers get a complete,
freshly decoded entity and writers replace the stored document in one go.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lodestar.domain.aggregates import Roadmap, RoadmapNote
    from lodestar.domain.value_objects import Category, Priority


class RoadmapRepository(abc.ABC):
    """Interface for storing roadmap aggregates."""

    KIND = "roadmap"

    @abc.abstractmethod
    def find_by_id(self, roadmap_id: str) -> Roadmap | None:
        """Return the roadmap with ``roadmap_id``, or None if absent."""

    @abc.abstractmethod
    def find_all(self) -> list[Roadmap]:
        """Return every stored roadmap, ordered by id."""

    @abc.abstractmethod
    def find_by_owner(self, owner: str) -> list[Roadmap]:
        """Return the roadmaps owned by ``owner``."""

    @abc.abstractmethod
    def find_by_version(self, version: str) -> list[Roadmap]:
        """Return the roadmaps at ``version``."""

    @abc.abstractmethod
    def save(self, roadmap: Roadmap, expected_revision: int | None = None) -> None:
        """Insert or replace a roadmap.

        Args:
            roadmap: The roadmap to store. Pending events are not persisted.
            expected_revision: Revision the caller loaded (0 for a new roadmap).
                ``None`` skips the check.

        Raises:
            RevisionConflictError: If the stored revision differs from
                ``expected_revision``.
        """

    @abc.abstractmethod
    def delete(self, roadmap_id: str) -> bool:
        """Delete a roadmap. Returns False when nothing was stored under the id."""


class RoadmapNoteRepository(abc.ABC):
    """Interface for storing roadmap notes."""

    KIND = "note"

    @abc.abstractmethod
    def find_by_id(self, note_id: str) -> RoadmapNote | None:
        """Return the note with ``note_id``, or None if absent."""

    @abc.abstractmethod
    def find_all(self) -> list[RoadmapNote]:
        """Return every stored note, ordered by id."""

    @abc.abstractmethod
    def find_by_category(self, category: Category) -> list[RoadmapNote]:
        """Return the notes in ``category``."""

    @abc.abstractmethod
    def find_by_priority(self, priority: Priority) -> list[RoadmapNote]:
        """Return the notes with ``priority``."""

    @abc.abstractmethod
    def find_by_timeline(self, timeline: str) -> list[RoadmapNote]:
        """Return the notes whose timeline equals ``timeline``."""

    @abc.abstractmethod
    def save(self, note: RoadmapNote) -> None:
        """Insert or replace a note."""

    @abc.abstractmethod
    def delete(self, note_id: str) -> bool:
        """Delete a note. Returns False when nothing was stored under the id."""
