"""Unit of Work interface for Lodestar.

Defines the AbstractUnitOfWork contract: a context-managed unit of work
exposing the roadmap and note repositories and abstract commit/rollback methods.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .repositories import RoadmapNoteRepository, RoadmapRepository


class AbstractUnitOfWork(abc.ABC):
    """Contract for a transactional unit of work."""

    roadmaps: RoadmapRepository
    notes: RoadmapNoteRepository

    def __enter__(self) -> AbstractUnitOfWork:
        """Enter the unit of work context and return the unit.

        Implementations may acquire transactional resources here.
        """
        return self

    def __exit__(self, *args):
        """Exit the unit of work context.

        Default behavior is to roll back on exit; anything not committed is lost.
        """
        self.rollback()

    @abc.abstractmethod
    def commit(self):
        """Persist changes and finalize the transaction."""

    @abc.abstractmethod
    def rollback(self):
        """Revert changes and clean up transactional resources."""
