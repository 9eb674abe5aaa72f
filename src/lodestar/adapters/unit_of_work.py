"""Unit of Work adapters for Lodestar.

Provides a SQLAlchemy-backed UnitOfWork (one connection transaction per
``with`` block) and an in-memory UnitOfWork that stages writes on a copy of the
shared store and publishes them on commit.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lodestar.adapters.repositories import (
    InMemoryRoadmapNoteRepository,
    InMemoryRoadmapRepository,
    InMemoryStoreData,
    SqlAlchemyRoadmapNoteRepository,
    SqlAlchemyRoadmapRepository,
)
from lodestar.interfaces.errors import RevisionConflictError
from lodestar.interfaces.unit_of_work import AbstractUnitOfWork

if TYPE_CHECKING:
    from typing import Any

    from sqlalchemy.engine import Connection, Engine


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """SQLAlchemy-backed Unit of Work."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self.connection: Connection

    def __enter__(self):
        self.connection = self.engine.connect()
        self.roadmaps = SqlAlchemyRoadmapRepository(self.connection)
        self.notes = SqlAlchemyRoadmapNoteRepository(self.connection)
        return super().__enter__()

    def __exit__(self, *args):
        super().__exit__(*args)
        self.connection.close()

    def commit(self):
        self.connection.commit()

    def rollback(self):
        self.connection.rollback()


class InMemoryUnitOfWork(AbstractUnitOfWork):
    """Unit of Work over `InMemoryStoreData`.

    Repositories operate on a staged copy taken on ``__enter__``. ``commit``
    publishes only the keys written or deleted in the block, so units that
    overlap on different roadmaps keep each other's writes. A roadmap saved
    with an expected revision is checked again against the shared store, and a
    unit that lost the race raises `RevisionConflictError` without publishing
    anything. ``rollback`` discards the staged copy.
    """

    def __init__(self, data: InMemoryStoreData | None = None):
        self.data = data if data is not None else InMemoryStoreData()
        self._stage()

    def __enter__(self):
        self._stage()
        return super().__enter__()

    def commit(self):
        for roadmap_id, expected in self.roadmaps.saved.items():
            if expected is None:
                continue
            stored = self.data.roadmaps.get(roadmap_id)
            head = 0 if stored is None else int(stored["revision"])
            if head != expected:
                raise RevisionConflictError(
                    InMemoryRoadmapRepository.KIND, roadmap_id, head, expected
                )

        _publish(self._staged.roadmaps, self.data.roadmaps, self.roadmaps)
        _publish(self._staged.notes, self.data.notes, self.notes)
        self._stage()

    def rollback(self):
        self._stage()

    def _stage(self) -> None:
        self._staged = self.data.copy()
        self.roadmaps = InMemoryRoadmapRepository(self._staged)
        self.notes = InMemoryRoadmapNoteRepository(self._staged)


def _publish(
    staged: dict[str, dict[str, Any]],
    shared: dict[str, dict[str, Any]],
    repository: InMemoryRoadmapRepository | InMemoryRoadmapNoteRepository,
) -> None:
    for key in repository.saved:
        shared[key] = staged[key]
    for key in repository.deleted:
        shared.pop(key, None)
