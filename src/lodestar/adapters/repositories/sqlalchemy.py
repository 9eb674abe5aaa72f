"""SQLAlchemy-backed repository adapters.

Each aggregate is stored whole in a JSON ``document`` column (see
`lodestar.adapters.db.schema`). Saves are guarded by a compare-and-swap on the
``revision`` column so that a writer holding a stale copy cannot silently
overwrite a newer one.

Exceptions:
    Maps SQLAlchemy errors to repository errors: lost compare-and-swap races and
    duplicate inserts become `RevisionConflictError`, driver failures become
    `StoreUnavailableError`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import DBAPIError, IntegrityError

from lodestar.adapters.db.schema import roadmap_notes, roadmaps
from lodestar.interfaces.errors import RevisionConflictError, StoreUnavailableError
from lodestar.interfaces.repositories import RoadmapNoteRepository, RoadmapRepository

from .codec import decode_note, decode_roadmap

if TYPE_CHECKING:
    from sqlalchemy import Select
    from sqlalchemy.engine import Connection

    from lodestar.domain.aggregates import Roadmap, RoadmapNote
    from lodestar.domain.value_objects import Category, Priority

logger = logging.getLogger(__name__)


class SqlAlchemyRoadmapRepository(RoadmapRepository):
    """Roadmap repository over the ``roadmaps`` table."""

    def __init__(self, connection: Connection) -> None:
        self.connection = connection

    # --------------------------------------------------------------------- #
    # Interface implementation
    # --------------------------------------------------------------------- #

    def find_by_id(self, roadmap_id: str) -> Roadmap | None:
        stmt = select(roadmaps.c.document).where(roadmaps.c.id == roadmap_id)
        document = self._execute(stmt, roadmap_id).scalar_one_or_none()
        return None if document is None else decode_roadmap(document)

    def find_all(self) -> list[Roadmap]:
        return self._find(select(roadmaps.c.document))

    def find_by_owner(self, owner: str) -> list[Roadmap]:
        return self._find(
            select(roadmaps.c.document).where(roadmaps.c.owner == owner)
        )

    def find_by_version(self, version: str) -> list[Roadmap]:
        return self._find(
            select(roadmaps.c.document).where(roadmaps.c.version == version)
        )

    def save(self, roadmap: Roadmap, expected_revision: int | None = None) -> None:
        head = self._fetch_revision(roadmap.id)
        if expected_revision is not None and (head or 0) != expected_revision:
            raise RevisionConflictError(
                self.KIND, roadmap.id, head or 0, expected_revision
            )

        values = self._row_values(roadmap)
        try:
            if head is None:
                self.connection.execute(
                    insert(roadmaps).values(id=roadmap.id, **values)
                )
            else:
                result = self.connection.execute(
                    update(roadmaps)
                    .where(roadmaps.c.id == roadmap.id)
                    .where(roadmaps.c.revision == head)
                    .values(**values)
                )
                if result.rowcount != 1:
                    # another writer moved the row between our read and our write
                    raise RevisionConflictError(
                        self.KIND,
                        roadmap.id,
                        self._fetch_revision(roadmap.id) or 0,
                        head,
                    )
        except IntegrityError as e:
            # a concurrent insert of the same id won
            raise RevisionConflictError(
                self.KIND, roadmap.id, None, expected_revision or 0
            ) from e
        except DBAPIError as e:
            raise StoreUnavailableError(self.KIND, roadmap.id, str(e)) from e
        logger.debug("Stored roadmap %s at revision %s", roadmap.id, roadmap.revision)

    def delete(self, roadmap_id: str) -> bool:
        stmt = delete(roadmaps).where(roadmaps.c.id == roadmap_id)
        return self._execute(stmt, roadmap_id).rowcount > 0

    # --------------------------------------------------------------------- #
    # Internals
    # --------------------------------------------------------------------- #

    @staticmethod
    def _row_values(roadmap: Roadmap) -> dict[str, Any]:
        return {
            "title": roadmap.title,
            "owner": roadmap.owner,
            "version": roadmap.version,
            "revision": roadmap.revision,
            "updated_at": roadmap.updated_at,
            "document": roadmap.to_dict(),
        }

    def _fetch_revision(self, roadmap_id: str) -> int | None:
        stmt = select(roadmaps.c.revision).where(roadmaps.c.id == roadmap_id)
        return self._execute(stmt, roadmap_id).scalar_one_or_none()

    def _find(self, stmt: Select) -> list[Roadmap]:
        documents = self._execute(stmt.order_by(roadmaps.c.id), "*").scalars().all()
        return [decode_roadmap(document) for document in documents]

    def _execute(self, stmt, key: str):
        try:
            return self.connection.execute(stmt)
        except DBAPIError as e:
            raise StoreUnavailableError(self.KIND, key, str(e)) from e


class SqlAlchemyRoadmapNoteRepository(RoadmapNoteRepository):
    """Note repository over the ``roadmap_notes`` table."""

    def __init__(self, connection: Connection) -> None:
        self.connection = connection

    def find_by_id(self, note_id: str) -> RoadmapNote | None:
        stmt = select(roadmap_notes.c.document).where(roadmap_notes.c.id == note_id)
        document = self._execute(stmt, note_id).scalar_one_or_none()
        return None if document is None else decode_note(document)

    def find_all(self) -> list[RoadmapNote]:
        return self._find(select(roadmap_notes.c.document))

    def find_by_category(self, category: Category) -> list[RoadmapNote]:
        return self._find(
            select(roadmap_notes.c.document).where(
                roadmap_notes.c.category == str(category)
            )
        )

    def find_by_priority(self, priority: Priority) -> list[RoadmapNote]:
        return self._find(
            select(roadmap_notes.c.document).where(
                roadmap_notes.c.priority == str(priority)
            )
        )

    def find_by_timeline(self, timeline: str) -> list[RoadmapNote]:
        return self._find(
            select(roadmap_notes.c.document).where(
                roadmap_notes.c.timeline == timeline
            )
        )

    def save(self, note: RoadmapNote) -> None:
        values = {
            "category": str(note.category),
            "priority": str(note.priority),
            "timeline": note.timeline,
            "updated_at": note.updated_at,
            "document": note.to_dict(),
        }
        exists = self._execute(
            select(roadmap_notes.c.id).where(roadmap_notes.c.id == note.id), note.id
        ).first()
        if exists is None:
            stmt = insert(roadmap_notes).values(id=note.id, **values)
        else:
            stmt = (
                update(roadmap_notes)
                .where(roadmap_notes.c.id == note.id)
                .values(**values)
            )
        self._execute(stmt, note.id)

    def delete(self, note_id: str) -> bool:
        stmt = delete(roadmap_notes).where(roadmap_notes.c.id == note_id)
        return self._execute(stmt, note_id).rowcount > 0

    def _find(self, stmt: Select) -> list[RoadmapNote]:
        documents = (
            self._execute(stmt.order_by(roadmap_notes.c.id), "*").scalars().all()
        )
        return [decode_note(document) for document in documents]

    def _execute(self, stmt, key: str):
        try:
            return self.connection.execute(stmt)
        except DBAPIError as e:
            raise StoreUnavailableError(self.KIND, key, str(e)) from e
