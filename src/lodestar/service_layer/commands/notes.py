"""Commands on free-standing roadmap notes."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from lodestar.domain.aggregates import RoadmapNote
from lodestar.domain.value_objects import Category, Priority

if TYPE_CHECKING:
    from lodestar.domain.aggregates import NotePatch
    from lodestar.interfaces.unit_of_work import AbstractUnitOfWork
    from lodestar.service_layer.dispatcher import EventDispatcher

logger = logging.getLogger(__name__)


class RoadmapNoteCommandService:
    """Create, update and delete notes.

    Notes live outside the roadmap aggregate and raise no domain events; the
    dispatcher argument is accepted like the other command services but unused.
    """

    def __init__(
        self, uow: AbstractUnitOfWork, dispatcher: EventDispatcher | None = None
    ) -> None:
        self.uow = uow
        self.dispatcher = dispatcher

    def create_note(  # pylint: disable=too-many-arguments
        self,
        title: str,
        content: str,
        category: Category | str,
        priority: Priority | str,
        timeline: str,
        related_items: Iterable[str] = (),
    ) -> RoadmapNote:
        note = RoadmapNote.create(
            title=title,
            content=content,
            category=category,
            priority=priority,
            timeline=timeline,
            related_items=related_items,
        )
        logger.debug("Creating note %s (%s)", note.id, title)
        with self.uow:
            self.uow.notes.save(note)
            self.uow.commit()
        return note

    def update_note(self, note_id: str, patch: NotePatch) -> RoadmapNote | None:
        with self.uow:
            note = self.uow.notes.find_by_id(note_id)
            if note is None:
                logger.debug("Note %s not found; nothing to do", note_id)
                return None
            updated = note.update(patch)
            self.uow.notes.save(updated)
            self.uow.commit()
        return updated

    def delete_note(self, note_id: str) -> bool:
        with self.uow:
            deleted = self.uow.notes.delete(note_id)
            if deleted:
                self.uow.commit()
            else:
                logger.debug("Note %s not found; nothing to delete", note_id)
        return deleted
