"""Unit tests for `RoadmapNoteCommandService`."""

import pytest

from lodestar.domain.aggregates import NotePatch, RoadmapNote
from lodestar.domain.errors import UnknownEnumValueError
from lodestar.domain.value_objects import Category
from lodestar.service_layer.commands import RoadmapNoteCommandService

from .base import CommandTestBase

# pylint: disable=magic-value-comparison


class TestNoteCommands(CommandTestBase):
    """Tests for note commands; notes raise no events."""

    service_cls = RoadmapNoteCommandService

    def _create(self, **overrides):
        fields = {
            "title": "Decision log",
            "content": "We chose SQLite for local use.",
            "category": "architecture",
            "priority": "medium",
            "timeline": "Q3",
        }
        fields.update(overrides)
        return self.service.create_note(**fields)

    def test_create_stores_note(self):
        note = self._create(related_items=["item-login"])
        stored = RoadmapNote.from_dict(self.uow.data.notes[note.id])
        assert stored == note
        assert stored.category is Category.ARCHITECTURE
        assert not self.events

    def test_create_with_bad_category_stores_nothing(self):
        with pytest.raises(UnknownEnumValueError):
            self._create(category="wishlist")
        assert not self.uow.data.notes

    def test_update(self):
        note = self._create()
        updated = self.service.update_note(note.id, NotePatch(timeline="Q4"))
        assert updated.timeline == "Q4"
        assert self.uow.data.notes[note.id]["timeline"] == "Q4"

    def test_update_missing_returns_none(self):
        assert self.service.update_note("note-x", NotePatch(title="X")) is None

    def test_delete(self):
        note = self._create()
        assert self.service.delete_note(note.id) is True
        assert self.service.delete_note(note.id) is False
        assert note.id not in self.uow.data.notes
