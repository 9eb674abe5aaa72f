"""Contract tests for `RoadmapNoteRepository` implementations."""

from __future__ import annotations

from lodestar.domain.aggregates import NotePatch
from lodestar.domain.value_objects import Category, Priority

# pylint: disable=magic-value-comparison


def _seed(uow, make_note):
    notes = [
        make_note(entity_id="n-2", category="bug", priority="high", timeline="Q4"),
        make_note(entity_id="n-1"),
        make_note(entity_id="n-3", category="bug", timeline="Q4"),
    ]
    with uow:
        for note in notes:
            uow.notes.save(note)
        uow.commit()
    return notes


def test_round_trip(contract_uow, make_note):
    note = make_note(entity_id="n-1")
    _seed(contract_uow, make_note)
    with contract_uow:
        loaded = contract_uow.notes.find_by_id("n-1")
    assert loaded.title == note.title
    assert loaded.related_items == ("item-login",)


def test_lookups(contract_uow, make_note):
    _seed(contract_uow, make_note)
    with contract_uow:
        notes = contract_uow.notes
        assert [n.id for n in notes.find_all()] == ["n-1", "n-2", "n-3"]
        assert [n.id for n in notes.find_by_category(Category.BUG)] == ["n-2", "n-3"]
        assert [n.id for n in notes.find_by_priority(Priority.HIGH)] == ["n-2"]
        assert [n.id for n in notes.find_by_timeline("Q3")] == ["n-1"]
        assert notes.find_by_id("n-x") is None


def test_save_replaces_existing(contract_uow, make_note):
    (note, *_) = _seed(contract_uow, make_note)
    with contract_uow:
        contract_uow.notes.save(note.update(NotePatch(category="research")))
        contract_uow.commit()
    with contract_uow:
        assert contract_uow.notes.find_by_id(note.id).category is Category.RESEARCH
        bugs = contract_uow.notes.find_by_category(Category.BUG)
        assert [n.id for n in bugs] == ["n-3"]


def test_delete(contract_uow, make_note):
    _seed(contract_uow, make_note)
    with contract_uow:
        assert contract_uow.notes.delete("n-1") is True
        assert contract_uow.notes.delete("n-1") is False
        contract_uow.commit()
    with contract_uow:
        assert [n.id for n in contract_uow.notes.find_all()] == ["n-2", "n-3"]
