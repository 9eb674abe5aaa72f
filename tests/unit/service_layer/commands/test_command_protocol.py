"""Unit tests for the load / mutate / persist / publish steps shared by commands."""

import pytest

from lodestar.adapters.repositories import InMemoryRoadmapRepository
from lodestar.domain.aggregates import ItemPatch
from lodestar.interfaces.errors import RevisionConflictError
from lodestar.service_layer.commands import ItemCommandService
from lodestar.service_layer.dispatcher import EventDispatcher
from tests.fixtures.datagen import ROADMAP_ID

from .base import CommandTestBase

# pylint: disable=magic-value-comparison


def _complete_login(service):
    return service.update_item(
        ROADMAP_ID, "tf-now", "init-auth", "item-login", ItemPatch(status="completed")
    )


class TestPublishAfterCommit(CommandTestBase):
    """Events reach handlers only once the write is visible in the store."""

    service_cls = ItemCommandService

    def test_handlers_see_committed_state(self, store):
        seen = []
        dispatcher = EventDispatcher()
        dispatcher.register(
            "RoadmapItemStatusChanged",
            lambda event: seen.append(store.roadmaps[ROADMAP_ID]["revision"]),
        )
        _complete_login(ItemCommandService(self.uow, dispatcher))
        assert seen == [2]

    def test_returned_roadmap_keeps_its_events(self):
        roadmap = _complete_login(self.service)
        assert list(roadmap.domain_events) == self.events
        assert roadmap.revision == 2

    def test_stored_document_holds_no_events(self):
        _complete_login(self.service)
        assert not self.stored().domain_events

    def test_failing_handler_does_not_undo_the_command(self):
        def _boom(event):
            raise RuntimeError("handler failed")

        dispatcher = EventDispatcher()
        dispatcher.register("RoadmapItemStatusChanged", _boom)
        roadmap = _complete_login(ItemCommandService(self.uow, dispatcher))
        assert roadmap.revision == 2
        assert self.stored().revision == 2


class TestRevisionConflict(CommandTestBase):
    """A concurrent write between load and save aborts the command."""

    service_cls = ItemCommandService

    @pytest.fixture(autouse=True)
    def _concurrent_writer(self, monkeypatch):
        original = InMemoryRoadmapRepository.find_by_id

        def _find_then_race(repo, roadmap_id):
            roadmap = original(repo, roadmap_id)
            # another writer commits revision 2 right after our read
            staged = repo._data  # pylint: disable=protected-access
            staged.roadmaps[roadmap_id] = {**staged.roadmaps[roadmap_id], "revision": 2}
            return roadmap

        monkeypatch.setattr(InMemoryRoadmapRepository, "find_by_id", _find_then_race)

    def test_raises_and_dispatches_nothing(self):
        with pytest.raises(RevisionConflictError) as excinfo:
            _complete_login(self.service)
        assert (excinfo.value.head, excinfo.value.expected) == (2, 1)
        assert str(excinfo.value) == (
            "roadmap (roadmap-1) revision conflict: head=2, expected=1"
        )
        self.assert_unchanged()
