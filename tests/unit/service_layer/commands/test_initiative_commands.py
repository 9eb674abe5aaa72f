"""Unit tests for `InitiativeCommandService`."""

import logging

import pytest

from lodestar.domain.aggregates import InitiativePatch
from lodestar.domain.errors import NotFoundError
from lodestar.domain.events import (
    RoadmapInitiativeAdded,
    RoadmapInitiativePriorityChanged,
)
from lodestar.domain.services import RoadmapPriorityService
from lodestar.domain.value_objects import Category, Priority
from lodestar.service_layer.commands import InitiativeCommandService
from tests.fixtures.datagen import ROADMAP_ID

from .base import CommandTestBase

# pylint: disable=magic-value-comparison


class TestInitiativeCommands(CommandTestBase):
    """Tests for adding, updating and removing initiatives."""

    service_cls = InitiativeCommandService

    def test_add_initiative_dispatches_added(self):
        roadmap = self.service.add_initiative(
            ROADMAP_ID, "tf-next", "Billing", "", "feature", "low"
        )
        (event,) = self.events
        assert isinstance(event, RoadmapInitiativeAdded)
        assert (event.timeframe_id, event.title, event.category, event.priority) == (
            "tf-next",
            "Billing",
            Category.FEATURE,
            Priority.LOW,
        )
        assert roadmap.get_timeframe("tf-next").get_initiative(event.initiative_id)
        assert self.stored().revision == 2

    def test_add_to_missing_timeframe_raises(self):
        with pytest.raises(NotFoundError):
            self.service.add_initiative(ROADMAP_ID, "tf-x", "X", "", "bug", "low")
        self.assert_unchanged()

    def test_update_priority_dispatches_change(self):
        self.service.update_initiative(
            ROADMAP_ID, "tf-now", "init-debt", InitiativePatch(priority="high")
        )
        assert self.events == [
            RoadmapInitiativePriorityChanged(
                roadmap_id=ROADMAP_ID,
                timeframe_id="tf-now",
                initiative_id="init-debt",
                old_priority=Priority.LOW,
                new_priority=Priority.HIGH,
            )
        ]
        stored = self.stored().get_timeframe("tf-now").get_initiative("init-debt")
        assert stored.priority is Priority.HIGH

    def test_update_keeps_items(self):
        self.service.update_initiative(
            ROADMAP_ID, "tf-now", "init-auth", InitiativePatch(title="Auth")
        )
        stored = self.stored().get_timeframe("tf-now").get_initiative("init-auth")
        assert stored.title == "Auth"
        assert [item.id for item in stored.items] == ["item-login", "item-sso"]
        assert not self.events

    def test_update_without_changes_is_a_noop(self, caplog):
        caplog.set_level(logging.DEBUG, logger="lodestar.service_layer")
        self.service.update_initiative(
            ROADMAP_ID, "tf-now", "init-auth", InitiativePatch(priority="high")
        )
        assert "UpdateInitiative init-auth: no changes; noop" in caplog.text
        self.assert_unchanged()

    def test_remove_missing_initiative_raises(self):
        with pytest.raises(NotFoundError):
            self.service.remove_initiative(ROADMAP_ID, "tf-now", "init-search")
        self.assert_unchanged()

    def test_remove_initiative(self):
        self.service.remove_initiative(ROADMAP_ID, "tf-now", "init-debt")
        assert list(self.stored().get_timeframe("tf-now").initiatives) == ["init-auth"]


class TestMoveInitiative(CommandTestBase):
    """Tests for moving initiatives between timeframes."""

    service_cls = InitiativeCommandService

    def test_moves_with_items(self):
        self.service.move_initiative(ROADMAP_ID, "tf-now", "tf-next", "init-auth")
        stored = self.stored()
        assert stored.get_timeframe("tf-now").get_initiative("init-auth") is None
        moved = stored.get_timeframe("tf-next").get_initiative("init-auth")
        assert moved.item_count == 2
        assert self.event_types() == ["RoadmapInitiativeAdded"]
        assert self.events[0].timeframe_id == "tf-next"

    def test_same_timeframe_is_a_noop(self, caplog):
        caplog.set_level(logging.DEBUG, logger="lodestar.service_layer")
        roadmap = self.service.move_initiative(
            ROADMAP_ID, "tf-now", "tf-now", "init-auth"
        )
        assert roadmap.get_timeframe("tf-now").get_initiative("init-auth")
        assert "MoveInitiative init-auth: already in timeframe tf-now; noop" in (
            caplog.text
        )
        self.assert_unchanged()

    def test_missing_target_leaves_source_intact(self):
        with pytest.raises(NotFoundError):
            self.service.move_initiative(ROADMAP_ID, "tf-now", "tf-x", "init-auth")
        assert self.stored().get_timeframe("tf-now").get_initiative("init-auth")
        self.assert_unchanged()

    def test_missing_initiative_raises(self):
        with pytest.raises(NotFoundError):
            self.service.move_initiative(ROADMAP_ID, "tf-next", "tf-now", "init-auth")
        self.assert_unchanged()


class TestRebalancePriorities(CommandTestBase):
    """Tests for rebalancing with a small high-priority budget."""

    service_cls = InitiativeCommandService

    def make_service(self, uow, dispatcher):
        return InitiativeCommandService(uow, dispatcher, RoadmapPriorityService(0))

    def test_downgrades_and_dispatches(self):
        roadmap = self.service.rebalance_priorities(ROADMAP_ID)
        assert roadmap.revision == 2
        assert self.event_types() == ["RoadmapInitiativePriorityChanged"]
        stored = self.stored().get_timeframe("tf-now").get_initiative("init-auth")
        assert stored.priority is Priority.MEDIUM

    def test_second_run_is_a_noop(self):
        self.service.rebalance_priorities(ROADMAP_ID)
        self.events.clear()
        assert self.service.rebalance_priorities(ROADMAP_ID).revision == 2
        assert not self.events
