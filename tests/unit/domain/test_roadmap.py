"""Unit tests for the `Roadmap` aggregate root."""

import dataclasses

import pytest

from lodestar.domain.aggregates import Roadmap, RoadmapPatch
from lodestar.domain.errors import InvalidPatchError, NotFoundError
from lodestar.domain.events import (
    RoadmapCreated,
    RoadmapInitiativeAdded,
    RoadmapTimeframeAdded,
)
from lodestar.domain.value_objects import EventContext
from tests.fixtures.datagen import ROADMAP_ID, make_initiative, make_timeframe

# pylint: disable=magic-value-comparison


class TestCreate:
    """Tests for `Roadmap.create`."""

    @staticmethod
    def test_raises_roadmap_created_first():
        timeframe = make_timeframe("Now", 0, entity_id="tf-now").add_initiative(
            make_initiative(entity_id="init-a"), EventContext("r", "tf-now")
        )
        roadmap = Roadmap.create(
            "Title", "", "1.0", "owner", [timeframe], entity_id="r"
        )
        assert [type(e) for e in roadmap.domain_events] == [
            RoadmapCreated,
            RoadmapInitiativeAdded,
        ]
        assert roadmap.domain_events[0] == RoadmapCreated(
            roadmap_id="r", title="Title", version="1.0"
        )
        assert not roadmap.get_timeframe("tf-now").domain_events

    @staticmethod
    def test_new_roadmap_starts_at_revision_zero():
        roadmap = Roadmap.create("Title", "", "1.0", "owner")
        assert roadmap.revision == 0
        assert roadmap.created_at == roadmap.updated_at
        assert roadmap.id.startswith("roadmap-")


class TestTimeframes:
    """Tests for timeframe ordering and membership."""

    @staticmethod
    def test_sorted_by_order_with_ties_in_insertion_order(sample_roadmap):
        roadmap = sample_roadmap.add_timeframe(
            make_timeframe("Also now", 0, entity_id="tf-also")
        ).add_timeframe(make_timeframe("First", -1, entity_id="tf-first"))
        assert [tf.id for tf in roadmap.timeframes] == [
            "tf-first",
            "tf-now",
            "tf-also",
            "tf-next",
        ]

    @staticmethod
    def test_add_without_announce_is_silent(sample_roadmap):
        roadmap = sample_roadmap.add_timeframe(make_timeframe("Later", 2))
        assert not roadmap.domain_events

    @staticmethod
    def test_add_with_announce_raises_timeframe_added(sample_roadmap):
        timeframe = make_timeframe("Later", 2, entity_id="tf-later")
        roadmap = sample_roadmap.add_timeframe(timeframe, announce=True)
        assert roadmap.domain_events == (
            RoadmapTimeframeAdded(
                roadmap_id=ROADMAP_ID, timeframe_id="tf-later", name="Later", order=2
            ),
        )

    @staticmethod
    def test_add_refreshes_updated_at(sample_roadmap):
        roadmap = sample_roadmap.add_timeframe(make_timeframe("Later", 2))
        assert roadmap.updated_at >= sample_roadmap.updated_at
        assert roadmap.created_at == sample_roadmap.created_at

    @staticmethod
    def test_remove_missing_timeframe_raises(sample_roadmap):
        with pytest.raises(NotFoundError) as excinfo:
            sample_roadmap.remove_timeframe("tf-x")
        assert str(excinfo.value) == (
            "Timeframe with ID 'tf-x' not found in roadmap 'roadmap-1'"
        )

    @staticmethod
    def test_remove_timeframe(sample_roadmap):
        roadmap = sample_roadmap.remove_timeframe("tf-now")
        assert [tf.id for tf in roadmap.timeframes] == ["tf-next"]
        assert sample_roadmap.get_timeframe("tf-now") is not None

    @staticmethod
    def test_get_all_initiatives_follows_timeframe_order(sample_roadmap):
        pairs = sample_roadmap.get_all_initiatives()
        assert [(tf_id, i.id) for tf_id, i in pairs] == [
            ("tf-now", "init-auth"),
            ("tf-now", "init-debt"),
            ("tf-next", "init-search"),
        ]


class TestMutations:
    """Tests for `update` and `bump_revision`."""

    @staticmethod
    def test_update_applies_patch_and_refreshes_updated_at(sample_roadmap):
        roadmap = sample_roadmap.update(RoadmapPatch(version="2.0"))
        assert roadmap.version == "2.0"
        assert roadmap.title == sample_roadmap.title
        assert roadmap.updated_at >= sample_roadmap.updated_at

    @staticmethod
    def test_update_cannot_clear_owner(sample_roadmap):
        with pytest.raises(InvalidPatchError) as excinfo:
            sample_roadmap.update(RoadmapPatch(owner=None))
        assert str(excinfo.value) == (
            "Invalid roadmap (roadmap-1) patch: owner cannot be cleared"
        )

    @staticmethod
    def test_bump_revision_keeps_events(sample_roadmap):
        roadmap = sample_roadmap.add_timeframe(make_timeframe("X", 5), announce=True)
        bumped = roadmap.bump_revision()
        assert bumped.revision == roadmap.revision + 1
        assert bumped.domain_events == roadmap.domain_events


class TestSerialization:
    """Tests for the persisted document form."""

    @staticmethod
    def test_round_trip(sample_roadmap):
        roadmap = dataclasses.replace(sample_roadmap, revision=7)
        assert Roadmap.from_dict(roadmap.to_dict()) == roadmap

    @staticmethod
    def test_document_lists_timeframes_in_order(sample_roadmap):
        roadmap = sample_roadmap.add_timeframe(make_timeframe("First", -1))
        names = [tf["name"] for tf in roadmap.to_dict()["timeframes"]]
        assert names == ["First", "Now", "Next"]

    @staticmethod
    def test_naive_timestamps_load_as_utc(sample_roadmap):
        data = sample_roadmap.to_dict()
        data["created_at"] = "2024-01-02T03:04:05"
        loaded = Roadmap.from_dict(data)
        assert loaded.created_at.utcoffset().total_seconds() == 0
