"""Unit tests for domain error messages and attributes."""

import pytest

from lodestar.domain.errors import (
    DomainError,
    InvalidPatchError,
    NotFoundError,
    UnknownEnumValueError,
)

# pylint: disable=magic-value-comparison


def test_not_found_message_names_entity_and_container():
    """NotFoundError formats the missing id and where it was looked up."""
    error = NotFoundError("item", "item-9", "initiative", "init-auth")
    assert str(error) == "Item with ID 'item-9' not found in initiative 'init-auth'"
    assert (error.kind, error.entity_id) == ("item", "item-9")
    assert (error.container_kind, error.container_id) == ("initiative", "init-auth")


def test_not_found_is_a_lookup_error():
    with pytest.raises(LookupError):
        raise NotFoundError("timeframe", "tf-x", "roadmap", "roadmap-1")


def test_invalid_patch_message():
    error = InvalidPatchError("roadmap", "roadmap-1", "title")
    assert str(error) == "Invalid roadmap (roadmap-1) patch: title cannot be cleared"
    assert error.field == "title"


@pytest.mark.parametrize(
    "error",
    [
        NotFoundError("item", "a", "initiative", "b"),
        UnknownEnumValueError("status", "done"),
        InvalidPatchError("item", "a", "status"),
    ],
)
def test_all_domain_errors_share_a_base(error):
    assert isinstance(error, DomainError)
