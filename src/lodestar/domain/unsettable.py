"""Tri-state handling for entity patch fields.

A field of type ``Unsettable[T]`` can take three states:

* ``UNSET``: the field is left unchanged by the patch.
* ``None``: the field is explicitly cleared (only if allowed).
* concrete ``T``: the field is explicitly updated to a new value.

Entity ``update`` methods use `resolve` to fold a patch into the current values.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from .errors import InvalidPatchError

# pylint: disable=too-many-arguments


def _get_unset() -> "_UnsetType":
    # Factory used by pickle to retrieve the one true instance.
    return UNSET


@dataclass(frozen=True)
class _UnsetType:
    """Sentinel to mark patch fields intentionally left unset.

    This is distinct from `None`, which indicates an explicit clearing of a value.
    """

    def __bool__(self) -> bool:  # falsy to simplify conditionals
        return False

    def __repr__(self) -> str:
        return "UNSET"

    def __reduce__(self):  # keep singleton on pickle
        return (_get_unset, ())


# Singleton instance
UNSET = _UnsetType()

T = TypeVar("T")
type Unsettable[T] = T | _UnsetType | None


def is_set(value: object) -> bool:
    """Return True when a patch field carries a value (including ``None``)."""
    return not isinstance(value, _UnsetType)


def resolve(
    value: T | None | _UnsetType,
    current: T,
    *,
    field: str,
    kind: str,
    key: str,
    convert: Callable[[object], T] | None = None,
) -> T:
    """Resolve a tri-state patch value against the current value.

    Args:
        value: The new value from the patch (may be UNSET, None, or a concrete value).
        current: The current value on the entity.
        field: The name of the field (for error messages).
        kind: The kind of entity being patched (for error messages).
        key: The id of the entity being patched (for error messages).
        convert: Optional conversion applied to concrete values (e.g. ``Status.coerce``).

    Returns:
        The current value when ``value`` is UNSET, otherwise the (converted) new value.

    Raises:
        InvalidPatchError: If ``value`` is None. No roadmap field can be cleared.
    """
    if isinstance(value, _UnsetType):
        return current
    if value is None:
        raise InvalidPatchError(kind, key, field)
    return convert(value) if convert is not None else value
