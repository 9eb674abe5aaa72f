"""Configuration utilities for Lodestar.

This module centralizes small helpers and constants related to application
configuration. Everything is read from ``LODESTAR_*`` environment variables.
"""

import os
from dataclasses import dataclass

from lodestar.domain.services.priority import MAX_HIGH_PRIORITY_INITIATIVES
from lodestar.domain.services.timeframe import MAX_TIMEFRAMES

DB_URL_ENV = "LODESTAR_DB_URL"  # pragma: no mutate
MAX_HIGH_PRIORITY_ENV = "LODESTAR_MAX_HIGH_PRIORITY"  # pragma: no mutate
MAX_TIMEFRAMES_ENV = "LODESTAR_MAX_TIMEFRAMES"  # pragma: no mutate


class DatabaseUrlNotSetError(Exception):
    """Raised when the LODESTAR_DB_URL environment variable is not set."""


class InvalidSettingError(ValueError):
    """Raised when a LODESTAR_* setting holds a value that cannot be used."""

    def __init__(self, name: str, value: str, reason: str):
        self.name = name
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid value for {name}: {value!r} ({reason})")


@dataclass(frozen=True, slots=True)
class RoadmapLimits:
    """Soft limits the domain services enforce on a roadmap."""

    max_high_priority: int = MAX_HIGH_PRIORITY_INITIATIVES
    max_timeframes: int = MAX_TIMEFRAMES


def get_db_url() -> str:
    """Get the database URL from the environment.

    Returns:
        The value of the `LODESTAR_DB_URL` environment variable.

    Raises:
        DatabaseUrlNotSetError: If `LODESTAR_DB_URL` is not set.
    """
    if not (url := os.environ.get(DB_URL_ENV)):
        raise DatabaseUrlNotSetError
    return url


def _positive_int(name: str, default: int) -> int:
    if not (raw := os.environ.get(name, "").strip()):
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise InvalidSettingError(name, raw, "not an integer") from e
    if value < 1:
        raise InvalidSettingError(name, raw, "must be at least 1")
    return value


def get_roadmap_limits() -> RoadmapLimits:
    """Read the roadmap limits, falling back to the defaults for unset variables.

    Raises:
        InvalidSettingError: If a variable is set but is not a positive integer.
    """
    return RoadmapLimits(
        max_high_priority=_positive_int(
            MAX_HIGH_PRIORITY_ENV, MAX_HIGH_PRIORITY_INITIATIVES
        ),
        max_timeframes=_positive_int(MAX_TIMEFRAMES_ENV, MAX_TIMEFRAMES),
    )
