"""Unit tests for the custom column types (no database required)."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.dialects.postgresql import dialect as PostgresDialect
from sqlalchemy.dialects.sqlite import dialect as SQLiteDialect

from lodestar.adapters.db.sa_types import UTCDateTime

PLUS_TWO = timezone(timedelta(hours=2))


def test_python_type():
    assert UTCDateTime().python_type is datetime


@pytest.mark.parametrize(
    "dialect", [SQLiteDialect(), PostgresDialect()], ids=["sqlite", "postgres"]
)
def test_none_passes_through(dialect):
    assert UTCDateTime().process_bind_param(None, dialect) is None
    assert UTCDateTime().process_result_value(None, dialect) is None


def test_sqlite_binds_naive_utc():
    bound = UTCDateTime().process_bind_param(
        datetime(2025, 1, 1, 12, 0, tzinfo=PLUS_TWO), SQLiteDialect()
    )
    assert bound == datetime(2025, 1, 1, 10, 0)
    assert bound.tzinfo is None


def test_postgres_binds_aware_utc():
    bound = UTCDateTime().process_bind_param(
        datetime(2025, 1, 1, 12, 0, tzinfo=PLUS_TWO), PostgresDialect()
    )
    assert bound == datetime(2025, 1, 1, 10, 0, tzinfo=timezone.utc)
    assert bound.tzinfo is timezone.utc


def test_naive_input_is_taken_as_utc():
    bound = UTCDateTime().process_bind_param(
        datetime(2025, 1, 1, 12, 0), PostgresDialect()
    )
    assert bound == datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "stored",
    [
        datetime(2025, 1, 1, 10, 0),
        datetime(2025, 1, 1, 12, 0, tzinfo=PLUS_TWO),
    ],
    ids=["naive", "aware"],
)
def test_results_are_aware_utc(stored):
    result = UTCDateTime().process_result_value(stored, SQLiteDialect())
    assert result == datetime(2025, 1, 1, 10, 0, tzinfo=timezone.utc)
    assert result.tzinfo is timezone.utc


def test_non_datetime_results_are_returned_unchanged():
    assert UTCDateTime().process_result_value("x", SQLiteDialect()) == "x"
