"""Pytest fixtures for repository contract tests.

Provided fixtures
-----------------
- **contract_uow**: Parametrized unit of work over a **fresh** backend per
  test. Supports `"memory"` (`InMemoryUnitOfWork`) and `"sqlite"`
  (`SqlAlchemyUnitOfWork` over an in-memory SQLite database). Every test in
  this package runs once per backend.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from lodestar.adapters.unit_of_work import InMemoryUnitOfWork, SqlAlchemyUnitOfWork

if TYPE_CHECKING:
    from lodestar.interfaces.unit_of_work import AbstractUnitOfWork


@pytest.fixture(params=["memory", "sqlite"])
def contract_uow(request: pytest.FixtureRequest) -> AbstractUnitOfWork:
    """Return a unit of work over an empty store for the requested backend."""

    match request.param:
        case "memory":
            return InMemoryUnitOfWork()
        case "sqlite":
            return SqlAlchemyUnitOfWork(request.getfixturevalue("sqlite_engine_memory"))
        case _:
            raise ValueError(f"unknown backend: {request.param}")
