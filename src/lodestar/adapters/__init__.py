"""Adapters (infrastructure) for Lodestar.

Provide concrete implementations of the repository and unit-of-work contracts
(in-memory and SQLAlchemy), plus persistence mapping and related wiring
(engines, metadata, table definitions).

Dependency rule: may import `lodestar.domain` and `lodestar.interfaces`; the
domain must not import this package.
"""
