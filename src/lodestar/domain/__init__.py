"""Domain layer for Lodestar.

Contains business rules: the roadmap aggregate and its member entities, value
objects, domain events, and the domain services that check and repair the
aggregate's soft invariants. This package is deliberately technology-agnostic.

Dependency rule: do not import from `lodestar.adapters` or `lodestar.entrypoints`.
"""
