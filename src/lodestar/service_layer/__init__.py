"""Service layer for Lodestar.

Implements application use-cases: command services that mutate the roadmap
aggregate under a unit of work, the query service, the event dispatcher and the
default event handlers.

Dependency rule: may import `lodestar.domain` and `lodestar.interfaces`, but not
`lodestar.adapters` or `lodestar.entrypoints`.
"""
