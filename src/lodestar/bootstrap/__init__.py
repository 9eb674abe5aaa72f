"""Bootstrap (composition root) for Lodestar.

Assembles the application at runtime: picks a unit of work, builds the event
dispatcher and registers the event handlers, reads the roadmap limits from
configuration and hands them to the domain services, then wires the command and
query services that entrypoints use.

Import rules:
- Entry points import *this* package (not adapters/service_layer/interfaces/domain).
- This package may import: `lodestar.adapters`, `lodestar.service_layer`,
  `lodestar.interfaces`, `lodestar.domain`, and `lodestar.config`.
- Inner layers must not import `lodestar.bootstrap`.
"""

from .bootstrap import AppContainer, bootstrap, build_dispatcher, build_write_uow

__all__ = ["AppContainer", "bootstrap", "build_dispatcher", "build_write_uow"]
