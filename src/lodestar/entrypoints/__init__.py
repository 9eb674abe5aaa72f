"""Entrypoints (inbound adapters) for Lodestar.

Expose the application to the outside world. Today that is the ``lodestar``
command line. Entrypoints parse and validate inputs, call the command and query
services through `lodestar.bootstrap`, and present results.

Dependency rule: may import `lodestar.bootstrap` and `lodestar.service_layer`;
avoid importing `lodestar.adapters` directly.
"""
