"""Lodestar test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/class/function.
- integration/  : Real interactions with a database engine.
- contract/     : Behavior every repository implementation must share.
- e2e/          : The ``lodestar`` command line, driven through click's runner.
- fixtures/     : Shared fixtures loaded through ``pytest_plugins`` (no tests here).

General guidance
- Keep unit fast and deterministic; use the in-memory unit of work at boundaries.
- Integration and contract tests use SQLite engines built by `make_engine`.
- Property-based tests (hypothesis) live with the layer they exercise.
"""
