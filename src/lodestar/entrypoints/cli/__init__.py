"""The ``lodestar`` command-line interface."""
