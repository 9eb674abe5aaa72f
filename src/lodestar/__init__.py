"""Lodestar

A product-roadmap manager built around a single consistency-bounded aggregate.
Timeframes, initiatives and items are immutable values; every change returns a
rebuilt roadmap and records domain events that are dispatched after the write
commits.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
