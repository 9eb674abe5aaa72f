"""Aggregates package.

The roadmap aggregate (root, timeframes, initiatives, items) and the free-standing
note entity are defined in this package. All entities inherit from the
immutable `Entity` base in `base.py`. They are re-exported here to provide a
single, convenient import path.
"""

from .base import Entity
from .initiative import InitiativePatch, RoadmapInitiative
from .item import ItemPatch, RoadmapItem
from .item_manager import ItemManager
from .note import NotePatch, RoadmapNote
from .roadmap import Roadmap, RoadmapPatch
from .timeframe import RoadmapTimeframe, TimeframePatch

__all__ = [
    "Entity",
    "InitiativePatch",
    "ItemManager",
    "ItemPatch",
    "NotePatch",
    "Roadmap",
    "RoadmapInitiative",
    "RoadmapItem",
    "RoadmapNote",
    "RoadmapPatch",
    "RoadmapTimeframe",
    "TimeframePatch",
]
