"""Command services: every write to a roadmap or note goes through one of these."""

from .base import RoadmapCommandService
from .composite import CompositeRoadmapCommandService
from .initiatives import InitiativeCommandService
from .items import ItemCommandService
from .notes import RoadmapNoteCommandService
from .roadmaps import RoadmapEntityCommandService, build_timeframe
from .timeframes import TimeframeCommandService

__all__ = [
    "CompositeRoadmapCommandService",
    "InitiativeCommandService",
    "ItemCommandService",
    "RoadmapCommandService",
    "RoadmapEntityCommandService",
    "RoadmapNoteCommandService",
    "TimeframeCommandService",
    "build_timeframe",
]
