"""Domain services operating over a whole roadmap.

These check and repair the aggregate's soft invariants (high-priority budget,
timeframe ordering) that individual entities cannot enforce on their own.
"""

from .priority import RoadmapPriorityService
from .timeframe import RoadmapTimeframeService, TimeframeSuggestion
from .validation import RoadmapValidationReport, RoadmapValidationService

__all__ = [
    "RoadmapPriorityService",
    "RoadmapTimeframeService",
    "RoadmapValidationReport",
    "RoadmapValidationService",
    "TimeframeSuggestion",
]
