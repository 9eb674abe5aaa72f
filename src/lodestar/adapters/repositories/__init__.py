"""Repository adapters: in-memory and SQLAlchemy document stores."""

from .memory import InMemoryRoadmapNoteRepository, InMemoryRoadmapRepository
from .memory_store import InMemoryStoreData
from .sqlalchemy import SqlAlchemyRoadmapNoteRepository, SqlAlchemyRoadmapRepository

__all__ = [
    "InMemoryRoadmapNoteRepository",
    "InMemoryRoadmapRepository",
    "InMemoryStoreData",
    "SqlAlchemyRoadmapNoteRepository",
    "SqlAlchemyRoadmapRepository",
]
