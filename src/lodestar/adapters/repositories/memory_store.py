"""In-memory shared data store for repository adapters."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class InMemoryStoreData:
    """Shared in-memory backing store for the in-memory repositories.

    Entities are kept in their persisted (document) form, exactly as the
    SQLAlchemy adapter would store them, so every read decodes a fresh copy and
    no caller can mutate stored state through a returned object.

    A single instance is shared by the in-memory unit of work and its
    repositories. Each unit of work writes to a staged copy and merges the
    keys it touched back into this one on commit.
    """

    # keyed by roadmap id; each document carries its own "revision"
    roadmaps: dict[str, dict[str, Any]] = field(default_factory=dict)

    # keyed by note id
    notes: dict[str, dict[str, Any]] = field(default_factory=dict)

    def copy(self) -> "InMemoryStoreData":
        """Shallow copy of both maps. Documents are replaced, never mutated."""
        return InMemoryStoreData(roadmaps=dict(self.roadmaps), notes=dict(self.notes))
