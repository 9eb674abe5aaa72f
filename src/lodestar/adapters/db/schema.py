"""Document-store schema.

Each roadmap is stored whole as one JSON document, one row per aggregate. A few
fields are copied out of the document into columns so the repository can filter
without decoding every row.

Constraints (enforced here):

| Constraint           | Purpose                                 |
|----------------------|-----------------------------------------|
| PK(id)               | one document per aggregate               |
| CHECK(revision >= 0) | revisions never go negative             |
"""

from __future__ import annotations

from sqlalchemy import CheckConstraint, Column, Integer, String, Table

from lodestar.adapters.db.metadata import metadata
from lodestar.adapters.db.sa_types import PORTABLE_JSON, UTCDateTime

__all__ = ["roadmaps", "roadmap_notes"]

roadmaps = Table(
    "roadmaps",
    metadata,
    Column(
        "id",
        String(64),
        primary_key=True,
        comment="Roadmap id (e.g. roadmap-<ULID>).",
    ),
    Column("title", String(300), nullable=False, comment="Copied from the document."),
    Column(
        "owner",
        String(200),
        nullable=False,
        index=True,
        comment="Copied from the document.",
    ),
    Column(
        "version",
        String(50),
        nullable=False,
        index=True,
        comment="Copied from the document.",
    ),
    Column(
        "revision",
        Integer,
        nullable=False,
        comment="Optimistic concurrency counter; bumped on every save.",
    ),
    Column(
        "updated_at",
        UTCDateTime(),
        nullable=False,
        comment="Copied from the document (UTC).",
    ),
    Column(
        "document",
        PORTABLE_JSON,
        nullable=False,
        comment="Full roadmap aggregate (timeframes, initiatives, items).",
    ),
    CheckConstraint("revision >= 0", name="non_negative_revision"),
    comment="Roadmap aggregates, one JSON document per row.",
)

roadmap_notes = Table(
    "roadmap_notes",
    metadata,
    Column("id", String(64), primary_key=True, comment="Note id (e.g. note-<ULID>)."),
    Column("category", String(32), nullable=False, index=True),
    Column("priority", String(16), nullable=False, index=True),
    Column("timeline", String(200), nullable=False, index=True),
    Column(
        "updated_at",
        UTCDateTime(),
        nullable=False,
        comment="Copied from the document (UTC).",
    ),
    Column("document", PORTABLE_JSON, nullable=False, comment="Full note."),
    comment="Roadmap notes, one JSON document per row.",
)
