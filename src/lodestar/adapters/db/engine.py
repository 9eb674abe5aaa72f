"""Database engine factory and schema bootstrap.

This module centralizes creation of SQLAlchemy Engines and applies
backend-specific tuning:

- **SQLite**: adds connection PRAGMAs to enable WAL, wait on locks, and tune
  durability/temporary storage.
- **Other backends**: no tuning applied here.

Tables are created straight from the shared metadata with `create_schema`;
the document store has no migration history.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import create_engine, event, inspect
from sqlalchemy.engine import URL, make_url

from lodestar.adapters.db import schema  # noqa: F401 # pylint: disable=unused-import
from lodestar.adapters.db.metadata import metadata

if TYPE_CHECKING:
    from sqlite3 import Connection as SQLiteConnection

    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

SQLITE_NAMES = {"sqlite", "sqlite+pysqlite"}


def is_sqlite(url: str | URL) -> bool:
    """Return True if the given SQLAlchemy URL or string corresponds to SQLite."""
    u = make_url(str(url))
    return u.get_backend_name() in SQLITE_NAMES


def make_engine(url: str | URL, *, echo: bool = False) -> Engine:
    """Create a SQLAlchemy Engine for the given URL.

    If the backend is SQLite, applies a set of PRAGMAs on every connection:
        - ``journal_mode=WAL`` (readers don't block the single writer)
        - ``busy_timeout=5000`` (wait for a competing writer instead of failing)
        - ``synchronous=NORMAL`` (balanced durability)
        - ``temp_store=MEMORY`` (reduce temp file I/O)

    Args:
        url: Database connection URL (str or :class:`URL`).
        echo: If True, log SQL statements.

    Returns:
        Engine: Configured SQLAlchemy Engine.
    """

    engine = create_engine(url, echo=echo)

    if is_sqlite(url):

        @event.listens_for(engine, "connect")
        def _sqlite_pragmas(dbapi_conn: SQLiteConnection, conn_record):  # type: ignore #pylint: disable=W0613
            cur = dbapi_conn.cursor()
            cur.execute("PRAGMA journal_mode=WAL;")
            cur.execute("PRAGMA busy_timeout=5000;")
            cur.execute("PRAGMA synchronous=NORMAL;")
            cur.execute("PRAGMA temp_store=MEMORY;")
            cur.close()

    return engine


def create_schema(engine: Engine) -> list[str]:
    """Create any missing Lodestar tables.

    Returns:
        The names of the tables that were created (empty if all existed).
    """
    missing = missing_tables(engine)
    metadata.create_all(engine)
    if missing:
        logger.info("Created tables: %s", ", ".join(missing))
    else:
        logger.debug("Schema already present; nothing to create")
    return missing


def missing_tables(engine: Engine) -> list[str]:
    """Return the Lodestar tables not present in the database."""
    existing = set(inspect(engine).get_table_names())
    return [name for name in metadata.tables if name not in existing]
