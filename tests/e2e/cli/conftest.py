"""Fixtures for end-to-end CLI tests.

Provides a test-only `log-demo` Click command that emits log messages at every
level, a CliRunner whose environment points `LODESTAR_DB_URL` at a scratch
SQLite file and `LODESTAR_LOG_PATH` at the test's temp dir, and a seeded
database holding a few roadmaps.
"""

import logging
from pathlib import Path

import click
import pytest
from click.testing import CliRunner
from sqlalchemy.engine import URL

from lodestar import config
from lodestar.adapters.db.engine import create_schema, make_engine
from lodestar.adapters.unit_of_work import SqlAlchemyUnitOfWork
from lodestar.entrypoints.cli.main import lodestar
from tests.fixtures.datagen import (
    build_sample_roadmap,
    make_initiative,
    make_roadmap,
    make_timeframe,
)

# pylint: disable=redefined-outer-name

BROKEN_ID = "roadmap-broken"
CROWDED_ID = "roadmap-crowded"
GAPPED_ID = "roadmap-gapped"


@click.command()
def log_demo():
    """Emit one message per level on 'lodestar.demo' and two on a foreign logger."""
    logger = logging.getLogger("lodestar.demo")
    logger.debug("This is a debug-level test message.")
    logger.info("This is an info-level test message.")
    logger.warning("This is a warning-level test message.")
    logger.error("This is an error-level test message.")
    logger.critical("This is a critical-level test message.")
    third_party_logger = logging.getLogger("some.thirdparty")
    third_party_logger.debug("This is a debug-level third-party test message.")
    third_party_logger.info("This is an info-level third-party test message.")
    logger.debug("This is a final debug-level test message.")


def _remove_command_everywhere(group, name: str) -> None:
    """Remove a command from a Click group and any section registries it keeps."""
    group.commands.pop(name, None)
    if hasattr(group, "_default_section"):
        group._default_section.commands.pop(name, None)  # pylint: disable=protected-access
    for sec in getattr(group, "_sections", []):
        getattr(sec, "commands", {}).pop(name, None)


@pytest.fixture
def registered_log_demo():
    """Register 'log-demo' on the top-level group for the duration of a test."""
    lodestar.add_command(log_demo, name="log-demo")
    try:
        yield
    finally:
        _remove_command_everywhere(lodestar, "log-demo")


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    """URL of a SQLite file that does not exist yet."""
    return str(URL.create("sqlite+pysqlite", database=str(tmp_path / "cli.db")))


@pytest.fixture
def runner(tmp_path: Path, db_url: str) -> CliRunner:
    """CliRunner with the database URL and flight-recorder path set.

    The roadmap limits are blanked so the defaults apply unless a test
    overrides them through ``env=``.
    """
    return CliRunner(
        env={
            config.DB_URL_ENV: db_url,
            config.MAX_HIGH_PRIORITY_ENV: "",
            config.MAX_TIMEFRAMES_ENV: "",
            "LODESTAR_LOG_PATH": str(tmp_path / "latest.log"),
        }
    )


@pytest.fixture
def fs(runner):
    """Run the test inside an isolated working directory."""
    with runner.isolated_filesystem():
        yield


@pytest.fixture
def seeded_db(db_url: str) -> str:
    """Create the schema and store four roadmaps at revision 1.

    - the sample roadmap (valid)
    - ``roadmap-broken``: two timeframes sharing order 1
    - ``roadmap-crowded``: two high-priority initiatives
    - ``roadmap-gapped``: timeframe orders 1 and 3

    Returns:
        The database URL.
    """
    broken = make_roadmap(
        make_timeframe("Now", 1, entity_id="tf-a"),
        make_timeframe("Later", 1, entity_id="tf-b"),
        title="Broken",
        entity_id=BROKEN_ID,
    )
    crowded = make_roadmap(
        make_timeframe(
            "Now", 0, make_initiative("Billing", items=2, entity_id="init-billing")
        ),
        make_timeframe(
            "Next", 1, make_initiative("Exports", entity_id="init-exports")
        ),
        title="Crowded",
        entity_id=CROWDED_ID,
    )
    gapped = make_roadmap(
        make_timeframe("Soon", 1, entity_id="tf-soon"),
        make_timeframe("Someday", 3, entity_id="tf-someday"),
        title="Gapped",
        owner="data-team",
        version="2.0",
        entity_id=GAPPED_ID,
    )

    engine = make_engine(db_url)
    create_schema(engine)
    uow = SqlAlchemyUnitOfWork(engine)
    with uow:
        for roadmap in (build_sample_roadmap(), broken, crowded, gapped):
            uow.roadmaps.save(roadmap.bump_revision())
        uow.commit()
    engine.dispose()
    return db_url
