"""Lodestar CLI entry point.

Defines the top-level ``lodestar`` command (via Click-Extra), configures logging
for every subcommand and registers the subcommand groups:

- ``lodestar db``: create and inspect the storage tables.
- ``lodestar roadmap``: inspect stored roadmaps, check them and run the
  rebalancing and normalization services.

Examples
    $ lodestar --version
    $ lodestar db init
    $ lodestar -v roadmap check roadmap-01J...
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click
import click_extra as clickx
from platformdirs import user_log_dir

from lodestar import __version__, config
from lodestar.logging import config_console_handler, config_flight_recorder, log_startup

from .db import db as db_group
from .helpers import parse_log_level
from .roadmap import roadmap as roadmap_group

if TYPE_CHECKING:
    from logging import Handler

logger = logging.getLogger(__name__)


HELP = """Lodestar command-line interface.

    Lodestar keeps product roadmaps (timeframes, initiatives and the items under
    them) as single documents, checks them against priority and ordering rules,
    and repairs what can be repaired automatically.
    """


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help="Raise console verbosity one level above WARNING per repetition.",
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help="Lower console verbosity one level below WARNING per repetition.",
    default=0,
)
@click.option(
    "--debug/--no-debug",
    is_flag=True,
    help="Debug console output: everything, with timestamps and source paths.",
    default=False,
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="File the flight recorder writes to.",
    default=Path(user_log_dir("lodestar", appauthor=False, ensure_exists=True))
    / "latest.log",
    envvar="LODESTAR_LOG_PATH",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--flight-recorder-capacity",
    type=int,
    default=2000,
    hidden=True,
    envvar="LODESTAR_FLIGHT_RECORDER_CAPACITY",
    show_envvar=True,
    help="Number of log records the flight recorder keeps.",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    is_flag=True,
    help=(
        "Keep the most recent log records at DEBUG level in memory and write "
        "them to --log-path when a WARNING or ERROR is logged. Console "
        "verbosity is not affected."
    ),
    default=True,
    show_envvar=True,
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    is_flag=True,
    help="Also write the flight recorder buffer to --log-path on a clean exit.",
    default=False,
    show_default=True,
    show_envvar=True,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    help=(
        "Set the minimum level of a named logger (NAME=LEVEL). Applies to both "
        "console and flight recorder. Repeatable, e.g. -L sqlalchemy.engine=INFO."
    ),
    default=("sqlalchemy=WARNING",),
    show_default=True,
    show_envvar=True,
)
@clickx.pass_context
def lodestar(  # pylint: disable=too-many-arguments, too-many-locals, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """Lodestar command-line interface."""

    level = logging.WARNING - (10 * verbose_count) + (10 * quiet_count)
    level = max(logging.DEBUG, min(logging.CRITICAL, level))

    handlers: list[Handler] = [
        config_console_handler(
            level=level, debug_mode=debug, color=ctx.color is not False
        )
    ]
    if flight_recorder:
        handlers.append(
            config_flight_recorder(
                path=log_path,
                capacity=flight_recorder_capacity,
                flush_on_close=force_flush_flight_recorder,
            )
        )

    # handlers do the filtering
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)

    for name, lvl in logger_levels.items():
        logging.getLogger(name).setLevel(lvl)

    try:
        limits = config.get_roadmap_limits()
    except config.InvalidSettingError as e:
        raise click.ClickException(str(e)) from e

    log_startup(
        logger,
        app_version=__version__,
        level=level,
        handlers=handlers,
        log_path=log_path,
        flight_recorder=flight_recorder,
        flight_capacity=flight_recorder_capacity if flight_recorder else None,
        force_flush_fr=force_flush_flight_recorder,
        logger_levels=logger_levels,
        limits=limits,
    )

    ctx.call_on_close(logging.shutdown)


lodestar.add_command(db_group)
lodestar.add_command(roadmap_group)
