"""Lodestar roadmap CLI: inspect stored roadmaps and run the maintenance services.

Read commands (``list``, ``show``, ``check``, ``suggest``) print to stdout.
Maintenance commands (``rebalance``, ``normalize``) go through the command
services, so they are revision-checked and dispatch their events like any other
write. Status lines go to stderr.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

import click
import click_extra as clickx

from lodestar import config
from lodestar.bootstrap import AppContainer, bootstrap
from lodestar.domain.errors import DomainError
from lodestar.domain.events import RoadmapInitiativePriorityChanged
from lodestar.interfaces.errors import RepositoryError, RevisionConflictError

from .db import MISSING_DB_URL_MSG
from .helpers import success, warn

if TYPE_CHECKING:
    from lodestar.domain.aggregates import Roadmap

RETRY_MSG = "The roadmap was changed by someone else meanwhile; please retry."


def _container() -> AppContainer:
    try:
        return bootstrap()
    except config.DatabaseUrlNotSetError as e:
        raise click.ClickException(MISSING_DB_URL_MSG) from e
    except config.InvalidSettingError as e:
        raise click.ClickException(str(e)) from e


@contextmanager
def _reported_errors() -> Iterator[None]:
    """Turn domain and repository failures into ``ClickException``."""
    try:
        yield
    except RevisionConflictError as e:
        raise click.ClickException(f"{e}\n{RETRY_MSG}") from e
    except (DomainError, RepositoryError) as e:
        raise click.ClickException(str(e)) from e


def _not_found(roadmap_id: str) -> click.ClickException:
    return click.ClickException(f"Roadmap '{roadmap_id}' not found.")


def _load(app: AppContainer, roadmap_id: str) -> Roadmap:
    with _reported_errors():
        roadmap = app.queries.get_roadmap(roadmap_id)
    if roadmap is None:
        raise _not_found(roadmap_id)
    return roadmap


def _render(roadmap: Roadmap) -> None:
    click.echo(f"Roadmap  : {roadmap.title} ({roadmap.id})")
    click.echo(f"Version  : {roadmap.version}")
    click.echo(f"Owner    : {roadmap.owner}")
    click.echo(f"Revision : {roadmap.revision}")
    click.echo(f"Updated  : {roadmap.updated_at.isoformat()}")
    for timeframe in roadmap.timeframes:
        click.echo()
        click.secho(f"[{timeframe.order}] {timeframe.name} ({timeframe.id})", bold=True)
        for initiative in timeframe.initiatives.values():
            click.echo(
                f"  - {initiative.title} [{initiative.priority}, "
                f"{initiative.category}] ({initiative.id})"
            )
            for item in initiative.items:
                click.echo(f"      * {item.title} ({item.status}) ({item.id})")


@click.group(cls=clickx.ExtraGroup)
def roadmap() -> None:
    """Inspect and maintain stored roadmaps."""


@roadmap.command(name="list")
@click.option("--owner", help="Only roadmaps owned by OWNER.")
@click.option("--roadmap-version", "version_", help="Only roadmaps at this version.")
def list_(owner: str | None, version_: str | None) -> None:
    """List stored roadmaps."""
    app = _container()
    with _reported_errors():
        if owner is not None:
            roadmaps = app.queries.get_roadmaps_by_owner(owner)
        elif version_ is not None:
            roadmaps = app.queries.get_roadmaps_by_version(version_)
        else:
            roadmaps = app.queries.get_all_roadmaps()
    if owner is not None and version_ is not None:
        roadmaps = [r for r in roadmaps if r.version == version_]

    if not roadmaps:
        warn("No roadmaps found.")
        return
    for r in roadmaps:
        click.echo(f"{r.id}  {r.title}  v{r.version}  {r.owner}  rev {r.revision}")


@roadmap.command()
@click.argument("roadmap_id")
@click.option("--json", "as_json", is_flag=True, help="Print the stored document.")
def show(roadmap_id: str, as_json: bool) -> None:
    """Show one roadmap with its timeframes, initiatives and items."""
    found = _load(_container(), roadmap_id)
    if as_json:
        click.echo(json.dumps(found.to_dict(), indent=2))
    else:
        _render(found)


@roadmap.command()
@click.argument("roadmap_id")
@clickx.pass_context
def check(ctx: click.Context, roadmap_id: str) -> None:
    """Check a roadmap against the priority, timeframe and content rules.

    Exits with status 1 when any rule is violated.
    """
    app = _container()
    with _reported_errors():
        report = app.queries.check_roadmap(roadmap_id)
    if report is None:
        raise _not_found(roadmap_id)
    if report.valid:
        success(f"Roadmap {roadmap_id} is valid.")
        return
    for message in report.errors:
        warn(message)
    ctx.exit(1)


@roadmap.command()
@click.argument("roadmap_id")
def suggest(roadmap_id: str) -> None:
    """Suggest short/medium/long-term buckets from initiative priorities."""
    app = _container()
    with _reported_errors():
        suggestion = app.queries.suggest_timeframe_structure(roadmap_id)
    if suggestion is None:
        raise _not_found(roadmap_id)
    for label, titles in (
        ("Short term", suggestion.short_term),
        ("Medium term", suggestion.medium_term),
        ("Long term", suggestion.long_term),
    ):
        click.secho(f"{label}:", bold=True)
        for title in titles:
            click.echo(f"  - {title}")
        if not titles:
            click.echo("  (none)")


@roadmap.command()
@click.argument("roadmap_id")
def rebalance(roadmap_id: str) -> None:
    """Downgrade excess high-priority initiatives to medium."""
    app = _container()
    with _reported_errors():
        result = app.commands.rebalance_priorities(roadmap_id)
    if result is None:
        raise _not_found(roadmap_id)
    downgraded = [
        event
        for event in result.domain_events
        if isinstance(event, RoadmapInitiativePriorityChanged)
    ]
    if not downgraded:
        success(f"Roadmap {roadmap_id} is within the high-priority limit.")
        return
    for event in downgraded:
        click.echo(
            f"{event.initiative_id}: {event.old_priority} -> {event.new_priority}"
        )
    success(
        f"Downgraded {len(downgraded)} initiative(s) (revision {result.revision})."
    )


@roadmap.command()
@click.argument("roadmap_id")
def normalize(roadmap_id: str) -> None:
    """Renumber timeframe orders and rebalance priorities."""
    app = _container()
    before = _load(app, roadmap_id)
    with _reported_errors():
        result = app.commands.normalize_roadmap(roadmap_id)
    if result is None:
        raise _not_found(roadmap_id)
    if result.revision == before.revision:
        success(f"Roadmap {roadmap_id} is already normalized.")
    else:
        success(f"Normalized roadmap {roadmap_id} (revision {result.revision}).")
