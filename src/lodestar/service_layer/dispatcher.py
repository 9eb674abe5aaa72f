"""Domain event dispatcher."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from lodestar.domain.events import DomainEvent

logger = logging.getLogger(__name__)

type EventHandler = Callable[[DomainEvent], None]


class EventDispatcher:
    """Name-keyed registry routing domain events to their handlers.

    Handlers are registered against an event-type name (the event class name,
    e.g. ``"RoadmapItemAdded"``) or the event class itself, and are called in
    registration order.

    Events are dispatched after the aggregate write has committed, so handlers
    are side effects only (logging, notifications, cross-aggregate work). A
    failing handler is logged and skipped; it never aborts the remaining
    handlers or the command that produced the event.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = {}

    def register(self, kind: str | type[DomainEvent], handler: EventHandler) -> None:
        """Register ``handler`` for events of ``kind``."""
        name = kind if isinstance(kind, str) else kind.__name__
        self._handlers.setdefault(name, []).append(handler)
        logger.debug(
            "Registered handler %s for %s", self._get_handler_name(handler), name
        )

    def handlers_for(self, kind: str | type[DomainEvent]) -> list[EventHandler]:
        name = kind if isinstance(kind, str) else kind.__name__
        return list(self._handlers.get(name, ()))

    def clear_handlers(self) -> None:
        self._handlers.clear()

    def dispatch(self, event: DomainEvent) -> None:
        """Call every handler registered for ``event.event_type``.

        Handler exceptions are logged with their traceback and swallowed.
        """
        handlers = self._handlers.get(event.event_type)
        if not handlers:
            logger.debug("No handlers registered for %s", event.event_type)
            return

        for handler in handlers:
            handler_name = self._get_handler_name(handler)
            logger.debug("Dispatching %s to handler %s", event, handler_name)
            try:
                handler(event)
            except Exception:  # pylint: disable=broad-except
                logger.exception(
                    "Exception handling event %s with handler %s", event, handler_name
                )

    def dispatch_all(self, events: Iterable[DomainEvent]) -> None:
        """Dispatch each event in order."""
        for event in events:
            self.dispatch(event)

    @staticmethod
    def _get_handler_name(fn: Callable[..., None]) -> str:
        if hasattr(fn, "__name__"):
            return fn.__name__
        if hasattr(fn, "func") and hasattr(fn.func, "__name__"):
            return fn.func.__name__
        return repr(fn)


_default_dispatcher: EventDispatcher | None = None


def get_default_dispatcher() -> EventDispatcher:
    """Return the process-wide dispatcher, creating it on first use.

    `lodestar.bootstrap` registers the default handlers on this instance. Tests
    should build their own `EventDispatcher` instead.
    """
    global _default_dispatcher  # pylint: disable=global-statement
    if _default_dispatcher is None:
        _default_dispatcher = EventDispatcher()
    return _default_dispatcher
