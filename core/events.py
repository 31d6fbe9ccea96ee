"""In-process event bus for plan notifications.

The services publish named events with a small payload; notification
collaborators (SMS, email, browser push) subscribe and deliver them out of
band. Handlers run synchronously in subscription order. A failing handler is
logged and does not stop the remaining handlers or the publisher.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List

from core.logger import get_logger

logger = get_logger("core.events")

PLAN_GENERATED = "plan_generated"
PROGRESS_MILESTONE = "progress_milestone"


@dataclass
class PlanEvent:
    name: str
    payload: Dict[str, Any]
    occurred_at: datetime = field(default_factory=datetime.utcnow)


Handler = Callable[[PlanEvent], None]


class EventBus:
    """Dictionary-backed publish/subscribe registry keyed by event name."""

    def __init__(self):
        self._handlers: Dict[str, List[Handler]] = {}

    def subscribe(self, name: str, handler: Handler) -> None:
        self._handlers.setdefault(name, []).append(handler)
        logger.debug("Handler %s subscribed to %s", getattr(handler, "__name__", handler), name)

    def unsubscribe(self, name: str, handler: Handler) -> None:
        handlers = self._handlers.get(name, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, name: str, payload: Dict[str, Any]) -> PlanEvent:
        """Deliver an event to every handler subscribed to `name`.

        Returns:
            The published event, whether or not anyone was listening.
        """
        event = PlanEvent(name=name, payload=dict(payload))
        handlers = list(self._handlers.get(name, []))
        logger.info("Publishing %s to %s handler(s): %s", name, len(handlers), event.payload)
        for handler in handlers:
            try:
                handler(event)
            except Exception:
                logger.exception("Event handler %s failed for %s", getattr(handler, "__name__", handler), name)
        return event


# default bus shared by the API layer
event_bus = EventBus()
