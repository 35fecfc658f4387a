"""Thread-safe event bus carrying watcher events to subscribers."""

import logging
import threading
import uuid
from datetime import UTC, datetime
from typing import Any

from gamelog.events.models import Event, EventHandler

logger = logging.getLogger(__name__)


class EventBus:
    """
    Pub/sub bus for watcher channels (status, error, gamestate, login).

    The log tailer publishes on the bus and the surrounding application
    subscribes to the channels it renders. Delivery is synchronous and in
    publication order, so subscribers see game state changes in the same
    order as the log lines that produced them.

    Thread Safety:
        - All public methods are thread-safe
        - Subscribers can be added/removed during event publishing
        - Events are delivered in subscription order (per channel)

    Example:
        bus = EventBus()

        def handler(event: Event) -> None:
            print(f"{event.data['type']}: {event.data['value']}")

        sub_id = bus.subscribe("gamestate", handler)
        bus.emit("gamestate", {"type": "QUANTUM", "value": "entered"})
        bus.unsubscribe(sub_id)
    """

    def __init__(self) -> None:
        """Initialize the event bus with empty subscriber registry."""
        # event_type -> list of (subscription_id, handler)
        self._subscribers: dict[str, list[tuple[str, EventHandler]]] = {}
        self._lock = threading.Lock()
        logger.debug("EventBus initialized")

    def subscribe(self, event_type: str, handler: EventHandler) -> str:
        """
        Subscribe to events on one channel.

        Args:
            event_type: Channel to receive (e.g., "gamestate")
            handler: Callable that processes events

        Returns:
            Subscription ID for unsubscribing
        """
        subscription_id = str(uuid.uuid4())

        with self._lock:
            self._subscribers.setdefault(event_type, []).append((subscription_id, handler))
            total = len(self._subscribers[event_type])

        logger.debug(
            "Subscribed to event type",
            extra={
                "event_type": event_type,
                "subscription_id": subscription_id,
                "total_subscribers": total,
            },
        )

        return subscription_id

    def unsubscribe(self, subscription_id: str) -> bool:
        """
        Remove a subscription.

        Args:
            subscription_id: ID returned from subscribe()

        Returns:
            True if unsubscribed, False if ID not found
        """
        with self._lock:
            for event_type, subscribers in self._subscribers.items():
                for i, (sub_id, _) in enumerate(subscribers):
                    if sub_id == subscription_id:
                        subscribers.pop(i)
                        logger.debug(
                            "Unsubscribed from event type",
                            extra={
                                "event_type": event_type,
                                "subscription_id": subscription_id,
                            },
                        )
                        return True

        logger.warning(
            "Subscription ID not found",
            extra={"subscription_id": subscription_id},
        )
        return False

    def publish(self, event: Event) -> None:
        """
        Publish an event to all subscribers of its channel synchronously.

        If a handler raises, the error is logged and the remaining handlers
        still run.

        Args:
            event: Event to publish
        """
        # Snapshot so handlers may (un)subscribe while we iterate
        with self._lock:
            subscribers = self._subscribers.get(event.event_type, []).copy()

        if not subscribers:
            logger.debug(
                "No subscribers for event type",
                extra={"event_type": event.event_type},
            )
            return

        for subscription_id, handler in subscribers:
            try:
                handler(event)
            except Exception as e:
                logger.error(
                    "Handler raised exception",
                    extra={
                        "event_type": event.event_type,
                        "subscription_id": subscription_id,
                        "error": str(e),
                        "error_type": type(e).__name__,
                    },
                )

    def emit(self, event_type: str, data: dict[str, Any], source: str = "log_tailer") -> Event:
        """Build an Event stamped with the current time, publish it and return it."""
        event = Event(
            event_type=event_type,
            timestamp=datetime.now(UTC),
            source=source,
            data=data,
        )
        self.publish(event)
        return event

    def get_subscriber_count(self, event_type: str | None = None) -> int:
        """
        Get the number of subscribers.

        Args:
            event_type: Optional channel to count. If None, returns
                       total count across all channels.

        Returns:
            Number of subscribers
        """
        with self._lock:
            if event_type is not None:
                return len(self._subscribers.get(event_type, []))
            return sum(len(subs) for subs in self._subscribers.values())
