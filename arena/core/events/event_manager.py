"""
Event management system for decoupled engine communication.

This module provides a central event bus that lets the battle engine report
what happened (moves, attacks, deaths, log lines) without depending on who
listens, following the publisher-subscriber pattern.

The engine is single-threaded: ``publish`` delivers an event to every
subscriber before returning.
"""

from collections import defaultdict
from typing import Callable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .events import GameEvent, EventType


EventSubscriber = Callable[["GameEvent"], None]


class EventManager:
    """Central event bus for battle engine notifications."""

    def __init__(self, enable_debug_logging: bool = False, strict: bool = False):
        """Initialize the event manager.

        Args:
            enable_debug_logging: Whether to enable detailed event logging
            strict: Re-raise subscriber exceptions instead of reporting them
        """
        self.enable_debug_logging = enable_debug_logging
        self.strict = strict

        # Event subscribers by event type
        self._subscribers: dict["EventType", list[EventSubscriber]] = defaultdict(list)

        # Universal subscribers (receive all events)
        self._universal_subscribers: list[EventSubscriber] = []

        # Debug callback for logging
        self._debug_callback: Optional[Callable[[str], None]] = None

    def set_debug_callback(self, callback: Optional[Callable[[str], None]]) -> None:
        """Set a callback function for debug logging."""
        self._debug_callback = callback

    def _debug_log(self, message: str) -> None:
        if self.enable_debug_logging and self._debug_callback:
            self._debug_callback(f"[EVENT] {message}")

    def subscribe(
        self,
        event_type: "EventType",
        subscriber: EventSubscriber,
        subscriber_name: Optional[str] = None
    ) -> None:
        """Subscribe to events of a specific type.

        Args:
            event_type: The type of events to subscribe to
            subscriber: Callback function to handle events
            subscriber_name: Optional name for debugging
        """
        self._subscribers[event_type].append(subscriber)

        subscriber_display = subscriber_name or getattr(subscriber, '__name__', 'anonymous')
        self._debug_log(f"Subscribed {subscriber_display} to {event_type.name} events")

    def subscribe_all(
        self,
        subscriber: EventSubscriber,
        subscriber_name: Optional[str] = None
    ) -> None:
        """Subscribe to all events (universal subscriber)."""
        self._universal_subscribers.append(subscriber)

        subscriber_display = subscriber_name or getattr(subscriber, '__name__', 'anonymous')
        self._debug_log(f"Subscribed {subscriber_display} to ALL events")

    def unsubscribe(self, event_type: "EventType", subscriber: EventSubscriber) -> bool:
        """Unsubscribe from events of a specific type.

        Returns:
            True if subscriber was found and removed
        """
        try:
            self._subscribers[event_type].remove(subscriber)
            self._debug_log(f"Unsubscribed from {event_type.name} events")
            return True
        except ValueError:
            return False

    def publish(self, event: "GameEvent", source: Optional[str] = None) -> None:
        """Deliver an event to its subscribers, then to universal subscribers.

        Args:
            event: The event to publish
            source: Optional source identifier for debugging
        """
        self._debug_log(
            f"Publishing {event.__class__.__name__} from {source or 'unknown'} (turn: {event.turn})"
        )

        # Copy the lists so subscribers may unsubscribe while being notified
        for subscriber in list(self._subscribers.get(event.event_type, [])):
            self._notify(subscriber, event)

        for subscriber in list(self._universal_subscribers):
            self._notify(subscriber, event)

    def _notify(self, subscriber: EventSubscriber, event: "GameEvent") -> None:
        try:
            subscriber(event)
        except Exception as e:
            if self.strict:
                raise
            self._debug_log(
                f"Error in subscriber {getattr(subscriber, '__name__', 'anonymous')}: {e}"
            )

