# reel_engine/domain/events/event_dispatcher.py
import logging
from enum import Enum
from typing import Callable, Dict, List

from .event_types import DomainEvent


class EventDispatcher:
    """
    Dispatches domain events to registered handlers.
    """
    def __init__(self):
        self.logger = logging.getLogger("domain.events.dispatcher")
        self.handlers: Dict[Enum, List[Callable[[DomainEvent], None]]] = {}

    def register(self, event_type: Enum, handler: Callable[[DomainEvent], None]):
        """
        Register a handler for a specific event type.

        Args:
            event_type: Type of event to handle
            handler: Function to call when event occurs
        """
        self.handlers.setdefault(event_type, []).append(handler)
        self.logger.debug(f"Registered handler for event type: {event_type.name}")

    def dispatch(self, event: DomainEvent):
        """
        Dispatch an event to all registered handlers. A failing handler is
        logged and does not stop the others.

        Args:
            event: Event to dispatch
        """
        handlers = self.handlers.get(event.type, [])

        if not handlers:
            self.logger.debug(f"No handlers registered for event: {event}")
            return

        self.logger.debug(f"Dispatching event {event} to {len(handlers)} handlers")

        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                self.logger.error(f"Error in event handler: {str(e)}")
