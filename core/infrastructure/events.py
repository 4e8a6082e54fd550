"""
In-memory event bus implementation.

Handlers run in-process after the originating mutation has committed.
A failing handler is logged and never affects the publisher.
"""

import asyncio
import logging
from typing import Dict, List, Type

from core.domain.events import DomainEvent, EventBus, EventHandler

logger = logging.getLogger(__name__)


class InMemoryEventBus(EventBus):
    """
    In-memory event bus implementation.

    Handlers are stored per event type and invoked concurrently
    on publish.
    """

    def __init__(self):
        """Initialize the event bus."""
        self._handlers: Dict[Type[DomainEvent], List[EventHandler]] = {}

    def subscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        """
        Subscribe to a domain event type.

        Args:
            event_type: The type of event to subscribe to
            handler: The handler to call when event is published
        """
        handlers = self._handlers.setdefault(event_type, [])
        if handler in handlers:
            return
        handlers.append(handler)
        logger.debug("Subscribed %s to %s", handler.__class__.__name__, event_type.__name__)

    def clear(self) -> None:
        """Drop every subscription."""
        self._handlers.clear()

    def handlers_for(self, event_type: Type[DomainEvent]) -> List[EventHandler]:
        return list(self._handlers.get(event_type, []))

    async def publish(self, event: DomainEvent) -> None:
        """
        Publish a domain event.

        Args:
            event: The domain event to publish
        """
        handlers = self.handlers_for(type(event))

        if not handlers:
            logger.debug("No handlers registered for %s", event.event_type)
            return

        logger.info("Publishing %s to %d handler(s)", event.event_type, len(handlers))

        tasks = [self._handle_event(handler, event) for handler in handlers]
        await asyncio.gather(*tasks, return_exceptions=True)

    async def _handle_event(self, handler: EventHandler, event: DomainEvent) -> None:
        """
        Handle an event with a specific handler.

        Args:
            handler: The handler to use
            event: The event to handle
        """
        try:
            await handler.handle(event)
            logger.debug(
                "Successfully handled %s with %s", event.event_type, handler.__class__.__name__
            )
        except Exception as e:
            logger.error(
                "Error handling %s with %s: %s",
                event.event_type,
                handler.__class__.__name__,
                e,
                exc_info=True,
            )
            raise


event_bus = InMemoryEventBus()
