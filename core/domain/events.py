"""
Domain events base classes and infrastructure.

Domain events represent something that happened in the domain.
They are used for decoupling modules and enabling event-driven architecture.
"""

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from typing import Any, Dict


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class DomainEvent(ABC):
    """
    Base class for all domain events.

    Domain events are immutable value objects that represent
    something that happened in the domain. Subclasses declare their
    payload as dataclass fields and implement ``aggregate_id``.
    """

    occurred_at: datetime = field(default_factory=_utcnow, kw_only=True)
    event_id: uuid.UUID = field(default_factory=uuid.uuid4, kw_only=True)

    @property
    def event_type(self) -> str:
        return type(self).__name__

    @property
    @abstractmethod
    def aggregate_id(self) -> str:
        """Identifier of the entity the event is about."""

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        payload = {
            f.name: str(getattr(self, f.name))
            for f in fields(self)
            if f.name not in ("occurred_at", "event_id")
        }
        return {
            "event_id": str(self.event_id),
            "occurred_at": self.occurred_at.isoformat(),
            "aggregate_id": self.aggregate_id,
            "event_type": self.event_type,
            "data": payload,
        }


class EventHandler(ABC):
    """
    Base class for event handlers.

    Event handlers process domain events asynchronously.
    """

    @abstractmethod
    async def handle(self, event: DomainEvent) -> None:
        """
        Handle a domain event.

        Args:
            event: The domain event to handle
        """
        pass


class EventBus(ABC):
    """
    Abstract event bus for publishing and subscribing to domain events.
    """

    @abstractmethod
    async def publish(self, event: DomainEvent) -> None:
        """
        Publish a domain event.

        Args:
            event: The domain event to publish
        """
        pass

    @abstractmethod
    def subscribe(self, event_type: type, handler: EventHandler) -> None:
        """
        Subscribe to a domain event type.

        Args:
            event_type: The type of event to subscribe to
            handler: The handler to call when event is published
        """
        pass
