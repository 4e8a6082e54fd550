"""
Activation domain events.

Domain events represent something that happened in the activation domain.
"""
import uuid
from dataclasses import dataclass
from typing import Optional

from core.domain.events import DomainEvent


@dataclass(frozen=True)
class LicenseActivated(DomainEvent):
    """Event raised when a license is bound to a device."""

    license_id: uuid.UUID
    computer_key: str
    first_activation: bool

    @property
    def aggregate_id(self) -> str:
        return str(self.license_id)


@dataclass(frozen=True)
class ActivationFailed(DomainEvent):
    """Event raised when an activation attempt is refused."""

    activation_key: str
    reason: str
    license_id: Optional[uuid.UUID] = None

    @property
    def aggregate_id(self) -> str:
        return str(self.license_id or self.activation_key)
