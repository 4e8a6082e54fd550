"""
Registration domain events.
"""
import uuid
from dataclasses import dataclass

from core.domain.events import DomainEvent


@dataclass(frozen=True)
class DeviceRegistered(DomainEvent):
    """Event raised when a device reports in, first time or not."""

    tax_id: str
    device_uid: str
    created: bool

    @property
    def aggregate_id(self) -> str:
        return self.tax_id


@dataclass(frozen=True)
class RegistrationLicenseAssigned(DomainEvent):
    """Event raised when a registration header is tied to a license."""

    tax_id: str
    license_id: uuid.UUID

    @property
    def aggregate_id(self) -> str:
        return self.tax_id
