"""
License domain events.

Domain events represent something that happened in the license domain.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.domain.events import DomainEvent


@dataclass(frozen=True)
class LicenseIssued(DomainEvent):
    """Event raised when a license is issued to a client."""

    license_id: uuid.UUID
    client_id: uuid.UUID
    product_id: uuid.UUID
    license_type: str

    @property
    def aggregate_id(self) -> str:
        return str(self.license_id)


@dataclass(frozen=True)
class LicenseRenewed(DomainEvent):
    """Event raised when a license is renewed."""

    license_id: uuid.UUID
    new_expiry: Optional[datetime]
    automatic: bool = False

    @property
    def aggregate_id(self) -> str:
        return str(self.license_id)


@dataclass(frozen=True)
class LicenseSuspended(DomainEvent):
    """Event raised when a license is suspended."""

    license_id: uuid.UUID

    @property
    def aggregate_id(self) -> str:
        return str(self.license_id)


@dataclass(frozen=True)
class LicenseResumed(DomainEvent):
    """Event raised when a license is resumed."""

    license_id: uuid.UUID
    status: str

    @property
    def aggregate_id(self) -> str:
        return str(self.license_id)


@dataclass(frozen=True)
class LicenseExpired(DomainEvent):
    """Event raised when the sweep stores the expired status."""

    license_id: uuid.UUID
    expiry_date: Optional[datetime]

    @property
    def aggregate_id(self) -> str:
        return str(self.license_id)
