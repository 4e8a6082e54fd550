"""
Company domain events.
"""

import uuid
from dataclasses import dataclass
from typing import Optional

from core.domain.events import DomainEvent


@dataclass(frozen=True)
class CompanyCreated(DomainEvent):
    """Event raised when a company is created."""

    company_id: uuid.UUID
    company_type: str
    parent_id: Optional[uuid.UUID] = None

    @property
    def aggregate_id(self) -> str:
        return str(self.company_id)


@dataclass(frozen=True)
class CompanyUpdated(DomainEvent):
    """Event raised when a company changes name, status or parent."""

    company_id: uuid.UUID

    @property
    def aggregate_id(self) -> str:
        return str(self.company_id)


@dataclass(frozen=True)
class ClientStatusChanged(DomainEvent):
    """Event raised when a client is validated, suspended or reset to pending."""

    client_id: uuid.UUID
    status: str

    @property
    def aggregate_id(self) -> str:
        return str(self.client_id)
