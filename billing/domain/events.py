"""
Billing domain events.
"""
import uuid
from dataclasses import dataclass
from decimal import Decimal

from core.domain.events import DomainEvent


@dataclass(frozen=True)
class TransactionCreated(DomainEvent):
    """Event raised when a billing transaction is recorded."""

    transaction_id: uuid.UUID
    license_id: uuid.UUID
    transaction_type: str
    final_amount: Decimal

    @property
    def aggregate_id(self) -> str:
        return str(self.transaction_id)


@dataclass(frozen=True)
class TransactionStatusChanged(DomainEvent):
    """Event raised when a billing transaction changes payment status."""

    transaction_id: uuid.UUID
    old_status: str
    new_status: str

    @property
    def aggregate_id(self) -> str:
        return str(self.transaction_id)
