"""
Wallet domain events.
"""
import uuid
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from core.domain.events import DomainEvent


@dataclass(frozen=True)
class WalletRecharged(DomainEvent):
    """Event raised when credits are added to a wallet."""

    company_id: uuid.UUID
    amount: Decimal
    balance: Decimal

    @property
    def aggregate_id(self) -> str:
        return str(self.company_id)


@dataclass(frozen=True)
class WalletDebited(DomainEvent):
    """Event raised when credits are spent from a wallet."""

    company_id: uuid.UUID
    amount: Decimal
    balance: Decimal
    related_entity_id: Optional[str] = None

    @property
    def aggregate_id(self) -> str:
        return str(self.company_id)


@dataclass(frozen=True)
class CreditsTransferred(DomainEvent):
    """Event raised when credits move between two company wallets."""

    from_company_id: uuid.UUID
    to_company_id: uuid.UUID
    amount: Decimal
    correlation_id: uuid.UUID

    @property
    def aggregate_id(self) -> str:
        return str(self.correlation_id)
