"""
Wallet DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from wallets.domain.wallet import CompanyWallet, WalletTransaction


@dataclass
class WalletDTO:
    """DTO for wallet information."""

    company_id: uuid.UUID
    balance: Decimal
    total_recharged: Decimal
    total_spent: Decimal
    last_recharge_date: Optional[datetime]

    @classmethod
    def from_entity(cls, wallet: CompanyWallet) -> "WalletDTO":
        return cls(
            company_id=wallet.company_id,
            balance=wallet.balance,
            total_recharged=wallet.total_recharged,
            total_spent=wallet.total_spent,
            last_recharge_date=wallet.last_recharge_date,
        )


@dataclass
class WalletTransactionDTO:
    """DTO for one ledger row."""

    id: uuid.UUID
    company_id: uuid.UUID
    transaction_type: str
    amount: Decimal
    signed_amount: Decimal
    balance_before: Decimal
    balance_after: Decimal
    description: str
    related_entity_type: str
    related_entity_id: str
    counterparty_company_id: Optional[uuid.UUID]
    correlation_id: Optional[uuid.UUID]
    created_by: Optional[uuid.UUID]
    created_at: datetime

    @classmethod
    def from_entity(cls, entry: WalletTransaction) -> "WalletTransactionDTO":
        return cls(
            id=entry.id,
            company_id=entry.company_id,
            transaction_type=entry.transaction_type.value,
            amount=entry.amount,
            signed_amount=entry.signed_amount,
            balance_before=entry.balance_before,
            balance_after=entry.balance_after,
            description=entry.description,
            related_entity_type=entry.related_entity_type,
            related_entity_id=entry.related_entity_id,
            counterparty_company_id=entry.counterparty_company_id,
            correlation_id=entry.correlation_id,
            created_by=entry.created_by,
            created_at=entry.created_at,
        )


@dataclass
class LedgerResultDTO:
    """DTO for the outcome of a recharge, spend or transfer."""

    wallets: List[WalletDTO]
    entries: List[WalletTransactionDTO]
