"""
Wallet domain entities.

A CompanyWallet caches the balance of its company's ledger. Every
change to the balance comes with exactly one WalletTransaction row.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from core.domain.value_objects import WalletTransactionType

ZERO = Decimal("0.00")


@dataclass(frozen=True)
class CompanyWallet:
    """
    CompanyWallet domain entity.

    ``version`` increases by one with every balance change and guards
    the conditional write in the repository.
    """

    id: uuid.UUID
    company_id: uuid.UUID
    balance: Decimal
    total_recharged: Decimal
    total_spent: Decimal
    created_at: datetime
    updated_at: datetime
    last_recharge_date: Optional[datetime] = None
    version: int = 0

    def __post_init__(self):
        """Validate wallet entity."""
        if self.balance < 0:
            raise ValueError("Wallet balance cannot be negative")

    @classmethod
    def create(cls, company_id: uuid.UUID, wallet_id: Optional[uuid.UUID] = None) -> "CompanyWallet":
        """
        Create an empty wallet for a company.

        Args:
            company_id: Owning company UUID
            wallet_id: Optional UUID (generated if not provided)

        Returns:
            CompanyWallet with a zero balance
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=wallet_id or uuid.uuid4(),
            company_id=company_id,
            balance=ZERO,
            total_recharged=ZERO,
            total_spent=ZERO,
            created_at=now,
            updated_at=now,
        )

    def credited(self, amount: Decimal, now: datetime, recharge: bool = False) -> "CompanyWallet":
        return replace(
            self,
            balance=self.balance + amount,
            total_recharged=self.total_recharged + amount if recharge else self.total_recharged,
            last_recharge_date=now if recharge else self.last_recharge_date,
            updated_at=now,
            version=self.version + 1,
        )

    def debited(self, amount: Decimal, now: datetime, spend: bool = False) -> "CompanyWallet":
        return replace(
            self,
            balance=self.balance - amount,
            total_spent=self.total_spent + amount if spend else self.total_spent,
            updated_at=now,
            version=self.version + 1,
        )


@dataclass(frozen=True)
class WalletTransaction:
    """
    Immutable wallet ledger row.

    ``amount`` is always a positive magnitude; the direction comes from
    the transaction type.
    """

    id: uuid.UUID
    company_id: uuid.UUID
    transaction_type: WalletTransactionType
    amount: Decimal
    balance_before: Decimal
    balance_after: Decimal
    created_at: datetime
    description: str = ""
    related_entity_type: str = ""
    related_entity_id: str = ""
    counterparty_company_id: Optional[uuid.UUID] = None
    correlation_id: Optional[uuid.UUID] = None
    created_by: Optional[uuid.UUID] = None

    def __post_init__(self):
        """Validate ledger row."""
        if self.amount <= 0:
            raise ValueError("Ledger amount must be positive")
        if self.balance_after != self.balance_before + self.signed_amount:
            raise ValueError("Ledger row does not balance")

    @property
    def signed_amount(self) -> Decimal:
        return self.amount if self.transaction_type.is_credit else -self.amount
