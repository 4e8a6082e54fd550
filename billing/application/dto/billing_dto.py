"""
Billing DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from billing.domain.transaction import Transaction


@dataclass
class TransactionDTO:
    """DTO for billing transaction information."""

    id: uuid.UUID
    license_id: uuid.UUID
    client_id: uuid.UUID
    company_id: Optional[uuid.UUID]
    transaction_type: str
    amount: Decimal
    discount: Decimal
    final_amount: Decimal
    payment_method: str
    status: str
    payment_date: Optional[datetime]
    credits_used: Optional[Decimal]
    notes: str
    modified_by: Optional[uuid.UUID]
    created_at: datetime

    @classmethod
    def from_entity(cls, transaction: Transaction) -> "TransactionDTO":
        return cls(
            id=transaction.id,
            license_id=transaction.license_id,
            client_id=transaction.client_id,
            company_id=transaction.company_id,
            transaction_type=transaction.transaction_type.value,
            amount=transaction.amount,
            discount=transaction.discount,
            final_amount=transaction.final_amount,
            payment_method=transaction.payment_method,
            status=transaction.status.value,
            payment_date=transaction.payment_date,
            credits_used=transaction.credits_used,
            notes=transaction.notes,
            modified_by=transaction.modified_by,
            created_at=transaction.created_at,
        )
