"""
Billing transaction domain entity.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from core.domain.exceptions import ValidationError
from core.domain.value_objects import TransactionStatus, TransactionType, quantize_amount

CREDITS_PAYMENT_METHOD = "credits"


@dataclass(frozen=True)
class Transaction:
    """
    Billing transaction domain entity.

    One charge for a license: its first activation, a renewal or a
    deferred payment. ``final_amount`` is always ``amount - discount``.
    """

    id: uuid.UUID
    license_id: uuid.UUID
    client_id: uuid.UUID
    company_id: Optional[uuid.UUID]
    transaction_type: TransactionType
    amount: Decimal
    discount: Decimal
    status: TransactionStatus
    created_at: datetime
    updated_at: datetime
    payment_method: str = ""
    payment_date: Optional[datetime] = None
    credits_used: Optional[Decimal] = None
    notes: str = ""
    modified_by: Optional[uuid.UUID] = None

    def __post_init__(self):
        """Validate transaction entity."""
        if self.amount < 0:
            raise ValidationError("Transaction amount cannot be negative")
        if self.discount < 0:
            raise ValidationError("Transaction discount cannot be negative")
        if self.discount > self.amount:
            raise ValidationError("Discount cannot exceed the transaction amount")

    @classmethod
    def create(
        cls,
        license_id: uuid.UUID,
        client_id: uuid.UUID,
        transaction_type: TransactionType,
        amount,
        discount=Decimal("0"),
        company_id: Optional[uuid.UUID] = None,
        payment_method: str = "",
        notes: str = "",
        modified_by: Optional[uuid.UUID] = None,
        transaction_id: Optional[uuid.UUID] = None,
        now: Optional[datetime] = None,
    ) -> "Transaction":
        """
        Create a new pending Transaction.

        Args:
            license_id: Billed license UUID
            client_id: Client owning the license
            transaction_type: activation, renewal or deferred
            amount: Gross amount
            discount: Discount on the gross amount
            company_id: Company the charge is booked against
            payment_method: Free text payment method
            notes: Free text notes
            modified_by: Operator creating the transaction
            transaction_id: Optional UUID (generated if not provided)
            now: Creation timestamp

        Returns:
            Transaction entity instance

        Raises:
            ValidationError: For negative amounts or an oversized discount
        """
        now = now or datetime.now(timezone.utc)
        try:
            amount = quantize_amount(amount)
            discount = quantize_amount(discount)
        except ValueError as e:
            raise ValidationError(str(e)) from e
        return cls(
            id=transaction_id or uuid.uuid4(),
            license_id=license_id,
            client_id=client_id,
            company_id=company_id,
            transaction_type=transaction_type,
            amount=amount,
            discount=discount,
            status=TransactionStatus.PENDING,
            created_at=now,
            updated_at=now,
            payment_method=payment_method,
            notes=notes,
            modified_by=modified_by,
        )

    @property
    def final_amount(self) -> Decimal:
        return self.amount - self.discount

    def with_status(
        self,
        status: TransactionStatus,
        now: datetime,
        payment_method: Optional[str] = None,
        modified_by: Optional[uuid.UUID] = None,
    ) -> "Transaction":
        """
        Move the transaction to a new payment status.

        Paid statuses stamp the payment date, going back to pending
        clears it and failed keeps whatever was there. A transaction
        settled from the wallet keeps its status: the debit is already
        in the ledger.

        Returns:
            New Transaction instance

        Raises:
            ValidationError: If the transaction was paid with credits
        """
        if self.status == TransactionStatus.PAID_WITH_CREDITS:
            raise ValidationError(f"Transaction {self.id} was paid with credits and cannot change status")
        if status.is_paid:
            payment_date = now
        elif status == TransactionStatus.PENDING:
            payment_date = None
        else:
            payment_date = self.payment_date
        return replace(
            self,
            status=status,
            payment_date=payment_date,
            payment_method=self.payment_method if payment_method is None else payment_method,
            modified_by=modified_by or self.modified_by,
            updated_at=now,
        )

    def pay_with_credits(self, now: datetime, modified_by: Optional[uuid.UUID] = None) -> "Transaction":
        """
        Settle the transaction from the company wallet.

        Raises:
            ValidationError: If the transaction is already paid
        """
        if self.status.is_paid:
            raise ValidationError(f"Transaction {self.id} is already paid")
        paid = self.with_status(
            TransactionStatus.PAID_WITH_CREDITS,
            now,
            payment_method=CREDITS_PAYMENT_METHOD,
            modified_by=modified_by,
        )
        return replace(paid, credits_used=self.final_amount)
