"""
Billing transaction commands.
"""
import uuid
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from core.domain.value_objects import Actor, TransactionStatus, TransactionType


@dataclass
class CreateTransactionCommand:
    """
    Command to record a billing transaction for a license.

    amount and discount default to the license price and discount.
    """

    license_id: uuid.UUID
    transaction_type: TransactionType
    actor: Actor
    amount: Optional[Decimal] = None
    discount: Optional[Decimal] = None
    payment_method: str = ""
    notes: str = ""


@dataclass
class UpdateTransactionStatusCommand:
    """Command to change the payment status of a transaction."""

    transaction_id: uuid.UUID
    status: TransactionStatus
    actor: Actor
    payment_method: Optional[str] = None


@dataclass
class PayTransactionWithCreditsCommand:
    """Command to settle a transaction from the booking company's wallet."""

    transaction_id: uuid.UUID
    actor: Actor
