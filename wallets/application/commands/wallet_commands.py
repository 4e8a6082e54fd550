"""
Wallet ledger commands.
"""
import uuid
from dataclasses import dataclass
from decimal import Decimal

from core.domain.value_objects import Actor


@dataclass
class RechargeWalletCommand:
    """Command to add credits to a company wallet."""

    company_id: uuid.UUID
    amount: Decimal
    actor: Actor
    description: str = ""


@dataclass
class SpendCreditsCommand:
    """Command to debit credits, optionally tied to another entity."""

    company_id: uuid.UUID
    amount: Decimal
    actor: Actor
    description: str = ""
    related_entity_type: str = ""
    related_entity_id: str = ""


@dataclass
class TransferCreditsCommand:
    """Command to move credits from a company to one of its descendants."""

    from_company_id: uuid.UUID
    to_company_id: uuid.UUID
    amount: Decimal
    actor: Actor
    description: str = ""
