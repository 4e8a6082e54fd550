"""
Wallet queries.
"""
import uuid
from dataclasses import dataclass

from core.domain.value_objects import Actor


@dataclass
class GetWalletQuery:
    """Query for one company wallet."""

    company_id: uuid.UUID
    actor: Actor


@dataclass
class ListWalletsQuery:
    """Query for every wallet visible to an operator."""

    actor: Actor


@dataclass
class ListWalletTransactionsQuery:
    """Query for the ledger of one company, newest first."""

    company_id: uuid.UUID
    actor: Actor
    limit: int = 50
