"""
Transaction repository port (interface).
"""
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, List, Optional, Set

from billing.domain.transaction import Transaction

TransactionMutation = Callable[[Transaction], Transaction]


class TransactionRepository(ABC):
    """Abstract repository for billing Transaction entities."""

    @abstractmethod
    def stage(self, transaction: Transaction) -> Transaction:
        """
        Write a transaction synchronously.

        Meant to be called from inside another repository's atomic
        block (``after_save``/``after_apply`` hooks) so the billing row
        commits or rolls back together with the change that caused it.

        Args:
            transaction: Transaction entity to write

        Returns:
            Stored transaction entity
        """
        pass

    @abstractmethod
    async def save(self, transaction: Transaction) -> Transaction:
        pass

    @abstractmethod
    async def find_by_id(self, transaction_id: uuid.UUID) -> Optional[Transaction]:
        """
        Find a transaction by ID.

        Args:
            transaction_id: Transaction UUID

        Returns:
            Transaction entity or None if not found
        """
        pass

    @abstractmethod
    async def apply(
        self, transaction_id: uuid.UUID, mutation: TransactionMutation
    ) -> Transaction:
        """
        Locked read-modify-write of one transaction.

        Raises:
            TransactionNotFoundError: If the transaction does not exist
        """
        pass

    @abstractmethod
    def apply_locked(self, transaction_id: uuid.UUID, mutation: TransactionMutation) -> Transaction:
        """Synchronous ``apply`` for use inside an enclosing atomic block."""
        pass

    @abstractmethod
    async def list(
        self,
        company_ids: Optional[Set[uuid.UUID]] = None,
        license_id: Optional[uuid.UUID] = None,
        status: Optional[str] = None,
        since: Optional[datetime] = None,
    ) -> List[Transaction]:
        """
        List transactions, newest first.

        Args:
            company_ids: Restrict to these booking companies (None for all)
            license_id: Restrict to one license
            status: Restrict to one payment status
            since: Only transactions created at or after this time
        """
        pass
