"""
Wallet repository port (interface).

This defines the contract for wallet and ledger persistence.
Implementations are in the infrastructure layer.
"""
import uuid
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Callable, Dict, List, Optional, Sequence, Set

from wallets.domain.services import LedgerMutation
from wallets.domain.wallet import CompanyWallet, WalletTransaction

LedgerOperation = Callable[[Dict[uuid.UUID, CompanyWallet]], LedgerMutation]
AfterMutation = Callable[[LedgerMutation], None]


class WalletRepository(ABC):
    """
    Abstract repository for company wallets and their ledger.

    Ledger rows are only ever inserted through ``mutate``.
    """

    @abstractmethod
    async def mutate(
        self,
        company_ids: Sequence[uuid.UUID],
        operation: LedgerOperation,
        after_apply: Optional[AfterMutation] = None,
    ) -> LedgerMutation:
        """
        Apply a ledger operation atomically.

        Wallets of ``company_ids`` are created when missing, locked in a
        deterministic order and passed to ``operation``. The new balances
        are written with a conditional update on the wallet version,
        the ledger rows are inserted and ``after_apply`` runs, all in a
        single database transaction.

        Args:
            company_ids: Companies whose wallets take part
            operation: Pure function from current wallets to a LedgerMutation
            after_apply: Synchronous callback run inside the transaction

        Returns:
            The applied LedgerMutation

        Raises:
            CompanyNotFoundError: If a company does not exist
            ConcurrentUpdateError: If a wallet changed under the lock
        """
        pass

    @abstractmethod
    async def find_by_company(self, company_id: uuid.UUID) -> Optional[CompanyWallet]:
        pass

    @abstractmethod
    async def list_wallets(self, company_ids: Optional[Set[uuid.UUID]] = None) -> List[CompanyWallet]:
        pass

    @abstractmethod
    async def list_transactions(
        self, company_id: uuid.UUID, limit: int = 50
    ) -> List[WalletTransaction]:
        """
        Ledger rows of one company, newest first.

        Args:
            company_id: Company UUID
            limit: Maximum number of rows
        """
        pass

    @abstractmethod
    async def ledger_balance(self, company_id: uuid.UUID) -> Decimal:
        """Sum of the signed amounts of every ledger row of a company."""
        pass
