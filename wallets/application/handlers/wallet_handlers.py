"""
Wallet ledger handlers.

Handlers for recharge, spend and transfer commands and the wallet
read queries.
"""
import logging
from typing import List

from django.utils import timezone

from companies.application.services.scope_resolver import ScopeResolver
from companies.ports.company_repository import CompanyRepository
from core.domain.exceptions import (
    CompanyNotFoundError,
    DomainException,
    PermissionDeniedError,
    ValidationError,
)
from core.domain.value_objects import Role
from core.infrastructure.events import event_bus
from core.metrics import wallet_amount_total, wallet_operations_total
from wallets.application.commands.wallet_commands import (
    RechargeWalletCommand,
    SpendCreditsCommand,
    TransferCreditsCommand,
)
from wallets.application.dto.wallet_dto import (
    LedgerResultDTO,
    WalletDTO,
    WalletTransactionDTO,
)
from wallets.application.queries.wallet_queries import (
    GetWalletQuery,
    ListWalletsQuery,
    ListWalletTransactionsQuery,
)
from wallets.domain.events import CreditsTransferred, WalletDebited, WalletRecharged
from wallets.domain.services import LedgerMutation, WalletLedger
from wallets.domain.wallet import CompanyWallet
from wallets.ports.wallet_repository import WalletRepository

logger = logging.getLogger(__name__)

RECHARGE_ROLES = (Role.SUPERADMIN, Role.ADMIN)


def _ledger_result(result: LedgerMutation) -> LedgerResultDTO:
    return LedgerResultDTO(
        wallets=[WalletDTO.from_entity(wallet) for wallet in result.wallets.values()],
        entries=[WalletTransactionDTO.from_entity(entry) for entry in result.entries],
    )


class _LedgerHandler:
    """Shared metrics bookkeeping around a ledger mutation."""

    operation = ""

    def __init__(self, wallet_repository: WalletRepository, scope_resolver: ScopeResolver):
        """Initialize handler with repositories."""
        self.wallet_repository = wallet_repository
        self.scope_resolver = scope_resolver

    async def _apply(self, company_ids, operation) -> LedgerMutation:
        try:
            result = await self.wallet_repository.mutate(company_ids, operation)
        except DomainException as e:
            wallet_operations_total.labels(operation=self.operation, result=e.code).inc()
            raise
        wallet_operations_total.labels(operation=self.operation, result="success").inc()
        wallet_amount_total.labels(operation=self.operation).inc(float(result.entries[0].amount))
        return result


class RechargeWalletHandler(_LedgerHandler):
    """Handler for RechargeWalletCommand."""

    operation = "recharge"

    async def handle(self, command: RechargeWalletCommand) -> LedgerResultDTO:
        """
        Handle recharge wallet command.

        Args:
            command: RechargeWalletCommand

        Returns:
            LedgerResultDTO with the new balance and the recharge row

        Raises:
            InvalidAmountError: If amount <= 0
            CompanyNotFoundError: If the company does not exist
            PermissionDeniedError: If the actor may not recharge this wallet
        """
        if command.actor.role not in RECHARGE_ROLES:
            raise PermissionDeniedError("Only administrators can recharge wallets")
        WalletLedger.validate_amount(command.amount)
        await self.scope_resolver.ensure_visible(command.actor, command.company_id)

        now = timezone.now()
        result = await self._apply(
            [command.company_id],
            lambda wallets: WalletLedger.recharge(
                wallets[command.company_id], command.amount, command.actor, now, command.description
            ),
        )
        wallet = result.wallets[command.company_id]
        logger.info(
            "Wallet of company %s recharged with %s by %s",
            command.company_id,
            result.entries[0].amount,
            command.actor,
        )
        await event_bus.publish(
            WalletRecharged(
                company_id=command.company_id,
                amount=result.entries[0].amount,
                balance=wallet.balance,
            )
        )
        return _ledger_result(result)


class SpendCreditsHandler(_LedgerHandler):
    """Handler for SpendCreditsCommand."""

    operation = "spend"

    async def handle(self, command: SpendCreditsCommand) -> LedgerResultDTO:
        """
        Handle spend credits command.

        Raises:
            InvalidAmountError: If amount <= 0
            InsufficientFundsError: If the balance cannot cover the amount
            CompanyNotFoundError: If the company does not exist
        """
        WalletLedger.validate_amount(command.amount)
        await self.scope_resolver.ensure_visible(command.actor, command.company_id)

        now = timezone.now()
        result = await self._apply(
            [command.company_id],
            lambda wallets: WalletLedger.spend(
                wallets[command.company_id],
                command.amount,
                command.actor,
                now,
                description=command.description,
                related_entity_type=command.related_entity_type,
                related_entity_id=command.related_entity_id,
            ),
        )
        wallet = result.wallets[command.company_id]
        logger.info(
            "Company %s spent %s credits, balance %s",
            command.company_id,
            result.entries[0].amount,
            wallet.balance,
        )
        await event_bus.publish(
            WalletDebited(
                company_id=command.company_id,
                amount=result.entries[0].amount,
                balance=wallet.balance,
                related_entity_id=command.related_entity_id or None,
            )
        )
        return _ledger_result(result)


class TransferCreditsHandler(_LedgerHandler):
    """Handler for TransferCreditsCommand."""

    operation = "transfer"

    async def handle(self, command: TransferCreditsCommand) -> LedgerResultDTO:
        """
        Handle transfer credits command.

        Credits may only flow down the hierarchy: the destination must
        lie inside the source company's subtree.

        Raises:
            InvalidAmountError: If amount <= 0
            ValidationError: For a same-company transfer or a destination
                outside the source's subtree
            InsufficientFundsError: If the source cannot cover the amount
            CompanyNotFoundError: If either company does not exist
        """
        WalletLedger.validate_amount(command.amount)
        if command.from_company_id == command.to_company_id:
            raise ValidationError("Cannot transfer credits to the same company")

        hierarchy = await self.scope_resolver.hierarchy()
        for company_id in (command.from_company_id, command.to_company_id):
            if company_id not in hierarchy:
                raise CompanyNotFoundError(f"Company {company_id} not found")
        if not hierarchy.is_within(command.from_company_id, command.to_company_id):
            raise ValidationError("Credits can only be transferred to companies below the source")
        await self.scope_resolver.ensure_visible(command.actor, command.from_company_id)

        now = timezone.now()
        result = await self._apply(
            [command.from_company_id, command.to_company_id],
            lambda wallets: WalletLedger.transfer(
                wallets[command.from_company_id],
                wallets[command.to_company_id],
                command.amount,
                command.actor,
                now,
                description=command.description,
            ),
        )
        correlation_id = result.entries[0].correlation_id
        logger.info(
            "Transferred %s credits from %s to %s (%s)",
            result.entries[0].amount,
            command.from_company_id,
            command.to_company_id,
            correlation_id,
        )
        await event_bus.publish(
            CreditsTransferred(
                from_company_id=command.from_company_id,
                to_company_id=command.to_company_id,
                amount=result.entries[0].amount,
                correlation_id=correlation_id,
            )
        )
        return _ledger_result(result)


class GetWalletHandler:
    """Handler for GetWalletQuery."""

    def __init__(
        self,
        wallet_repository: WalletRepository,
        company_repository: CompanyRepository,
        scope_resolver: ScopeResolver,
    ):
        self.wallet_repository = wallet_repository
        self.company_repository = company_repository
        self.scope_resolver = scope_resolver

    async def handle(self, query: GetWalletQuery) -> WalletDTO:
        """
        Handle get wallet query.

        A company that never touched its wallet reads as an empty one.

        Raises:
            CompanyNotFoundError: If the company does not exist
        """
        company = await self.company_repository.find_by_id(query.company_id)
        if not company:
            raise CompanyNotFoundError(f"Company {query.company_id} not found")
        await self.scope_resolver.ensure_visible(query.actor, company.id)
        wallet = await self.wallet_repository.find_by_company(company.id)
        return WalletDTO.from_entity(wallet or CompanyWallet.create(company.id))


class ListWalletsHandler:
    """Handler for ListWalletsQuery."""

    def __init__(self, wallet_repository: WalletRepository, scope_resolver: ScopeResolver):
        self.wallet_repository = wallet_repository
        self.scope_resolver = scope_resolver

    async def handle(self, query: ListWalletsQuery) -> List[WalletDTO]:
        scope = await self.scope_resolver.company_ids(query.actor)
        wallets = await self.wallet_repository.list_wallets(company_ids=scope)
        return [WalletDTO.from_entity(wallet) for wallet in wallets]


class ListWalletTransactionsHandler:
    """Handler for ListWalletTransactionsQuery."""

    def __init__(
        self,
        wallet_repository: WalletRepository,
        company_repository: CompanyRepository,
        scope_resolver: ScopeResolver,
    ):
        self.wallet_repository = wallet_repository
        self.company_repository = company_repository
        self.scope_resolver = scope_resolver

    async def handle(self, query: ListWalletTransactionsQuery) -> List[WalletTransactionDTO]:
        """
        Handle list wallet transactions query.

        Raises:
            CompanyNotFoundError: If the company does not exist
        """
        company = await self.company_repository.find_by_id(query.company_id)
        if not company:
            raise CompanyNotFoundError(f"Company {query.company_id} not found")
        await self.scope_resolver.ensure_visible(query.actor, company.id)
        entries = await self.wallet_repository.list_transactions(company.id, limit=query.limit)
        return [WalletTransactionDTO.from_entity(entry) for entry in entries]
