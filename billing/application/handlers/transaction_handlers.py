"""
Billing transaction handlers.
"""
import logging
from typing import List

from django.utils import timezone

from billing.application.commands.transaction_commands import (
    CreateTransactionCommand,
    PayTransactionWithCreditsCommand,
    UpdateTransactionStatusCommand,
)
from billing.application.dto.billing_dto import TransactionDTO
from billing.application.queries.billing_queries import ListTransactionsQuery
from billing.domain.events import TransactionCreated, TransactionStatusChanged
from billing.domain.transaction import Transaction
from billing.ports.transaction_repository import TransactionRepository
from companies.application.services.scope_resolver import ScopeResolver
from core.domain.exceptions import (
    DomainException,
    LicenseNotFoundError,
    TransactionNotFoundError,
    ValidationError,
)
from core.infrastructure.events import event_bus
from core.metrics import wallet_amount_total, wallet_operations_total
from licenses.application.services.license_access import LicenseAccess
from licenses.ports.license_repository import LicenseRepository
from wallets.domain.events import WalletDebited
from wallets.domain.services import LedgerMutation, WalletLedger
from wallets.ports.wallet_repository import WalletRepository

logger = logging.getLogger(__name__)


class CreateTransactionHandler:
    """Handler for CreateTransactionCommand."""

    def __init__(
        self,
        transaction_repository: TransactionRepository,
        license_repository: LicenseRepository,
        license_access: LicenseAccess,
    ):
        """Initialize handler with repositories."""
        self.transaction_repository = transaction_repository
        self.license_repository = license_repository
        self.license_access = license_access

    async def handle(self, command: CreateTransactionCommand) -> TransactionDTO:
        """
        Handle create transaction command.

        Args:
            command: CreateTransactionCommand

        Returns:
            TransactionDTO of the pending transaction

        Raises:
            LicenseNotFoundError: If the license does not exist
            ValidationError: For a negative amount or a discount above the amount
        """
        license = await self.license_repository.find_by_id(command.license_id)
        if not license:
            raise LicenseNotFoundError(f"License {command.license_id} not found")
        company_id = await self.license_access.ensure_visible(command.actor, license)

        transaction = Transaction.create(
            license_id=license.id,
            client_id=license.client_id,
            company_id=license.assigned_company_id or company_id,
            transaction_type=command.transaction_type,
            amount=license.price if command.amount is None else command.amount,
            discount=license.discount if command.discount is None else command.discount,
            payment_method=command.payment_method,
            notes=command.notes,
            modified_by=command.actor.operator_id,
        )
        saved = await self.transaction_repository.save(transaction)
        logger.info("Recorded %s transaction %s for license %s", saved.transaction_type, saved.id, license.id)

        await event_bus.publish(
            TransactionCreated(
                transaction_id=saved.id,
                license_id=saved.license_id,
                transaction_type=saved.transaction_type.value,
                final_amount=saved.final_amount,
            )
        )
        return TransactionDTO.from_entity(saved)


class UpdateTransactionStatusHandler:
    """Handler for UpdateTransactionStatusCommand."""

    def __init__(self, transaction_repository: TransactionRepository, scope_resolver: ScopeResolver):
        """Initialize handler with repositories."""
        self.transaction_repository = transaction_repository
        self.scope_resolver = scope_resolver

    async def handle(self, command: UpdateTransactionStatusCommand) -> TransactionDTO:
        """
        Handle update transaction status command.

        Paid statuses stamp the payment date, pending clears it.

        Raises:
            TransactionNotFoundError: If the transaction does not exist
        """
        transaction = await self.transaction_repository.find_by_id(command.transaction_id)
        if not transaction:
            raise TransactionNotFoundError(f"Transaction {command.transaction_id} not found")
        await self.scope_resolver.ensure_visible(command.actor, transaction.company_id)

        now = timezone.now()
        updated = await self.transaction_repository.apply(
            transaction.id,
            lambda current: current.with_status(
                command.status,
                now,
                payment_method=command.payment_method,
                modified_by=command.actor.operator_id,
            ),
        )
        logger.info(
            "Transaction %s moved from %s to %s by %s",
            updated.id,
            transaction.status,
            updated.status,
            command.actor,
        )
        await event_bus.publish(
            TransactionStatusChanged(
                transaction_id=updated.id,
                old_status=transaction.status.value,
                new_status=updated.status.value,
            )
        )
        return TransactionDTO.from_entity(updated)


class PayTransactionWithCreditsHandler:
    """Handler for PayTransactionWithCreditsCommand."""

    def __init__(
        self,
        transaction_repository: TransactionRepository,
        wallet_repository: WalletRepository,
        scope_resolver: ScopeResolver,
    ):
        """Initialize handler with repositories."""
        self.transaction_repository = transaction_repository
        self.wallet_repository = wallet_repository
        self.scope_resolver = scope_resolver

    async def handle(self, command: PayTransactionWithCreditsCommand) -> TransactionDTO:
        """
        Handle pay with credits command.

        The wallet debit, its ledger row and the transaction status
        change commit together or not at all.

        Args:
            command: PayTransactionWithCreditsCommand

        Returns:
            TransactionDTO of the paid transaction

        Raises:
            TransactionNotFoundError: If the transaction does not exist
            ValidationError: If it is already paid or has no booking company
            InsufficientFundsError: If the wallet cannot cover the amount
        """
        transaction = await self.transaction_repository.find_by_id(command.transaction_id)
        if not transaction:
            raise TransactionNotFoundError(f"Transaction {command.transaction_id} not found")
        if transaction.status.is_paid:
            raise ValidationError(f"Transaction {transaction.id} is already paid")
        company_id = transaction.company_id
        if company_id is None:
            raise ValidationError("Transaction is not booked against a company")
        await self.scope_resolver.ensure_visible(command.actor, company_id)

        now = timezone.now()
        amount = transaction.final_amount
        paid = []

        def spend(wallets) -> LedgerMutation:
            return WalletLedger.spend(
                wallets[company_id],
                amount,
                command.actor,
                now,
                description=f"Payment of transaction {transaction.id}",
                related_entity_type="transaction",
                related_entity_id=str(transaction.id),
            )

        def mark_paid(result: LedgerMutation) -> None:
            paid.append(
                self.transaction_repository.apply_locked(
                    transaction.id,
                    lambda current: current.pay_with_credits(now, command.actor.operator_id),
                )
            )

        try:
            result = await self.wallet_repository.mutate([company_id], spend, after_apply=mark_paid)
        except DomainException as e:
            wallet_operations_total.labels(operation="pay_transaction", result=e.code).inc()
            raise
        wallet_operations_total.labels(operation="pay_transaction", result="success").inc()
        wallet_amount_total.labels(operation="pay_transaction").inc(float(amount))

        updated = paid[0]
        logger.info("Transaction %s paid with %s credits of company %s", updated.id, amount, company_id)
        await event_bus.publish(
            WalletDebited(
                company_id=company_id,
                amount=amount,
                balance=result.wallets[company_id].balance,
                related_entity_id=str(updated.id),
            )
        )
        await event_bus.publish(
            TransactionStatusChanged(
                transaction_id=updated.id,
                old_status=transaction.status.value,
                new_status=updated.status.value,
            )
        )
        return TransactionDTO.from_entity(updated)


class ListTransactionsHandler:
    """Handler for ListTransactionsQuery."""

    def __init__(self, transaction_repository: TransactionRepository, scope_resolver: ScopeResolver):
        self.transaction_repository = transaction_repository
        self.scope_resolver = scope_resolver

    async def handle(self, query: ListTransactionsQuery) -> List[TransactionDTO]:
        scope = await self.scope_resolver.company_ids(query.actor)
        transactions = await self.transaction_repository.list(
            company_ids=scope, license_id=query.license_id, status=query.status
        )
        return [TransactionDTO.from_entity(transaction) for transaction in transactions]
