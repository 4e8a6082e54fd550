"""
Django implementation of WalletRepository port.

This adapter converts between domain entities and Django ORM models
and applies ledger mutations inside one database transaction.
"""
import uuid
from decimal import Decimal
from typing import Dict, List, Optional, Sequence, Set

from asgiref.sync import sync_to_async
from django.db.models import Case, DecimalField, F, Sum, Value, When

from companies.infrastructure.models import Company as CompanyModel
from core.domain.exceptions import CompanyNotFoundError, ConcurrentUpdateError
from core.domain.value_objects import WalletTransactionType
from core.infrastructure.database import transactional
from wallets.domain.services import LedgerMutation
from wallets.domain.wallet import CompanyWallet, WalletTransaction
from wallets.infrastructure.models import CompanyWallet as WalletModel
from wallets.infrastructure.models import WalletTransaction as WalletTransactionModel
from wallets.ports.wallet_repository import AfterMutation, LedgerOperation, WalletRepository

CREDIT_TYPES = [WalletTransactionType.RECHARGE.value, WalletTransactionType.TRANSFER_IN.value]


class DjangoWalletRepository(WalletRepository):
    """
    Django ORM implementation of WalletRepository.

    ``mutate`` locks the wallets with ``select_for_update`` ordered by
    primary key and additionally writes each balance with a conditional
    update on ``version``.
    """

    def _to_domain(self, model: WalletModel) -> CompanyWallet:
        return CompanyWallet(
            id=model.id,
            company_id=model.company_id,
            balance=model.balance,
            total_recharged=model.total_recharged,
            total_spent=model.total_spent,
            created_at=model.created_at,
            updated_at=model.updated_at,
            last_recharge_date=model.last_recharge_date,
            version=model.version,
        )

    def _entry_to_domain(self, model: WalletTransactionModel) -> WalletTransaction:
        return WalletTransaction(
            id=model.id,
            company_id=model.company_id,
            transaction_type=WalletTransactionType(model.transaction_type),
            amount=model.amount,
            balance_before=model.balance_before,
            balance_after=model.balance_after,
            created_at=model.created_at,
            description=model.description,
            related_entity_type=model.related_entity_type,
            related_entity_id=model.related_entity_id,
            counterparty_company_id=model.counterparty_company_id,
            correlation_id=model.correlation_id,
            created_by=model.created_by_id,
        )

    def _lock_wallets(self, company_ids: Sequence[uuid.UUID]) -> Dict[uuid.UUID, WalletModel]:
        ids = set(company_ids)
        found = set(CompanyModel.objects.filter(id__in=ids).values_list("id", flat=True))
        missing = ids - found
        if missing:
            raise CompanyNotFoundError(f"Company {sorted(map(str, missing))[0]} not found")
        for company_id in sorted(ids, key=str):
            WalletModel.objects.get_or_create(company_id=company_id)
        locked = WalletModel.objects.select_for_update().filter(company_id__in=ids).order_by("id")
        return {model.company_id: model for model in locked}

    @transactional
    def mutate(
        self,
        company_ids: Sequence[uuid.UUID],
        operation: LedgerOperation,
        after_apply: Optional[AfterMutation] = None,
    ) -> LedgerMutation:
        models = self._lock_wallets(company_ids)
        current = {company_id: self._to_domain(model) for company_id, model in models.items()}
        result = operation(current)

        for company_id, wallet in result.wallets.items():
            previous = current[company_id]
            updated = WalletModel.objects.filter(id=previous.id, version=previous.version).update(
                balance=wallet.balance,
                total_recharged=wallet.total_recharged,
                total_spent=wallet.total_spent,
                last_recharge_date=wallet.last_recharge_date,
                updated_at=wallet.updated_at,
                version=previous.version + 1,
            )
            if updated != 1:
                raise ConcurrentUpdateError(f"Wallet of company {company_id} was modified concurrently")

        WalletTransactionModel.objects.bulk_create(
            [
                WalletTransactionModel(
                    id=entry.id,
                    wallet_id=models[entry.company_id].id,
                    company_id=entry.company_id,
                    transaction_type=entry.transaction_type.value,
                    amount=entry.amount,
                    balance_before=entry.balance_before,
                    balance_after=entry.balance_after,
                    description=entry.description,
                    related_entity_type=entry.related_entity_type,
                    related_entity_id=entry.related_entity_id,
                    counterparty_company_id=entry.counterparty_company_id,
                    correlation_id=entry.correlation_id,
                    created_by_id=entry.created_by,
                    created_at=entry.created_at,
                )
                for entry in result.entries
            ]
        )

        if after_apply:
            after_apply(result)
        return result

    @sync_to_async
    def find_by_company(self, company_id: uuid.UUID) -> Optional[CompanyWallet]:
        model = WalletModel.objects.filter(company_id=company_id).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def list_wallets(self, company_ids: Optional[Set[uuid.UUID]] = None) -> List[CompanyWallet]:
        queryset = WalletModel.objects.select_related("company")
        if company_ids is not None:
            queryset = queryset.filter(company_id__in=company_ids)
        return [self._to_domain(model) for model in queryset]

    @sync_to_async
    def list_transactions(self, company_id: uuid.UUID, limit: int = 50) -> List[WalletTransaction]:
        queryset = WalletTransactionModel.objects.filter(company_id=company_id).order_by(
            "-created_at", "-balance_after"
        )
        return [self._entry_to_domain(model) for model in queryset[:limit]]

    @sync_to_async
    def ledger_balance(self, company_id: uuid.UUID) -> Decimal:
        total = WalletTransactionModel.objects.filter(company_id=company_id).aggregate(
            total=Sum(
                Case(
                    When(transaction_type__in=CREDIT_TYPES, then=F("amount")),
                    default=F("amount") * Value(Decimal("-1")),
                    output_field=DecimalField(max_digits=14, decimal_places=2),
                )
            )
        )["total"]
        return (total or Decimal("0")).quantize(Decimal("0.01"))
