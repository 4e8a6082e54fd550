"""
Django implementation of TransactionRepository port.
"""
import uuid
from datetime import datetime
from typing import List, Optional, Set

from asgiref.sync import sync_to_async

from billing.domain.transaction import Transaction
from billing.infrastructure.models import Transaction as TransactionModel
from billing.ports.transaction_repository import TransactionMutation, TransactionRepository
from core.domain.exceptions import TransactionNotFoundError
from core.domain.value_objects import TransactionStatus, TransactionType
from core.infrastructure.database import transactional


class DjangoTransactionRepository(TransactionRepository):
    """Django ORM implementation of TransactionRepository."""

    def _to_domain(self, model: TransactionModel) -> Transaction:
        return Transaction(
            id=model.id,
            license_id=model.license_id,
            client_id=model.client_id,
            company_id=model.company_id,
            transaction_type=TransactionType(model.transaction_type),
            amount=model.amount,
            discount=model.discount,
            status=TransactionStatus(model.status),
            created_at=model.created_at,
            updated_at=model.updated_at,
            payment_method=model.payment_method,
            payment_date=model.payment_date,
            credits_used=model.credits_used,
            notes=model.notes,
            modified_by=model.modified_by_id,
        )

    def stage(self, transaction: Transaction) -> Transaction:
        model, _ = TransactionModel.objects.update_or_create(
            id=transaction.id,
            defaults={
                "license_id": transaction.license_id,
                "client_id": transaction.client_id,
                "company_id": transaction.company_id,
                "transaction_type": transaction.transaction_type.value,
                "amount": transaction.amount,
                "discount": transaction.discount,
                "final_amount": transaction.final_amount,
                "payment_method": transaction.payment_method,
                "status": transaction.status.value,
                "payment_date": transaction.payment_date,
                "credits_used": transaction.credits_used,
                "notes": transaction.notes,
                "modified_by_id": transaction.modified_by,
                "created_at": transaction.created_at,
                "updated_at": transaction.updated_at,
            },
        )
        return self._to_domain(model)

    @transactional
    def save(self, transaction: Transaction) -> Transaction:
        return self.stage(transaction)

    @sync_to_async
    def find_by_id(self, transaction_id: uuid.UUID) -> Optional[Transaction]:
        try:
            return self._to_domain(TransactionModel.objects.get(id=transaction_id))
        except TransactionModel.DoesNotExist:
            return None

    def apply_locked(self, transaction_id: uuid.UUID, mutation: TransactionMutation) -> Transaction:
        try:
            model = TransactionModel.objects.select_for_update().get(id=transaction_id)
        except TransactionModel.DoesNotExist:
            raise TransactionNotFoundError(f"Transaction {transaction_id} not found")
        return self.stage(mutation(self._to_domain(model)))

    @transactional
    def apply(self, transaction_id: uuid.UUID, mutation: TransactionMutation) -> Transaction:
        return self.apply_locked(transaction_id, mutation)

    @sync_to_async
    def list(
        self,
        company_ids: Optional[Set[uuid.UUID]] = None,
        license_id: Optional[uuid.UUID] = None,
        status: Optional[str] = None,
        since: Optional[datetime] = None,
    ) -> List[Transaction]:
        queryset = TransactionModel.objects.all()
        if company_ids is not None:
            queryset = queryset.filter(company_id__in=company_ids)
        if license_id:
            queryset = queryset.filter(license_id=license_id)
        if status:
            queryset = queryset.filter(status=status)
        if since:
            queryset = queryset.filter(created_at__gte=since)
        return [self._to_domain(model) for model in queryset]
