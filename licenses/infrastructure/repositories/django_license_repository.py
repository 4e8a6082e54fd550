"""
Django implementation of LicenseRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import uuid
from datetime import datetime
from typing import Callable, List, Optional, Set

from asgiref.sync import sync_to_async
from django.db.models import Q

from core.domain.exceptions import LicenseNotFoundError
from core.domain.value_objects import LicenseStatus, LicenseType
from core.infrastructure.database import transactional
from licenses.domain.license import License
from licenses.infrastructure.models import License as LicenseModel
from licenses.ports.license_repository import AfterApply, LicenseMutation, LicenseRepository

TERMINAL_STATUSES = [LicenseStatus.EXPIRED.value, LicenseStatus.SUSPENDED.value]


class DjangoLicenseRepository(LicenseRepository):
    """
    Django ORM implementation of LicenseRepository.

    Mutations go through ``apply``/``apply_by_activation_key`` which
    lock the row with ``select_for_update`` for the whole
    read-modify-write.
    """

    def to_domain(self, model: LicenseModel) -> License:
        """
        Convert Django model to domain entity.

        Args:
            model: Django License model

        Returns:
            License domain entity
        """
        return License(
            id=model.id,
            client_id=model.client_id,
            product_id=model.product_id,
            activation_key=model.activation_key,
            license_type=LicenseType(model.license_type),
            status=LicenseStatus(model.status),
            price=model.price,
            discount=model.discount,
            max_users=model.max_users,
            max_devices=model.max_devices,
            trial_days=model.trial_days,
            renewal_enabled=model.renewal_enabled,
            created_at=model.created_at,
            updated_at=model.updated_at,
            computer_key=model.computer_key,
            activation_date=model.activation_date,
            expiry_date=model.expiry_date,
            assigned_company_id=model.assigned_company_id,
            assigned_agent_id=model.assigned_agent_id,
            notes=model.notes,
        )

    def _write(self, model: LicenseModel, license: License) -> LicenseModel:
        """Copy entity state onto a model instance and persist it."""
        model.client_id = license.client_id
        model.product_id = license.product_id
        model.activation_key = license.activation_key
        model.computer_key = license.computer_key
        model.activation_date = license.activation_date
        model.expiry_date = license.expiry_date
        model.license_type = license.license_type.value
        model.status = license.status.value
        model.max_users = license.max_users
        model.max_devices = license.max_devices
        model.price = license.price
        model.discount = license.discount
        model.trial_days = license.trial_days
        model.renewal_enabled = license.renewal_enabled
        model.assigned_company_id = license.assigned_company_id
        model.assigned_agent_id = license.assigned_agent_id
        model.notes = license.notes
        model.created_at = license.created_at
        model.updated_at = license.updated_at
        model.save()
        return model

    def _locked(self, **lookup) -> LicenseModel:
        try:
            return LicenseModel.objects.select_for_update().get(**lookup)
        except LicenseModel.DoesNotExist:
            raise LicenseNotFoundError(f"License {next(iter(lookup.values()))} not found")

    def _apply_locked(
        self, model: LicenseModel, mutation: LicenseMutation, after_apply: Optional[AfterApply]
    ) -> License:
        before = self.to_domain(model)
        after = mutation(before)
        stored = self.to_domain(self._write(model, after))
        if after_apply:
            after_apply(before, stored)
        return stored

    @transactional
    def save(
        self, license: License, after_save: Optional[Callable[[License], None]] = None
    ) -> License:
        model = LicenseModel.objects.filter(id=license.id).first() or LicenseModel(id=license.id)
        stored = self.to_domain(self._write(model, license))
        if after_save:
            after_save(stored)
        return stored

    @sync_to_async
    def find_by_id(self, license_id: uuid.UUID) -> Optional[License]:
        """
        Find a license by ID.

        Args:
            license_id: License UUID

        Returns:
            License entity or None if not found
        """
        try:
            return self.to_domain(LicenseModel.objects.get(id=license_id))
        except LicenseModel.DoesNotExist:
            return None

    @sync_to_async
    def find_by_activation_key(self, activation_key: str) -> Optional[License]:
        model = LicenseModel.objects.filter(activation_key=activation_key).first()
        return self.to_domain(model) if model else None

    @sync_to_async
    def activation_key_exists(self, activation_key: str) -> bool:
        return LicenseModel.objects.filter(activation_key=activation_key).exists()

    @transactional
    def apply(
        self,
        license_id: uuid.UUID,
        mutation: LicenseMutation,
        after_apply: Optional[AfterApply] = None,
    ) -> License:
        return self._apply_locked(self._locked(id=license_id), mutation, after_apply)

    @transactional
    def apply_by_activation_key(
        self,
        activation_key: str,
        mutation: LicenseMutation,
        after_apply: Optional[AfterApply] = None,
    ) -> License:
        return self._apply_locked(
            self._locked(activation_key=activation_key), mutation, after_apply
        )

    @staticmethod
    def _scoped(queryset, company_ids: Optional[Set[uuid.UUID]]):
        if company_ids is None:
            return queryset
        return queryset.filter(
            Q(client__company_id__in=company_ids)
            | Q(assigned_company_id__in=company_ids)
            | Q(assigned_agent_id__in=company_ids)
        ).distinct()

    @sync_to_async
    def list(
        self,
        company_ids: Optional[Set[uuid.UUID]] = None,
        client_id: Optional[uuid.UUID] = None,
    ) -> List[License]:
        queryset = self._scoped(LicenseModel.objects.all(), company_ids)
        if client_id:
            queryset = queryset.filter(client_id=client_id)
        return [self.to_domain(model) for model in queryset]

    @sync_to_async
    def list_expiring(
        self,
        now: datetime,
        until: datetime,
        company_ids: Optional[Set[uuid.UUID]] = None,
    ) -> List[License]:
        queryset = (
            LicenseModel.objects.filter(expiry_date__gt=now, expiry_date__lte=until)
            .exclude(status__in=TERMINAL_STATUSES)
        )
        queryset = self._scoped(queryset, company_ids).order_by("expiry_date", "id")
        return [self.to_domain(model) for model in queryset]

    @sync_to_async
    def list_lapsed(self, now: datetime) -> List[License]:
        queryset = LicenseModel.objects.filter(expiry_date__lt=now).exclude(
            status__in=TERMINAL_STATUSES
        )
        return [self.to_domain(model) for model in queryset.order_by("expiry_date")]

    @sync_to_async
    def list_renewal_candidates(self, until: datetime) -> List[License]:
        queryset = LicenseModel.objects.filter(
            renewal_enabled=True,
            status=LicenseStatus.ACTIVE.value,
            license_type__in=[LicenseType.MONTHLY.value, LicenseType.ANNUAL.value],
            expiry_date__isnull=False,
            expiry_date__lte=until,
        )
        return [self.to_domain(model) for model in queryset.order_by("expiry_date")]
