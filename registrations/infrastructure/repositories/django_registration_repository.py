"""
Django implementation of RegistrationRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import uuid
from datetime import datetime
from typing import List, Optional, Set

from asgiref.sync import sync_to_async
from django.db.models import Q

from core.domain.exceptions import RegistrationNotFoundError
from core.infrastructure.database import transactional
from registrations.domain.registration import DeviceRegistration, RegistrationHeader
from registrations.infrastructure.models import DeviceRegistration as DeviceModel
from registrations.infrastructure.models import RegistrationHeader as HeaderModel
from registrations.ports.registration_repository import (
    DeviceReport,
    RegistrationOutcome,
    RegistrationRepository,
)


class DjangoRegistrationRepository(RegistrationRepository):
    """Django ORM implementation of RegistrationRepository."""

    def _to_domain(self, model: HeaderModel) -> RegistrationHeader:
        return RegistrationHeader(
            tax_id=model.tax_id,
            company_name=model.company_name,
            product=model.product,
            version=model.version,
            module=model.module,
            users=model.users,
            total_devices=model.total_devices,
            license_id=model.license_id,
            total_orders=model.total_orders,
            total_sales=model.total_sales,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _device_to_domain(self, model: DeviceModel) -> DeviceRegistration:
        return DeviceRegistration(
            id=model.id,
            tax_id=model.header_id,
            device_uid=model.device_uid,
            os_info=model.os_info,
            notes=model.notes,
            activation_date=model.activation_date,
            last_access=model.last_access,
            orders=model.orders,
            sales=model.sales,
            computer_key=model.computer_key,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @transactional
    def register(self, report: DeviceReport, now: datetime) -> RegistrationOutcome:
        header, _ = HeaderModel.objects.select_for_update().get_or_create(
            tax_id=report.tax_id,
            defaults={
                "company_name": report.company_name,
                "product": report.product,
                "created_at": now,
            },
        )
        header.company_name = report.company_name
        header.product = report.product
        header.version = report.version or header.version
        header.module = report.module or header.module
        if report.users is not None:
            header.users = report.users

        device, created = DeviceModel.objects.get_or_create(
            header=header,
            device_uid=report.device_uid,
            defaults={"activation_date": now, "created_at": now},
        )
        device.os_info = report.os_info or device.os_info
        device.notes = report.notes or device.notes
        if report.computer_key:
            device.computer_key = report.computer_key
        device.last_access = now
        device.updated_at = now
        device.save()

        header.total_devices = header.devices.count()
        header.updated_at = now
        header.save()
        return RegistrationOutcome(
            header=self._to_domain(header),
            device=self._device_to_domain(device),
            created=created,
        )

    @sync_to_async
    def find_header(self, tax_id: str) -> Optional[RegistrationHeader]:
        model = HeaderModel.objects.filter(tax_id=tax_id).first()
        return self._to_domain(model) if model else None

    @transactional
    def assign_license(
        self, tax_id: str, license_id: uuid.UUID, now: datetime
    ) -> RegistrationHeader:
        try:
            model = HeaderModel.objects.select_for_update().get(tax_id=tax_id)
        except HeaderModel.DoesNotExist:
            raise RegistrationNotFoundError(f"Registration {tax_id} not found")
        header = self._to_domain(model).assign_license(license_id, now)
        model.license_id = header.license_id
        model.updated_at = header.updated_at
        model.save(update_fields=["license", "updated_at"])
        return header

    @sync_to_async
    def list_headers(
        self, company_ids: Optional[Set[uuid.UUID]] = None
    ) -> List[RegistrationHeader]:
        queryset = HeaderModel.objects.all()
        if company_ids is not None:
            queryset = queryset.filter(
                Q(license__client__company_id__in=company_ids)
                | Q(license__assigned_company_id__in=company_ids)
            ).distinct()
        return [self._to_domain(model) for model in queryset]

    @sync_to_async
    def list_devices(self, tax_id: str) -> List[DeviceRegistration]:
        queryset = DeviceModel.objects.filter(header_id=tax_id)
        return [self._device_to_domain(model) for model in queryset]

    @sync_to_async
    def count_authorized_devices(self, license_id: uuid.UUID) -> int:
        return (
            DeviceModel.objects.filter(header__license_id=license_id)
            .exclude(computer_key__isnull=True)
            .exclude(computer_key="")
            .count()
        )
