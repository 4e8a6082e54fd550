"""
Scheduled license maintenance.

Run by the Celery beat tasks and the matching management commands.
A failure on one license is logged and the batch continues.
"""
import logging
from datetime import datetime, timedelta
from typing import Optional

from django.conf import settings
from django.utils import timezone

from billing.ports.transaction_repository import TransactionRepository
from companies.ports.client_repository import ClientRepository
from core.domain.exceptions import DomainException
from core.domain.value_objects import Actor, LicenseStatus, TransactionType
from core.infrastructure.events import event_bus
from core.metrics import licenses_expired_total, licenses_renewed_total
from licenses.application.dto.license_dto import MaintenanceReportDTO
from licenses.application.handlers.license_lifecycle_handlers import renewal_mutation
from licenses.application.services.license_access import billing_transaction_for
from licenses.domain.events import LicenseExpired, LicenseRenewed
from licenses.domain.license import License
from licenses.domain.services import LicenseStatusPolicy
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


def expire_mutation(now: datetime):
    """Store the computed status when it went to expired, else keep the license."""

    def expire(license: License) -> License:
        if (
            license.status != LicenseStatus.EXPIRED
            and LicenseStatusPolicy.compute_status(license, now) == LicenseStatus.EXPIRED
        ):
            return license.with_status(LicenseStatus.EXPIRED, now)
        return license

    return expire


class SweepLicenseStatusesHandler:
    """Materializes the computed expired status into stored status."""

    def __init__(self, license_repository: LicenseRepository):
        self.license_repository = license_repository

    async def handle(
        self, now: Optional[datetime] = None, dry_run: bool = False
    ) -> MaintenanceReportDTO:
        """
        Mark every lapsed license as expired.

        Args:
            now: Reference time (defaults to the current time)
            dry_run: Only report the licenses that would change

        Returns:
            MaintenanceReportDTO listing the affected licenses
        """
        now = now or timezone.now()
        lapsed = await self.license_repository.list_lapsed(now)
        if dry_run:
            return MaintenanceReportDTO(
                processed=0, failed=0, license_ids=[license.id for license in lapsed]
            )

        expired_ids = []
        failed = 0
        for license in lapsed:
            try:
                stored = await self.license_repository.apply(license.id, expire_mutation(now))
            except DomainException as e:
                failed += 1
                logger.error("Error expiring license %s: %s", license.id, e, exc_info=True)
                continue
            if stored.status != LicenseStatus.EXPIRED:
                continue
            expired_ids.append(stored.id)
            licenses_expired_total.inc()
            logger.info("Marked license %s as expired", stored.id)
            await event_bus.publish(
                LicenseExpired(license_id=stored.id, expiry_date=stored.expiry_date)
            )

        return MaintenanceReportDTO(processed=len(expired_ids), failed=failed, license_ids=expired_ids)


class ProcessAutomaticRenewalsHandler:
    """
    Renews active subscriptions with automatic renewal that expire
    within ``LICENSE_RENEWAL_WINDOW_DAYS``. Each renewal writes a
    pending renewal transaction in the same database transaction.
    """

    def __init__(
        self,
        license_repository: LicenseRepository,
        client_repository: ClientRepository,
        transaction_repository: TransactionRepository,
    ):
        self.license_repository = license_repository
        self.client_repository = client_repository
        self.transaction_repository = transaction_repository

    async def handle(
        self, now: Optional[datetime] = None, dry_run: bool = False
    ) -> MaintenanceReportDTO:
        now = now or timezone.now()
        until = now + timedelta(days=settings.LICENSE_RENEWAL_WINDOW_DAYS)
        candidates = await self.license_repository.list_renewal_candidates(until)
        if dry_run:
            return MaintenanceReportDTO(
                processed=0, failed=0, license_ids=[license.id for license in candidates]
            )

        actor = Actor.system()
        renewed_ids = []
        failed = 0
        for license in candidates:
            client = await self.client_repository.find_by_id(license.client_id)
            company_id = client.company_id if client else None

            def stage_renewal_charge(before: License, after: License, company_id=company_id) -> None:
                self.transaction_repository.stage(
                    billing_transaction_for(after, TransactionType.RENEWAL, company_id, actor, now)
                )

            try:
                renewed = await self.license_repository.apply(
                    license.id, renewal_mutation(now), after_apply=stage_renewal_charge
                )
            except DomainException as e:
                failed += 1
                logger.error("Error renewing license %s: %s", license.id, e, exc_info=True)
                continue
            renewed_ids.append(renewed.id)
            licenses_renewed_total.labels(trigger="automatic").inc()
            logger.info("License %s renewed automatically until %s", renewed.id, renewed.expiry_date)
            await event_bus.publish(
                LicenseRenewed(license_id=renewed.id, new_expiry=renewed.expiry_date, automatic=True)
            )

        return MaintenanceReportDTO(processed=len(renewed_ids), failed=failed, license_ids=renewed_ids)
