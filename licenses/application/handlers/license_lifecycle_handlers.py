"""
License lifecycle handlers.

Handlers for renew, suspend and resume license commands.
"""
import logging

from django.utils import timezone

from billing.domain.events import TransactionCreated
from billing.ports.transaction_repository import TransactionRepository
from core.domain.exceptions import InvalidLicenseStatusError, LicenseNotFoundError
from core.domain.value_objects import TransactionType
from core.infrastructure.events import event_bus
from core.metrics import licenses_renewed_total
from licenses.application.commands.renew_license import RenewLicenseCommand
from licenses.application.commands.resume_license import ResumeLicenseCommand
from licenses.application.commands.suspend_license import SuspendLicenseCommand
from licenses.application.dto.license_dto import LicenseDTO
from licenses.application.services.license_access import LicenseAccess, billing_transaction_for
from licenses.domain.events import LicenseRenewed, LicenseResumed, LicenseSuspended
from licenses.domain.license import License
from licenses.domain.services import ExpiryCalculator
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


def renewal_mutation(now):
    """Mutation extending a license by one term of its type."""

    def renew(license: License) -> License:
        new_expiry = ExpiryCalculator.next_term(license, now)
        if new_expiry is None:
            raise InvalidLicenseStatusError(
                f"{license.license_type} licenses do not expire and cannot be renewed"
            )
        return license.renew(new_expiry, now)

    return renew


class RenewLicenseHandler:
    """Handler for RenewLicenseCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        transaction_repository: TransactionRepository,
        license_access: LicenseAccess,
    ):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.transaction_repository = transaction_repository
        self.license_access = license_access

    async def handle(self, command: RenewLicenseCommand) -> LicenseDTO:
        """
        Handle renew license command.

        The new expiry and the pending renewal transaction are written
        in one database transaction.

        Args:
            command: RenewLicenseCommand

        Returns:
            LicenseDTO of the renewed license

        Raises:
            LicenseNotFoundError: If license not found
            InvalidLicenseStatusError: If the license cannot be renewed
        """
        license = await self.license_repository.find_by_id(command.license_id)
        if not license:
            raise LicenseNotFoundError(f"License {command.license_id} not found")
        company_id = await self.license_access.ensure_visible(command.actor, license)

        now = timezone.now()
        billing = []

        def stage_renewal_charge(before: License, after: License) -> None:
            billing.append(
                self.transaction_repository.stage(
                    billing_transaction_for(
                        after, TransactionType.RENEWAL, company_id, command.actor, now
                    )
                )
            )

        renewed = await self.license_repository.apply(
            license.id, renewal_mutation(now), after_apply=stage_renewal_charge
        )
        licenses_renewed_total.labels(trigger="manual").inc()
        logger.info("License %s renewed until %s", renewed.id, renewed.expiry_date)

        await event_bus.publish(
            LicenseRenewed(license_id=renewed.id, new_expiry=renewed.expiry_date)
        )
        for transaction in billing:
            await event_bus.publish(
                TransactionCreated(
                    transaction_id=transaction.id,
                    license_id=renewed.id,
                    transaction_type=transaction.transaction_type.value,
                    final_amount=transaction.final_amount,
                )
            )

        return LicenseDTO.from_entity(renewed, now)


class SuspendLicenseHandler:
    """Handler for SuspendLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository, license_access: LicenseAccess):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.license_access = license_access

    async def handle(self, command: SuspendLicenseCommand) -> LicenseDTO:
        """
        Handle suspend license command.

        Args:
            command: SuspendLicenseCommand

        Returns:
            LicenseDTO of the suspended license

        Raises:
            LicenseNotFoundError: If license not found
        """
        license = await self.license_repository.find_by_id(command.license_id)
        if not license:
            raise LicenseNotFoundError(f"License {command.license_id} not found")
        await self.license_access.ensure_visible(command.actor, license)

        now = timezone.now()
        suspended = await self.license_repository.apply(
            license.id, lambda current: current.suspend(now)
        )
        logger.info("License %s suspended by %s", suspended.id, command.actor)

        await event_bus.publish(LicenseSuspended(license_id=suspended.id))

        return LicenseDTO.from_entity(suspended, now)


class ResumeLicenseHandler:
    """Handler for ResumeLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository, license_access: LicenseAccess):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.license_access = license_access

    async def handle(self, command: ResumeLicenseCommand) -> LicenseDTO:
        """
        Handle resume license command.

        Args:
            command: ResumeLicenseCommand

        Returns:
            LicenseDTO of the resumed license

        Raises:
            LicenseNotFoundError: If license not found
        """
        license = await self.license_repository.find_by_id(command.license_id)
        if not license:
            raise LicenseNotFoundError(f"License {command.license_id} not found")
        await self.license_access.ensure_visible(command.actor, license)

        now = timezone.now()
        resumed = await self.license_repository.apply(
            license.id, lambda current: current.resume(now)
        )
        logger.info("License %s resumed by %s", resumed.id, command.actor)

        await event_bus.publish(
            LicenseResumed(license_id=resumed.id, status=resumed.status.value)
        )

        return LicenseDTO.from_entity(resumed, now)
