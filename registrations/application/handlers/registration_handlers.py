"""
Registration handlers.
"""
import logging
from typing import List

from django.utils import timezone

from companies.application.services.scope_resolver import ScopeResolver
from core.domain.exceptions import (
    LicenseNotFoundError,
    PermissionDeniedError,
    RegistrationNotFoundError,
    ValidationError,
)
from core.infrastructure.events import event_bus
from licenses.application.services.license_access import LicenseAccess
from licenses.ports.license_repository import LicenseRepository
from registrations.application.commands.registration_commands import (
    AssignRegistrationLicenseCommand,
    RegisterDeviceCommand,
)
from registrations.application.dto.registration_dto import (
    DeviceRegistrationResultDTO,
    RegistrationDTO,
)
from registrations.application.queries.registration_queries import (
    CountAuthorizedDevicesQuery,
    GetRegistrationQuery,
    ListRegistrationsQuery,
)
from registrations.domain.events import DeviceRegistered, RegistrationLicenseAssigned
from registrations.ports.registration_repository import DeviceReport, RegistrationRepository

logger = logging.getLogger(__name__)


class RegisterDeviceHandler:
    """Handler for RegisterDeviceCommand."""

    def __init__(self, registration_repository: RegistrationRepository):
        self.registration_repository = registration_repository

    async def handle(self, command: RegisterDeviceCommand) -> DeviceRegistrationResultDTO:
        """
        Handle register device command.

        Reporting the same device twice updates it in place and stamps
        its last access; the header's device total is recomputed.

        Args:
            command: RegisterDeviceCommand

        Returns:
            DeviceRegistrationResultDTO

        Raises:
            ValidationError: If the tax ID, company name, product or device UID is missing
        """
        for name in ("tax_id", "company_name", "product", "device_uid"):
            if not (getattr(command, name) or "").strip():
                raise ValidationError(f"{name} is required")
        if len(command.tax_id.strip()) > 20:
            raise ValidationError("tax_id must be at most 20 characters")

        report = DeviceReport(
            tax_id=command.tax_id.strip(),
            company_name=command.company_name.strip(),
            product=command.product.strip(),
            device_uid=command.device_uid.strip(),
            version=command.version,
            module=command.module,
            users=command.users,
            os_info=command.os_info,
            notes=command.notes,
            computer_key=command.computer_key,
        )
        outcome = await self.registration_repository.register(report, timezone.now())
        logger.info(
            "Device %s %s under %s (%d devices)",
            outcome.device.device_uid,
            "registered" if outcome.created else "refreshed",
            outcome.header.tax_id,
            outcome.header.total_devices,
        )

        await event_bus.publish(
            DeviceRegistered(
                tax_id=outcome.header.tax_id,
                device_uid=outcome.device.device_uid,
                created=outcome.created,
            )
        )
        return DeviceRegistrationResultDTO(
            tax_id=outcome.header.tax_id,
            device_uid=outcome.device.device_uid,
            created=outcome.created,
            total_devices=outcome.header.total_devices,
            license_id=outcome.header.license_id,
            last_access=outcome.device.last_access,
        )


class AssignRegistrationLicenseHandler:
    """Handler for AssignRegistrationLicenseCommand."""

    def __init__(
        self,
        registration_repository: RegistrationRepository,
        license_repository: LicenseRepository,
        license_access: LicenseAccess,
    ):
        self.registration_repository = registration_repository
        self.license_repository = license_repository
        self.license_access = license_access

    async def handle(self, command: AssignRegistrationLicenseCommand) -> RegistrationDTO:
        """
        Handle assign license command.

        Raises:
            LicenseNotFoundError: If the license does not exist
            RegistrationNotFoundError: If no header has the tax ID
            PermissionDeniedError: If the license is outside the actor's scope
        """
        license = await self.license_repository.find_by_id(command.license_id)
        if not license:
            raise LicenseNotFoundError(f"License {command.license_id} not found")
        await self.license_access.ensure_visible(command.actor, license)

        header = await self.registration_repository.assign_license(
            command.tax_id, license.id, timezone.now()
        )
        logger.info("Registration %s assigned to license %s by %s", header.tax_id, license.id, command.actor)
        await event_bus.publish(
            RegistrationLicenseAssigned(tax_id=header.tax_id, license_id=license.id)
        )
        devices = await self.registration_repository.list_devices(header.tax_id)
        return RegistrationDTO.from_entity(header, devices)


class ListRegistrationsHandler:
    """Handler for ListRegistrationsQuery."""

    def __init__(self, registration_repository: RegistrationRepository, scope_resolver: ScopeResolver):
        self.registration_repository = registration_repository
        self.scope_resolver = scope_resolver

    async def handle(self, query: ListRegistrationsQuery) -> List[RegistrationDTO]:
        """
        Handle list registrations query.

        Unassigned headers are only visible to superadmins.
        """
        scope = await self.scope_resolver.company_ids(query.actor)
        headers = await self.registration_repository.list_headers(company_ids=scope)
        return [RegistrationDTO.from_entity(header) for header in headers]


class GetRegistrationHandler:
    """Handler for GetRegistrationQuery."""

    def __init__(
        self,
        registration_repository: RegistrationRepository,
        license_repository: LicenseRepository,
        license_access: LicenseAccess,
    ):
        self.registration_repository = registration_repository
        self.license_repository = license_repository
        self.license_access = license_access

    async def handle(self, query: GetRegistrationQuery) -> RegistrationDTO:
        """
        Handle get registration query.

        Raises:
            RegistrationNotFoundError: If no header has the tax ID
            PermissionDeniedError: If the header is outside the actor's scope
        """
        header = await self.registration_repository.find_header(query.tax_id)
        if not header:
            raise RegistrationNotFoundError(f"Registration {query.tax_id} not found")
        if not query.actor.is_superadmin:
            license = (
                await self.license_repository.find_by_id(header.license_id)
                if header.license_id
                else None
            )
            if not license:
                raise PermissionDeniedError("Registration is not assigned to a visible license")
            await self.license_access.ensure_visible(query.actor, license)

        devices = await self.registration_repository.list_devices(header.tax_id)
        return RegistrationDTO.from_entity(header, devices)


class CountAuthorizedDevicesHandler:
    """Handler for CountAuthorizedDevicesQuery."""

    def __init__(
        self,
        registration_repository: RegistrationRepository,
        license_repository: LicenseRepository,
        license_access: LicenseAccess,
    ):
        self.registration_repository = registration_repository
        self.license_repository = license_repository
        self.license_access = license_access

    async def handle(self, query: CountAuthorizedDevicesQuery) -> int:
        """
        Count devices with a binding key under the license's registrations.

        Raises:
            LicenseNotFoundError: If the license does not exist
        """
        license = await self.license_repository.find_by_id(query.license_id)
        if not license:
            raise LicenseNotFoundError(f"License {query.license_id} not found")
        await self.license_access.ensure_visible(query.actor, license)
        return await self.registration_repository.count_authorized_devices(license.id)
