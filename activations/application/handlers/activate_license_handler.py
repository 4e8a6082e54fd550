"""
Device-facing activation handlers.

Activation and validation never raise domain errors to the caller:
every attempt ends in a typed result and an activation log entry.
"""
import logging
from typing import Any, Dict, Optional

from django.utils import timezone

from activations.application.commands.activate_license import (
    ActivateLicenseCommand,
    ValidateLicenseCommand,
)
from activations.application.dto.activation_dto import ActivationLogDTO, ValidationResultDTO
from activations.application.queries.list_activation_logs import ListActivationLogsQuery
from activations.domain.activation import ActivationFailure, ActivationResult
from activations.domain.activation_log import ActivationLogEntry
from activations.domain.events import ActivationFailed, LicenseActivated
from activations.ports.activation_log_repository import ActivationLogRepository
from core.domain.exceptions import (
    DomainException,
    LicenseExpiredError,
    LicenseNotFoundError,
    LicenseSuspendedError,
    PermissionDeniedError,
)
from core.domain.value_objects import ActivationKeyType, LicenseStatus
from core.infrastructure.audit import AuditSink
from core.infrastructure.events import event_bus
from core.metrics import license_activations_total
from licenses.application.services.license_access import LicenseAccess
from licenses.domain.license import License
from licenses.domain.services import ExpiryCalculator, LicenseStatusPolicy
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class ActivateLicenseHandler:
    """Handler for ActivateLicenseCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        activation_log_repository: ActivationLogRepository,
    ):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.audit = AuditSink("activation_log", activation_log_repository.add)

    async def handle(self, command: ActivateLicenseCommand) -> ActivationResult:
        """
        Handle activate license command.

        The license row is locked while the status is checked and the
        device is bound, so two devices racing for the same key cannot
        both win.

        Args:
            command: ActivateLicenseCommand

        Returns:
            ActivationResult: the updated license on success, otherwise
            NOT_FOUND, EXPIRED, SUSPENDED or ALREADY_BOUND
        """
        now = timezone.now()
        seen: Dict[str, Any] = {}

        def bind(license: License) -> License:
            seen["license_id"] = license.id
            seen["first_activation"] = license.activation_date is None
            status = LicenseStatusPolicy.compute_status(license, now)
            if status == LicenseStatus.SUSPENDED:
                raise LicenseSuspendedError(f"License {license.activation_key} is suspended")
            if status == LicenseStatus.EXPIRED:
                raise LicenseExpiredError(f"License {license.activation_key} has expired")
            expiry = ExpiryCalculator.calculate(license.license_type, now, license.trial_days)
            return license.bind_device(command.computer_key, now, expiry)

        try:
            license = await self.license_repository.apply_by_activation_key(
                command.activation_key, bind
            )
            result = ActivationResult.succeeded(license, now)
        except DomainException as e:
            result = ActivationResult.failed(ActivationFailure.from_exception(e), e.message)

        await self.audit.record(
            ActivationLogEntry(
                activation_key=command.activation_key,
                key_type=ActivationKeyType.ACTIVATION,
                success=result.ok,
                license_id=seen.get("license_id"),
                device_info=command.device_info,
                ip_address=command.ip_address,
                user_agent=command.user_agent,
                error_message="" if result.ok else result.message,
                created_at=now,
            )
        )
        license_activations_total.labels(result="success" if result.ok else str(result.failure)).inc()

        if result.ok:
            logger.info("License %s activated on %s", result.license.id, command.computer_key)
            await event_bus.publish(
                LicenseActivated(
                    license_id=result.license.id,
                    computer_key=command.computer_key,
                    first_activation=seen.get("first_activation", False),
                )
            )
        else:
            logger.warning(
                "Activation refused for key %s: %s", command.activation_key, result.failure
            )
            await event_bus.publish(
                ActivationFailed(
                    activation_key=command.activation_key,
                    reason=str(result.failure),
                    license_id=seen.get("license_id"),
                )
            )
        return result


class ValidateLicenseHandler:
    """Handler for ValidateLicenseCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        activation_log_repository: ActivationLogRepository,
    ):
        self.license_repository = license_repository
        self.audit = AuditSink("activation_log", activation_log_repository.add)

    @staticmethod
    def _check(license: Optional[License], command: ValidateLicenseCommand, now) -> ValidationResultDTO:
        if license is None:
            return ValidationResultDTO(
                valid=False,
                status=None,
                expiry_date=None,
                message="License not found",
                error_code=str(ActivationFailure.NOT_FOUND),
            )
        status = LicenseStatusPolicy.compute_status(license, now)
        failure = None
        message = "License is valid"
        if status == LicenseStatus.SUSPENDED:
            failure, message = ActivationFailure.SUSPENDED, "License is suspended"
        elif status == LicenseStatus.EXPIRED:
            failure, message = ActivationFailure.EXPIRED, "License has expired"
        elif not status.is_usable:
            failure, message = ActivationFailure.INVALID_STATUS, "License has not been activated"
        elif command.computer_key and license.is_bound_to_other_device(command.computer_key):
            failure, message = ActivationFailure.ALREADY_BOUND, "License is bound to another device"
        return ValidationResultDTO(
            valid=failure is None,
            status=status.value,
            expiry_date=license.expiry_date,
            message=message,
            error_code=str(failure) if failure else None,
        )

    async def handle(self, command: ValidateLicenseCommand) -> ValidationResultDTO:
        """
        Handle validate license command.

        Args:
            command: ValidateLicenseCommand

        Returns:
            ValidationResultDTO; ``valid`` is True when the computed status
            is active or demo and the device matches
        """
        now = timezone.now()
        license = await self.license_repository.find_by_activation_key(command.activation_key)
        result = self._check(license, command, now)

        await self.audit.record(
            ActivationLogEntry(
                activation_key=command.activation_key,
                key_type=ActivationKeyType.COMPUTER,
                success=result.valid,
                license_id=license.id if license else None,
                device_info=command.device_info,
                ip_address=command.ip_address,
                user_agent=command.user_agent,
                error_message="" if result.valid else result.message,
                created_at=now,
            )
        )
        return result


class ListActivationLogsHandler:
    """Handler for ListActivationLogsQuery."""

    def __init__(
        self,
        activation_log_repository: ActivationLogRepository,
        license_repository: LicenseRepository,
        license_access: LicenseAccess,
    ):
        self.activation_log_repository = activation_log_repository
        self.license_repository = license_repository
        self.license_access = license_access

    async def handle(self, query: ListActivationLogsQuery):
        """
        Handle list activation logs query.

        Only superadmins may list logs across all licenses.

        Raises:
            LicenseNotFoundError: If the license does not exist
            PermissionDeniedError: If the actor may not see the logs
        """
        if query.license_id:
            license = await self.license_repository.find_by_id(query.license_id)
            if not license:
                raise LicenseNotFoundError(f"License {query.license_id} not found")
            await self.license_access.ensure_visible(query.actor, license)
        elif not query.actor.is_superadmin:
            raise PermissionDeniedError("Activation logs must be listed per license")

        entries = await self.activation_log_repository.list(
            license_id=query.license_id, limit=query.limit
        )
        return [
            ActivationLogDTO(
                id=entry.id,
                license_id=entry.license_id,
                activation_key=entry.activation_key,
                key_type=entry.key_type.value,
                result=entry.result,
                device_info=entry.device_info,
                ip_address=entry.ip_address,
                user_agent=entry.user_agent,
                error_message=entry.error_message,
                created_at=entry.created_at,
            )
            for entry in entries
        ]
