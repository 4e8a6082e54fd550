"""
IssueLicenseHandler.

Handles the issue license command.
"""
import logging

from django.utils import timezone

from billing.domain.events import TransactionCreated
from billing.ports.transaction_repository import TransactionRepository
from companies.application.services.scope_resolver import ScopeResolver
from companies.ports.client_repository import ClientRepository
from core.domain.exceptions import (
    ClientNotFoundError,
    ProductNotFoundError,
    ValidationError,
)
from core.domain.value_objects import TransactionType
from core.infrastructure.events import event_bus
from core.metrics import licenses_issued_total
from licenses.application.commands.issue_license import IssueLicenseCommand
from licenses.application.dto.license_dto import LicenseDTO
from licenses.application.services.license_access import billing_transaction_for
from licenses.domain.events import LicenseIssued
from licenses.domain.license import License
from licenses.domain.services import ActivationKeyGenerator
from licenses.ports.license_repository import LicenseRepository
from products.ports.product_repository import ProductRepository

logger = logging.getLogger(__name__)

MAX_KEY_ATTEMPTS = 5


class IssueLicenseHandler:
    """Handler for IssueLicenseCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        client_repository: ClientRepository,
        product_repository: ProductRepository,
        transaction_repository: TransactionRepository,
        scope_resolver: ScopeResolver,
    ):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.client_repository = client_repository
        self.product_repository = product_repository
        self.transaction_repository = transaction_repository
        self.scope_resolver = scope_resolver

    async def _unique_key(self, license_type) -> str:
        for _ in range(MAX_KEY_ATTEMPTS):
            key = ActivationKeyGenerator.generate(license_type)
            if not await self.license_repository.activation_key_exists(key):
                return key
        raise ValidationError("Could not generate a unique activation key")

    async def handle(self, command: IssueLicenseCommand) -> LicenseDTO:
        """
        Handle issue license command.

        The license and, for a positive price, its pending activation
        transaction are written in one database transaction.

        Args:
            command: IssueLicenseCommand

        Returns:
            LicenseDTO of the new license

        Raises:
            ClientNotFoundError: If the client does not exist
            ProductNotFoundError: If the product does not exist
            PermissionDeniedError: If the client is outside the actor's scope
            ValidationError: If the license fields are invalid
        """
        client = await self.client_repository.find_by_id(command.client_id)
        if not client:
            raise ClientNotFoundError(f"Client {command.client_id} not found")
        product = await self.product_repository.find_by_id(command.product_id)
        if not product:
            raise ProductNotFoundError(f"Product {command.product_id} not found")

        await self.scope_resolver.ensure_visible(command.actor, client.company_id)

        license_type = command.license_type or product.license_type
        now = timezone.now()
        try:
            license = License.create(
                client_id=client.id,
                product_id=product.id,
                activation_key=await self._unique_key(license_type),
                license_type=license_type,
                price=product.price if command.price is None else command.price,
                discount=product.discount if command.discount is None else command.discount,
                max_users=command.max_users or product.max_users,
                max_devices=command.max_devices or product.max_devices,
                trial_days=product.trial_days,
                renewal_enabled=command.renewal_enabled,
                expiry_date=command.expiry_date,
                assigned_company_id=command.assigned_company_id,
                assigned_agent_id=command.assigned_agent_id,
                notes=command.notes,
                now=now,
            )
        except ValueError as e:
            raise ValidationError(str(e)) from e

        billing = []

        def stage_activation_charge(saved: License) -> None:
            if saved.final_price > 0:
                billing.append(
                    self.transaction_repository.stage(
                        billing_transaction_for(
                            saved, TransactionType.ACTIVATION, client.company_id, command.actor, now
                        )
                    )
                )

        saved = await self.license_repository.save(license, after_save=stage_activation_charge)
        licenses_issued_total.labels(license_type=license_type.value).inc()
        logger.info(
            "Issued %s license %s for client %s", license_type, saved.id, client.id
        )

        await event_bus.publish(
            LicenseIssued(
                license_id=saved.id,
                client_id=saved.client_id,
                product_id=saved.product_id,
                license_type=license_type.value,
            )
        )
        for transaction in billing:
            await event_bus.publish(
                TransactionCreated(
                    transaction_id=transaction.id,
                    license_id=saved.id,
                    transaction_type=transaction.transaction_type.value,
                    final_amount=transaction.final_amount,
                )
            )

        return LicenseDTO.from_entity(saved, now)
