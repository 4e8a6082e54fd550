"""
Access checks and billing rows shared by the license handlers.
"""
import uuid
from datetime import datetime
from typing import Optional

from billing.domain.transaction import Transaction
from companies.application.services.scope_resolver import ScopeResolver
from companies.ports.client_repository import ClientRepository
from core.domain.exceptions import ClientNotFoundError
from core.domain.value_objects import Actor, TransactionType
from licenses.domain.license import License


class LicenseAccess:
    """Resolves the owning company of a license and checks operator scope."""

    def __init__(self, client_repository: ClientRepository, scope_resolver: ScopeResolver):
        self.client_repository = client_repository
        self.scope_resolver = scope_resolver

    async def client_company_id(self, license: License) -> Optional[uuid.UUID]:
        client = await self.client_repository.find_by_id(license.client_id)
        if not client:
            raise ClientNotFoundError(f"Client {license.client_id} not found")
        return client.company_id

    async def ensure_visible(self, actor: Actor, license: License) -> Optional[uuid.UUID]:
        """
        Check that ``actor`` may see ``license``.

        Returns:
            The company owning the license's client

        Raises:
            PermissionDeniedError: If the license is outside the actor's scope
        """
        company_id = await self.client_company_id(license)
        await self.scope_resolver.ensure_visible(
            actor, company_id, license.assigned_company_id, license.assigned_agent_id
        )
        return company_id


def billing_transaction_for(
    license: License,
    transaction_type: TransactionType,
    client_company_id: Optional[uuid.UUID],
    actor: Actor,
    now: datetime,
) -> Transaction:
    """
    Pending billing transaction charging the license price.

    The discount is capped at the price so the final amount is never
    negative. The charge is booked on the handling company when one is
    assigned, otherwise on the client's company.
    """
    return Transaction.create(
        license_id=license.id,
        client_id=license.client_id,
        company_id=license.assigned_company_id or client_company_id,
        transaction_type=transaction_type,
        amount=license.price,
        discount=min(license.discount, license.price),
        notes=f"Automatic {transaction_type} charge for license {license.activation_key}",
        modified_by=actor.operator_id,
        now=now,
    )
