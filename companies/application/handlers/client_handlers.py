"""
Client handlers.
"""
import logging
from typing import List

from companies.application.commands.company_commands import (
    CreateClientCommand,
    UpdateClientStatusCommand,
)
from companies.application.dto.company_dto import ClientDTO
from companies.application.handlers.company_handlers import ensure_can_manage
from companies.application.queries.company_queries import GetClientQuery, ListClientsQuery
from companies.application.services.scope_resolver import ScopeResolver
from companies.domain.client import Client
from companies.domain.events import ClientStatusChanged
from companies.ports.client_repository import ClientRepository
from companies.ports.company_repository import CompanyRepository
from core.domain.exceptions import (
    ClientNotFoundError,
    CompanyNotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from core.infrastructure.events import event_bus

logger = logging.getLogger(__name__)


class CreateClientHandler:
    """Handler for CreateClientCommand."""

    def __init__(
        self,
        client_repository: ClientRepository,
        company_repository: CompanyRepository,
        scope_resolver: ScopeResolver,
    ):
        self.client_repository = client_repository
        self.company_repository = company_repository
        self.scope_resolver = scope_resolver

    async def handle(self, command: CreateClientCommand) -> ClientDTO:
        """
        Handle create client command.

        New clients start out pending validation.

        Raises:
            CompanyNotFoundError: If the owning company does not exist
            ValidationError: For a missing name or a malformed email
            PermissionDeniedError: If the company is outside the actor's scope
        """
        if command.company_id is None:
            if not command.actor.is_superadmin:
                raise PermissionDeniedError("Only superadmins can create clients without a company")
        else:
            company = await self.company_repository.find_by_id(command.company_id)
            if not company:
                raise CompanyNotFoundError(f"Company {command.company_id} not found")
            await self.scope_resolver.ensure_visible(command.actor, company.id)

        try:
            client = Client.create(
                name=command.name,
                email=command.email,
                company_id=command.company_id,
                contact_info=command.contact_info,
                is_multi_site=command.is_multi_site,
                is_multi_user=command.is_multi_user,
            )
        except ValueError as e:
            raise ValidationError(str(e))

        saved = await self.client_repository.save(client)
        logger.info("Client %s created for company %s by %s", saved.id, saved.company_id, command.actor)
        return ClientDTO.from_entity(saved)


class UpdateClientStatusHandler:
    """Handler for UpdateClientStatusCommand."""

    def __init__(self, client_repository: ClientRepository, scope_resolver: ScopeResolver):
        self.client_repository = client_repository
        self.scope_resolver = scope_resolver

    async def handle(self, command: UpdateClientStatusCommand) -> ClientDTO:
        """
        Handle update client status command.

        Raises:
            ClientNotFoundError: If the client does not exist
        """
        ensure_can_manage(command.actor)
        client = await self.client_repository.find_by_id(command.client_id)
        if not client:
            raise ClientNotFoundError(f"Client {command.client_id} not found")
        await self.scope_resolver.ensure_visible(command.actor, client.company_id)

        saved = await self.client_repository.save(client.with_status(command.status))
        logger.info("Client %s moved from %s to %s by %s", saved.id, client.status, saved.status, command.actor)
        await event_bus.publish(ClientStatusChanged(client_id=saved.id, status=saved.status.value))
        return ClientDTO.from_entity(saved)


class ListClientsHandler:
    """Handler for ListClientsQuery."""

    def __init__(self, client_repository: ClientRepository, scope_resolver: ScopeResolver):
        self.client_repository = client_repository
        self.scope_resolver = scope_resolver

    async def handle(self, query: ListClientsQuery) -> List[ClientDTO]:
        scope = await self.scope_resolver.company_ids(query.actor)
        clients = await self.client_repository.list(company_ids=scope, status=query.status)
        return [ClientDTO.from_entity(client) for client in clients]


class GetClientHandler:
    """Handler for GetClientQuery."""

    def __init__(self, client_repository: ClientRepository, scope_resolver: ScopeResolver):
        self.client_repository = client_repository
        self.scope_resolver = scope_resolver

    async def handle(self, query: GetClientQuery) -> ClientDTO:
        client = await self.client_repository.find_by_id(query.client_id)
        if not client:
            raise ClientNotFoundError(f"Client {query.client_id} not found")
        await self.scope_resolver.ensure_visible(query.actor, client.company_id)
        return ClientDTO.from_entity(client)
