"""
Company hierarchy handlers.
"""
import logging
from typing import List, Optional

from companies.application.commands.company_commands import (
    CreateCompanyCommand,
    UpdateCompanyCommand,
)
from companies.application.dto.company_dto import CompanyDTO
from companies.application.queries.company_queries import (
    GetCompanyQuery,
    ListCompaniesQuery,
    ListDescendantsQuery,
)
from companies.application.services.scope_resolver import ScopeResolver
from companies.domain.company import Company
from companies.domain.events import CompanyCreated, CompanyUpdated
from companies.domain.services import CompanyTypePolicy
from companies.ports.company_repository import CompanyRepository
from core.domain.exceptions import (
    CompanyNotFoundError,
    InvalidCompanyHierarchyError,
    PermissionDeniedError,
    ValidationError,
)
from core.domain.value_objects import Actor, Role
from core.infrastructure.events import event_bus

logger = logging.getLogger(__name__)

MANAGE_ROLES = (Role.SUPERADMIN, Role.ADMIN, Role.RESELLER)


def ensure_can_manage(actor: Actor) -> None:
    if actor.role not in MANAGE_ROLES:
        raise PermissionDeniedError(f"Role {actor.role} cannot manage companies or clients")


class _CompanyHandler:
    def __init__(self, company_repository: CompanyRepository, scope_resolver: ScopeResolver):
        """Initialize handler with repositories."""
        self.company_repository = company_repository
        self.scope_resolver = scope_resolver

    async def _get(self, company_id) -> Company:
        company = await self.company_repository.find_by_id(company_id)
        if not company:
            raise CompanyNotFoundError(f"Company {company_id} not found")
        return company

    async def _parent(self, actor: Actor, parent_id) -> Optional[Company]:
        if parent_id is None:
            if not actor.is_superadmin:
                raise PermissionDeniedError("Only superadmins can create root companies")
            return None
        parent = await self._get(parent_id)
        await self.scope_resolver.ensure_visible(actor, parent.id)
        return parent


class CreateCompanyHandler(_CompanyHandler):
    """Handler for CreateCompanyCommand."""

    async def handle(self, command: CreateCompanyCommand) -> CompanyDTO:
        """
        Handle create company command.

        Args:
            command: CreateCompanyCommand

        Returns:
            CompanyDTO of the new company

        Raises:
            CompanyNotFoundError: If the parent does not exist
            InvalidCompanyHierarchyError: If the type may not sit under the parent
            PermissionDeniedError: If the parent is outside the actor's scope
        """
        ensure_can_manage(command.actor)
        parent = await self._parent(command.actor, command.parent_id)
        CompanyTypePolicy.check_parent(command.company_type, parent)

        try:
            company = Company.create(
                name=command.name,
                company_type=command.company_type,
                parent_id=parent.id if parent else None,
                status=command.status,
                contact_info=command.contact_info,
            )
        except ValueError as e:
            raise ValidationError(str(e))

        saved = await self.company_repository.save(company)
        logger.info("Company %s (%s) created under %s by %s", saved.id, saved.company_type, saved.parent_id, command.actor)
        await event_bus.publish(
            CompanyCreated(
                company_id=saved.id,
                company_type=saved.company_type.value,
                parent_id=saved.parent_id,
            )
        )
        return CompanyDTO.from_entity(saved)


class UpdateCompanyHandler(_CompanyHandler):
    """Handler for UpdateCompanyCommand."""

    async def handle(self, command: UpdateCompanyCommand) -> CompanyDTO:
        """
        Handle update company command.

        Moving a company re-checks the parent type rule and refuses any
        parent that lies inside the company's own subtree.

        Raises:
            CompanyNotFoundError: If the company or the new parent does not exist
            InvalidCompanyHierarchyError: For a disallowed parent type or a cycle
        """
        ensure_can_manage(command.actor)
        company = await self._get(command.company_id)
        await self.scope_resolver.ensure_visible(command.actor, company.id)

        try:
            updated = company.update(
                name=command.name, status=command.status, contact_info=command.contact_info
            )
        except ValueError as e:
            raise ValidationError(str(e))

        if command.change_parent and command.parent_id != company.parent_id:
            hierarchy = await self.scope_resolver.hierarchy()
            if hierarchy.would_create_cycle(company.id, command.parent_id):
                raise InvalidCompanyHierarchyError(
                    f"Company {company.id} cannot be moved under its own subtree"
                )
            parent = await self._parent(command.actor, command.parent_id)
            CompanyTypePolicy.check_parent(company.company_type, parent)
            updated = updated.move_under(command.parent_id)

        saved = await self.company_repository.save(updated)
        logger.info("Company %s updated by %s", saved.id, command.actor)
        await event_bus.publish(CompanyUpdated(company_id=saved.id))
        return CompanyDTO.from_entity(saved)


class ListCompaniesHandler(_CompanyHandler):
    """Handler for ListCompaniesQuery."""

    async def handle(self, query: ListCompaniesQuery) -> List[CompanyDTO]:
        scope = await self.scope_resolver.company_ids(query.actor)
        companies = await self.company_repository.list(company_ids=scope)
        return [CompanyDTO.from_entity(company) for company in companies]


class GetCompanyHandler(_CompanyHandler):
    """Handler for GetCompanyQuery."""

    async def handle(self, query: GetCompanyQuery) -> CompanyDTO:
        company = await self._get(query.company_id)
        await self.scope_resolver.ensure_visible(query.actor, company.id)
        return CompanyDTO.from_entity(company)


class ListDescendantsHandler(_CompanyHandler):
    """Handler for ListDescendantsQuery."""

    async def handle(self, query: ListDescendantsQuery) -> List[CompanyDTO]:
        """
        Handle list descendants query.

        Returns:
            Companies below the given one, in breadth-first order

        Raises:
            CompanyNotFoundError: If the company does not exist
        """
        company = await self._get(query.company_id)
        await self.scope_resolver.ensure_visible(query.actor, company.id)
        hierarchy = await self.scope_resolver.hierarchy()
        order = hierarchy.descendants(company.id)
        if not order:
            return []
        by_id = {c.id: c for c in await self.company_repository.list(company_ids=set(order))}
        return [CompanyDTO.from_entity(by_id[company_id]) for company_id in order if company_id in by_id]
