"""
Resolves what part of the company tree an operator may see.
"""
import uuid
from typing import Optional, Set

from companies.domain.services import CompanyHierarchy, VisibilityScope
from companies.ports.company_repository import CompanyRepository
from core.domain.exceptions import PermissionDeniedError
from core.domain.value_objects import Actor


class ScopeResolver:
    """Loads the company tree and applies the actor's visibility rules."""

    def __init__(self, company_repository: CompanyRepository):
        self.company_repository = company_repository

    async def hierarchy(self) -> CompanyHierarchy:
        return CompanyHierarchy(await self.company_repository.parent_map())

    async def company_ids(self, actor: Actor) -> Optional[Set[uuid.UUID]]:
        """
        Company ids visible to ``actor``.

        Returns:
            None for unrestricted actors, otherwise a set of ids
        """
        if actor.is_superadmin:
            return None
        return VisibilityScope.company_ids_for(actor, await self.hierarchy())

    async def ensure_visible(self, actor: Actor, *company_ids: Optional[uuid.UUID]) -> None:
        """
        Raise unless at least one of ``company_ids`` is visible to ``actor``.

        Raises:
            PermissionDeniedError: If none of the companies is in scope
        """
        scope = await self.company_ids(actor)
        if any(VisibilityScope.allows(scope, company_id) for company_id in company_ids):
            return
        raise PermissionDeniedError(f"Operator {actor} may not access this resource")
