"""
License query handlers.

Every license returned carries its computed status.
"""
from datetime import timedelta
from typing import List

from django.conf import settings
from django.utils import timezone

from companies.application.services.scope_resolver import ScopeResolver
from core.domain.exceptions import LicenseNotFoundError
from licenses.application.dto.license_dto import LicenseDTO
from licenses.application.queries.list_expiring_licenses import ListExpiringLicensesQuery
from licenses.application.queries.list_licenses import GetLicenseQuery, ListLicensesQuery
from licenses.application.services.license_access import LicenseAccess
from licenses.domain.services import LicenseStatusPolicy
from licenses.ports.license_repository import LicenseRepository


class ListLicensesHandler:
    """Handler for ListLicensesQuery."""

    def __init__(self, license_repository: LicenseRepository, scope_resolver: ScopeResolver):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.scope_resolver = scope_resolver

    async def handle(self, query: ListLicensesQuery) -> List[LicenseDTO]:
        """
        Handle list licenses query.

        Args:
            query: ListLicensesQuery

        Returns:
            List of LicenseDTO visible to the operator
        """
        now = timezone.now()
        scope = await self.scope_resolver.company_ids(query.actor)
        licenses = await self.license_repository.list(company_ids=scope, client_id=query.client_id)
        dtos = [LicenseDTO.from_entity(license, now) for license in licenses]
        if query.status:
            dtos = [dto for dto in dtos if dto.status == query.status]
        return dtos


class GetLicenseHandler:
    """Handler for GetLicenseQuery."""

    def __init__(self, license_repository: LicenseRepository, license_access: LicenseAccess):
        self.license_repository = license_repository
        self.license_access = license_access

    async def handle(self, query: GetLicenseQuery) -> LicenseDTO:
        license = await self.license_repository.find_by_id(query.license_id)
        if not license:
            raise LicenseNotFoundError(f"License {query.license_id} not found")
        await self.license_access.ensure_visible(query.actor, license)
        return LicenseDTO.from_entity(license, timezone.now())


class ListExpiringLicensesHandler:
    """Handler for ListExpiringLicensesQuery."""

    def __init__(self, license_repository: LicenseRepository, scope_resolver: ScopeResolver):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.scope_resolver = scope_resolver

    async def handle(self, query: ListExpiringLicensesQuery, now=None) -> List[LicenseDTO]:
        """
        Handle list expiring licenses query.

        Args:
            query: ListExpiringLicensesQuery
            now: Reference time (defaults to the current time)

        Returns:
            Usable licenses with now < expiry <= now + horizon, closest
            expiry first
        """
        now = now or timezone.now()
        horizon = query.horizon_days
        if horizon is None:
            horizon = settings.LICENSE_EXPIRING_HORIZON_DAYS
        scope = await self.scope_resolver.company_ids(query.actor)
        candidates = await self.license_repository.list_expiring(
            now, now + timedelta(days=horizon), company_ids=scope
        )
        expiring = [
            license
            for license in candidates
            if LicenseStatusPolicy.is_expiring(license, now, horizon)
        ]
        expiring.sort(key=lambda license: (license.expiry_date, str(license.id)))
        return [LicenseDTO.from_entity(license, now) for license in expiring]
