"""
GetDashboardStatsHandler.

Dashboard figures are cached per visibility scope for
DASHBOARD_CACHE_TIMEOUT seconds. Events that change the figures bump
the cache namespace, which drops every cached scope at once.
"""
import hashlib
import logging
from decimal import Decimal

from django.conf import settings
from django.utils import timezone

from billing.application.queries.billing_queries import GetDashboardStatsQuery
from billing.domain.dashboard import DashboardStats
from billing.ports.dashboard_repository import DashboardRepository
from companies.application.services.scope_resolver import ScopeResolver
from core.infrastructure.cache import CachePort, cache_adapter

logger = logging.getLogger(__name__)

DASHBOARD_NAMESPACE = "dashboard"


class GetDashboardStatsHandler:
    """Handler for GetDashboardStatsQuery."""

    def __init__(
        self,
        dashboard_repository: DashboardRepository,
        scope_resolver: ScopeResolver,
        cache: CachePort = cache_adapter,
    ):
        self.dashboard_repository = dashboard_repository
        self.scope_resolver = scope_resolver
        self.cache = cache

    @staticmethod
    def _scope_key(scope) -> str:
        if scope is None:
            return "all"
        joined = ",".join(sorted(str(company_id) for company_id in scope))
        return hashlib.sha256(joined.encode()).hexdigest()[:16]

    async def handle(self, query: GetDashboardStatsQuery) -> DashboardStats:
        """
        Handle dashboard stats query.

        Args:
            query: GetDashboardStatsQuery

        Returns:
            DashboardStats for the operator's scope
        """
        scope = await self.scope_resolver.company_ids(query.actor)
        version = await self.cache.namespace_version(DASHBOARD_NAMESPACE)
        key = f"{DASHBOARD_NAMESPACE}:stats:v{version}:{self._scope_key(scope)}"

        cached = await self.cache.get(key)
        if cached is not None:
            logger.debug("Dashboard stats cache hit: %s", key)
            return DashboardStats(
                **{
                    **cached,
                    "monthly_revenue": Decimal(cached["monthly_revenue"]),
                    "daily_revenue": Decimal(cached["daily_revenue"]),
                }
            )

        stats = await self.dashboard_repository.stats(
            timezone.now(), settings.LICENSE_EXPIRING_HORIZON_DAYS, company_ids=scope
        )
        payload = stats.to_dict()
        payload["monthly_revenue"] = str(stats.monthly_revenue)
        payload["daily_revenue"] = str(stats.daily_revenue)
        await self.cache.set(key, payload, timeout=settings.DASHBOARD_CACHE_TIMEOUT)
        return stats
