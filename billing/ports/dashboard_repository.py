"""
Dashboard statistics port (interface).
"""
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, Set

from billing.domain.dashboard import DashboardStats


class DashboardRepository(ABC):
    """Read model computing dashboard figures in the database."""

    @abstractmethod
    async def stats(
        self,
        now: datetime,
        expiring_horizon_days: int,
        company_ids: Optional[Set[uuid.UUID]] = None,
    ) -> DashboardStats:
        """
        Compute dashboard statistics.

        Args:
            now: Reference time; "today" and "this month" are taken in
                the current time zone
            expiring_horizon_days: Look-ahead for expiring renewals
            company_ids: Restrict to clients of these companies (None for all)

        Returns:
            DashboardStats
        """
        pass
