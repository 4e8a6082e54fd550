"""
Billing queries.
"""
import uuid
from dataclasses import dataclass
from typing import Optional

from core.domain.value_objects import Actor


@dataclass
class ListTransactionsQuery:
    """Query to list billing transactions visible to an operator."""

    actor: Actor
    license_id: Optional[uuid.UUID] = None
    status: Optional[str] = None


@dataclass
class GetDashboardStatsQuery:
    """Query for the dashboard figures of an operator's scope."""

    actor: Actor
