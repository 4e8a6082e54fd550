"""
ListExpiringLicensesQuery.

Query to list licenses running out soon, closest expiry first.
"""
from dataclasses import dataclass
from typing import Optional

from core.domain.value_objects import Actor


@dataclass
class ListExpiringLicensesQuery:
    """
    Query to list expiring licenses.

    horizon_days defaults to the LICENSE_EXPIRING_HORIZON_DAYS setting.
    """

    actor: Actor
    horizon_days: Optional[int] = None
