"""
Dashboard statistics value object.
"""
from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Any, Dict


@dataclass(frozen=True)
class DashboardStats:
    """Headline figures of the back-office dashboard."""

    active_licenses: int
    demo_licenses: int
    validated_clients: int
    monthly_revenue: Decimal
    today_activations: int
    expiring_renewals: int
    daily_revenue: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
