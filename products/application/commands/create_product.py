"""
CreateProductCommand.
"""
from dataclasses import dataclass
from decimal import Decimal

from core.domain.value_objects import Actor, LicenseType


@dataclass
class CreateProductCommand:
    """Command to add a product to the catalog."""

    name: str
    version: str
    actor: Actor
    license_type: LicenseType = LicenseType.PERMANENT
    price: Decimal = Decimal("0")
    discount: Decimal = Decimal("0")
    max_users: int = 1
    max_devices: int = 1
    trial_days: int = 30
    description: str = ""
