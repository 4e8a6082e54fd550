"""
Device registration domain entities.

Installed software reports itself per company (keyed by tax ID) and per
device. A device counts as authorized once it carries a binding key.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class RegistrationHeader:
    """Registration of one company's installation of a product."""

    tax_id: str
    company_name: str
    product: str
    created_at: datetime
    updated_at: datetime
    version: str = ""
    module: str = ""
    users: int = 0
    total_devices: int = 0
    license_id: Optional[uuid.UUID] = None
    total_orders: int = 0
    total_sales: Decimal = Decimal("0.00")

    def __post_init__(self):
        if not self.tax_id or not self.tax_id.strip():
            raise ValueError("Tax ID is required")
        if len(self.tax_id) > 20:
            raise ValueError("Tax ID too long")
        if not self.company_name:
            raise ValueError("Company name is required")
        if not self.product:
            raise ValueError("Product is required")

    def assign_license(self, license_id: uuid.UUID, now: datetime) -> "RegistrationHeader":
        return replace(self, license_id=license_id, updated_at=now)


@dataclass(frozen=True)
class DeviceRegistration:
    """One device under a registration header."""

    id: uuid.UUID
    tax_id: str
    device_uid: str
    created_at: datetime
    updated_at: datetime
    os_info: str = ""
    notes: str = ""
    activation_date: Optional[datetime] = None
    last_access: Optional[datetime] = None
    orders: int = 0
    sales: Decimal = Decimal("0.00")
    computer_key: Optional[str] = None

    def __post_init__(self):
        if not self.device_uid or not self.device_uid.strip():
            raise ValueError("Device UID is required")

    @property
    def is_authorized(self) -> bool:
        return bool(self.computer_key)
