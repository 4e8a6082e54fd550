"""
License DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from licenses.domain.license import License
from licenses.domain.services import LicenseStatusPolicy


@dataclass
class LicenseDTO:
    """DTO for license information. ``status`` is the computed status."""

    id: uuid.UUID
    client_id: uuid.UUID
    product_id: uuid.UUID
    activation_key: str
    license_type: str
    status: str
    stored_status: str
    price: Decimal
    discount: Decimal
    final_price: Decimal
    max_users: int
    max_devices: int
    renewal_enabled: bool
    computer_key: Optional[str]
    activation_date: Optional[datetime]
    expiry_date: Optional[datetime]
    assigned_company_id: Optional[uuid.UUID]
    assigned_agent_id: Optional[uuid.UUID]
    notes: str
    created_at: datetime

    @classmethod
    def from_entity(cls, license: License, now: datetime) -> "LicenseDTO":
        return cls(
            id=license.id,
            client_id=license.client_id,
            product_id=license.product_id,
            activation_key=license.activation_key,
            license_type=license.license_type.value,
            status=LicenseStatusPolicy.compute_status(license, now).value,
            stored_status=license.status.value,
            price=license.price,
            discount=license.discount,
            final_price=license.final_price,
            max_users=license.max_users,
            max_devices=license.max_devices,
            renewal_enabled=license.renewal_enabled,
            computer_key=license.computer_key,
            activation_date=license.activation_date,
            expiry_date=license.expiry_date,
            assigned_company_id=license.assigned_company_id,
            assigned_agent_id=license.assigned_agent_id,
            notes=license.notes,
            created_at=license.created_at,
        )


@dataclass
class MaintenanceReportDTO:
    """Outcome of a batch job over licenses."""

    processed: int
    failed: int
    license_ids: list
