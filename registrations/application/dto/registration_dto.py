"""
Registration DTOs for API responses.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from registrations.domain.registration import DeviceRegistration, RegistrationHeader


@dataclass
class DeviceRegistrationDTO:
    id: uuid.UUID
    device_uid: str
    os_info: str
    notes: str
    activation_date: Optional[datetime]
    last_access: Optional[datetime]
    orders: int
    sales: Decimal
    computer_key: Optional[str]
    authorized: bool

    @classmethod
    def from_entity(cls, device: DeviceRegistration) -> "DeviceRegistrationDTO":
        return cls(
            id=device.id,
            device_uid=device.device_uid,
            os_info=device.os_info,
            notes=device.notes,
            activation_date=device.activation_date,
            last_access=device.last_access,
            orders=device.orders,
            sales=device.sales,
            computer_key=device.computer_key,
            authorized=device.is_authorized,
        )


@dataclass
class RegistrationDTO:
    """DTO for a registration header, optionally with its devices."""

    tax_id: str
    company_name: str
    product: str
    version: str
    module: str
    users: int
    total_devices: int
    license_id: Optional[uuid.UUID]
    total_orders: int
    total_sales: Decimal
    created_at: datetime
    updated_at: datetime
    devices: List[DeviceRegistrationDTO] = field(default_factory=list)

    @classmethod
    def from_entity(
        cls, header: RegistrationHeader, devices: Optional[List[DeviceRegistration]] = None
    ) -> "RegistrationDTO":
        return cls(
            tax_id=header.tax_id,
            company_name=header.company_name,
            product=header.product,
            version=header.version,
            module=header.module,
            users=header.users,
            total_devices=header.total_devices,
            license_id=header.license_id,
            total_orders=header.total_orders,
            total_sales=header.total_sales,
            created_at=header.created_at,
            updated_at=header.updated_at,
            devices=[DeviceRegistrationDTO.from_entity(device) for device in devices or []],
        )


@dataclass
class DeviceRegistrationResultDTO:
    """DTO returned to a device after it reports in."""

    tax_id: str
    device_uid: str
    created: bool
    total_devices: int
    license_id: Optional[uuid.UUID]
    last_access: Optional[datetime]
