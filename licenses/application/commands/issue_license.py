"""
IssueLicenseCommand.

Command to issue a license of a product to a client.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from core.domain.value_objects import Actor, LicenseType


@dataclass
class IssueLicenseCommand:
    """
    Command to issue a license.

    Unset fields are taken from the product template.
    """

    client_id: uuid.UUID
    product_id: uuid.UUID
    actor: Actor
    license_type: Optional[LicenseType] = None
    price: Optional[Decimal] = None
    discount: Optional[Decimal] = None
    max_users: Optional[int] = None
    max_devices: Optional[int] = None
    renewal_enabled: bool = False
    expiry_date: Optional[datetime] = None
    assigned_company_id: Optional[uuid.UUID] = None
    assigned_agent_id: Optional[uuid.UUID] = None
    notes: str = ""
