"""
Registration commands.
"""
import uuid
from dataclasses import dataclass
from typing import Optional

from core.domain.value_objects import Actor


@dataclass
class RegisterDeviceCommand:
    """Command sent by installed software when it reports in."""

    tax_id: str
    company_name: str
    product: str
    device_uid: str
    version: str = ""
    module: str = ""
    users: Optional[int] = None
    os_info: str = ""
    notes: str = ""
    computer_key: Optional[str] = None


@dataclass
class AssignRegistrationLicenseCommand:
    """Command to tie a registration header to a license."""

    tax_id: str
    license_id: uuid.UUID
    actor: Actor
