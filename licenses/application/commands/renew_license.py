"""
RenewLicenseCommand.

Command to extend a license by one term of its type.
"""
import uuid
from dataclasses import dataclass

from core.domain.value_objects import Actor


@dataclass
class RenewLicenseCommand:
    """Command to renew a license."""

    license_id: uuid.UUID
    actor: Actor
