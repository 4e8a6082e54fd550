"""
SuspendLicenseCommand.

Command to suspend a license after manual review.
"""
import uuid
from dataclasses import dataclass

from core.domain.value_objects import Actor


@dataclass
class SuspendLicenseCommand:
    """Command to suspend a license."""

    license_id: uuid.UUID
    actor: Actor
