"""
ResumeLicenseCommand.

Command to lift a license suspension.
"""
import uuid
from dataclasses import dataclass

from core.domain.value_objects import Actor


@dataclass
class ResumeLicenseCommand:
    """Command to resume a suspended license."""

    license_id: uuid.UUID
    actor: Actor
