"""
ListActivationLogsQuery.
"""
import uuid
from dataclasses import dataclass
from typing import Optional

from core.domain.value_objects import Actor


@dataclass
class ListActivationLogsQuery:
    """Query to list activation log entries, newest first."""

    actor: Actor
    license_id: Optional[uuid.UUID] = None
    limit: int = 100
