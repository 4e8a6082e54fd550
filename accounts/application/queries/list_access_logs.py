"""
ListAccessLogsQuery.
"""
import uuid
from dataclasses import dataclass
from typing import Optional

from core.domain.value_objects import Actor


@dataclass
class ListAccessLogsQuery:
    actor: Actor
    operator_id: Optional[uuid.UUID] = None
    limit: int = 100
