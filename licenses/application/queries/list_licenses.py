"""
License listing queries.
"""
import uuid
from dataclasses import dataclass
from typing import Optional

from core.domain.value_objects import Actor


@dataclass
class ListLicensesQuery:
    """Query to list the licenses visible to an operator."""

    actor: Actor
    client_id: Optional[uuid.UUID] = None
    status: Optional[str] = None  # Filters on the computed status


@dataclass
class GetLicenseQuery:
    """Query for a single license."""

    license_id: uuid.UUID
    actor: Actor
