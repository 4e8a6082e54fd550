"""
Registration queries.
"""
import uuid
from dataclasses import dataclass

from core.domain.value_objects import Actor


@dataclass
class ListRegistrationsQuery:
    """Query for the registration headers visible to an operator."""

    actor: Actor


@dataclass
class GetRegistrationQuery:
    """Query for one header with its devices."""

    tax_id: str
    actor: Actor


@dataclass
class CountAuthorizedDevicesQuery:
    """Query for the number of devices bound under a license's registrations."""

    license_id: uuid.UUID
    actor: Actor
