"""
Company and client queries.
"""
import uuid
from dataclasses import dataclass
from typing import Optional

from core.domain.value_objects import Actor


@dataclass
class ListCompaniesQuery:
    actor: Actor


@dataclass
class GetCompanyQuery:
    company_id: uuid.UUID
    actor: Actor


@dataclass
class ListDescendantsQuery:
    """Query for every company below a company."""

    company_id: uuid.UUID
    actor: Actor


@dataclass
class ListClientsQuery:
    actor: Actor
    status: Optional[str] = None


@dataclass
class GetClientQuery:
    client_id: uuid.UUID
    actor: Actor
