"""
Company and client DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from companies.domain.client import Client
from companies.domain.company import Company


@dataclass
class CompanyDTO:
    """DTO for company data."""

    id: uuid.UUID
    name: str
    company_type: str
    parent_id: Optional[uuid.UUID]
    status: str
    contact_info: Dict[str, Any]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, company: Company) -> "CompanyDTO":
        return cls(
            id=company.id,
            name=company.name,
            company_type=company.company_type.value,
            parent_id=company.parent_id,
            status=company.status.value,
            contact_info=company.contact_info,
            created_at=company.created_at,
            updated_at=company.updated_at,
        )


@dataclass
class ClientDTO:
    """DTO for client data."""

    id: uuid.UUID
    company_id: Optional[uuid.UUID]
    name: str
    email: str
    status: str
    contact_info: Dict[str, Any]
    is_multi_site: bool
    is_multi_user: bool
    created_at: datetime

    @classmethod
    def from_entity(cls, client: Client) -> "ClientDTO":
        return cls(
            id=client.id,
            company_id=client.company_id,
            name=client.name,
            email=str(client.email),
            status=client.status.value,
            contact_info=client.contact_info,
            is_multi_site=client.is_multi_site,
            is_multi_user=client.is_multi_user,
            created_at=client.created_at,
        )
