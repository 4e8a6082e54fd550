"""
Company and client commands.
"""
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from core.domain.value_objects import Actor, ClientStatus, CompanyStatus, CompanyType


@dataclass
class CreateCompanyCommand:
    """Command to add a company to the hierarchy."""

    name: str
    company_type: CompanyType
    actor: Actor
    parent_id: Optional[uuid.UUID] = None
    status: CompanyStatus = CompanyStatus.ACTIVE
    contact_info: Dict[str, Any] = field(default_factory=dict)


@dataclass
class UpdateCompanyCommand:
    """
    Command to change a company.

    ``parent_id`` is only applied when ``change_parent`` is set, so that
    None can detach a company and make it a root.
    """

    company_id: uuid.UUID
    actor: Actor
    name: Optional[str] = None
    status: Optional[CompanyStatus] = None
    contact_info: Optional[Dict[str, Any]] = None
    parent_id: Optional[uuid.UUID] = None
    change_parent: bool = False


@dataclass
class CreateClientCommand:
    """Command to register a client."""

    name: str
    email: str
    actor: Actor
    company_id: Optional[uuid.UUID] = None
    contact_info: Dict[str, Any] = field(default_factory=dict)
    is_multi_site: bool = False
    is_multi_user: bool = True


@dataclass
class UpdateClientStatusCommand:
    """Command to validate, suspend or reset a client."""

    client_id: uuid.UUID
    status: ClientStatus
    actor: Actor
