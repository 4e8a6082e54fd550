"""
Company domain entity.

Companies form a tree through ``parent_id``. The tree itself is
walked by ``companies.domain.services.CompanyHierarchy``.
"""
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from core.domain.value_objects import CompanyStatus, CompanyType


@dataclass(frozen=True)
class Company:
    """
    Company domain entity.

    Represents a reseller, sub-company, agent or end client.
    """

    id: uuid.UUID
    name: str
    company_type: CompanyType
    parent_id: Optional[uuid.UUID]
    status: CompanyStatus
    created_at: datetime
    updated_at: datetime
    contact_info: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate company entity."""
        if not self.name or not self.name.strip():
            raise ValueError("Company name is required")
        if self.parent_id is not None and self.parent_id == self.id:
            raise ValueError("A company cannot be its own parent")

    @classmethod
    def create(
        cls,
        name: str,
        company_type: CompanyType,
        parent_id: Optional[uuid.UUID] = None,
        status: CompanyStatus = CompanyStatus.ACTIVE,
        contact_info: Optional[Dict[str, Any]] = None,
        company_id: Optional[uuid.UUID] = None,
    ) -> "Company":
        """
        Create a new Company entity.

        Args:
            name: Company display name
            company_type: Position in the hierarchy
            parent_id: Parent company UUID (None for a root reseller)
            status: Initial status
            contact_info: Opaque contact payload
            company_id: Optional UUID (generated if not provided)

        Returns:
            Company entity instance
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=company_id or uuid.uuid4(),
            name=name.strip(),
            company_type=company_type,
            parent_id=parent_id,
            status=status,
            created_at=now,
            updated_at=now,
            contact_info=dict(contact_info or {}),
        )

    def update(
        self,
        name: Optional[str] = None,
        status: Optional[CompanyStatus] = None,
        contact_info: Optional[Dict[str, Any]] = None,
    ) -> "Company":
        """Return a copy with the given attributes changed."""
        return replace(
            self,
            name=name.strip() if name is not None else self.name,
            status=status or self.status,
            contact_info=dict(contact_info) if contact_info is not None else self.contact_info,
            updated_at=datetime.now(timezone.utc),
        )

    def move_under(self, parent_id: Optional[uuid.UUID]) -> "Company":
        """Return a copy attached to a new parent."""
        return replace(self, parent_id=parent_id, updated_at=datetime.now(timezone.utc))

    @property
    def is_active(self) -> bool:
        return self.status == CompanyStatus.ACTIVE
