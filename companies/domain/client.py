"""
Client domain entity.
"""
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from core.domain.value_objects import ClientStatus, Email


@dataclass(frozen=True)
class Client:
    """
    Client domain entity.

    A licensee, optionally owned by a company of the hierarchy.
    """

    id: uuid.UUID
    company_id: Optional[uuid.UUID]
    name: str
    email: Email
    status: ClientStatus
    created_at: datetime
    contact_info: Dict[str, Any] = field(default_factory=dict)
    is_multi_site: bool = False
    is_multi_user: bool = True

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Client name is required")

    @classmethod
    def create(
        cls,
        name: str,
        email: str,
        company_id: Optional[uuid.UUID] = None,
        status: ClientStatus = ClientStatus.PENDING,
        contact_info: Optional[Dict[str, Any]] = None,
        is_multi_site: bool = False,
        is_multi_user: bool = True,
        client_id: Optional[uuid.UUID] = None,
    ) -> "Client":
        """
        Create a new Client entity.

        Args:
            name: Client name
            email: Contact email
            company_id: Owning company UUID
            status: Initial validation status
            contact_info: Opaque contact payload
            is_multi_site: Client runs the software on several sites
            is_multi_user: Client runs the software for several users
            client_id: Optional UUID (generated if not provided)

        Returns:
            Client entity instance
        """
        return cls(
            id=client_id or uuid.uuid4(),
            company_id=company_id,
            name=name.strip(),
            email=Email(email),
            status=status,
            created_at=datetime.now(timezone.utc),
            contact_info=dict(contact_info or {}),
            is_multi_site=is_multi_site,
            is_multi_user=is_multi_user,
        )

    def with_status(self, status: ClientStatus) -> "Client":
        return replace(self, status=status)
