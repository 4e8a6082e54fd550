"""
Access log DTO for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from accounts.domain.access_log import AccessLogEntry


@dataclass
class AccessLogDTO:
    id: uuid.UUID
    operator_id: Optional[uuid.UUID]
    action: str
    resource: str
    status_code: Optional[int]
    ip_address: Optional[str]
    user_agent: str
    created_at: datetime

    @classmethod
    def from_entity(cls, entry: AccessLogEntry) -> "AccessLogDTO":
        return cls(
            id=entry.id,
            operator_id=entry.operator_id,
            action=entry.action,
            resource=entry.resource,
            status_code=entry.status_code,
            ip_address=entry.ip_address,
            user_agent=entry.user_agent,
            created_at=entry.created_at,
        )
