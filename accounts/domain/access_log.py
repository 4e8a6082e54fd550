"""
Access log entry.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


@dataclass(frozen=True)
class AccessLogEntry:
    """One authenticated back-office request."""

    operator_id: Optional[uuid.UUID]
    action: str
    resource: str
    status_code: Optional[int] = None
    ip_address: Optional[str] = None
    user_agent: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: uuid.UUID = field(default_factory=uuid.uuid4)
