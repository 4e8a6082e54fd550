"""
Activation log domain entity.

An append-only record of one activation or validation attempt,
successful or not.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from core.domain.value_objects import ActivationKeyType


@dataclass(frozen=True)
class ActivationLogEntry:
    """Activation log domain entity."""

    activation_key: str
    key_type: ActivationKeyType
    success: bool
    license_id: Optional[uuid.UUID] = None
    device_info: Dict[str, Any] = field(default_factory=dict)
    ip_address: Optional[str] = None
    user_agent: str = ""
    error_message: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @property
    def result(self) -> str:
        return "success" if self.success else "failed"
