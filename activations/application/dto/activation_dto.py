"""
Activation DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass
class ActivationResultDTO:
    """DTO for an activation attempt."""

    success: bool
    message: str
    error_code: Optional[str] = None
    license_id: Optional[uuid.UUID] = None
    status: Optional[str] = None
    activation_date: Optional[datetime] = None
    expiry_date: Optional[datetime] = None


@dataclass
class ValidationResultDTO:
    """DTO for a license validation check."""

    valid: bool
    status: Optional[str]
    expiry_date: Optional[datetime]
    message: str
    error_code: Optional[str] = None


@dataclass
class ActivationLogDTO:
    """DTO for one activation log entry."""

    id: uuid.UUID
    license_id: Optional[uuid.UUID]
    activation_key: str
    key_type: str
    result: str
    device_info: Dict[str, Any]
    ip_address: Optional[str]
    user_agent: str
    error_message: str
    created_at: datetime
