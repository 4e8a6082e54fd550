"""
Device-facing activation commands.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class ActivateLicenseCommand:
    """Command to bind a license to a device."""

    activation_key: str
    computer_key: str
    device_info: Dict[str, Any] = field(default_factory=dict)
    ip_address: Optional[str] = None
    user_agent: str = ""


@dataclass
class ValidateLicenseCommand:
    """Command to check whether a license is usable, optionally on one device."""

    activation_key: str
    computer_key: Optional[str] = None
    device_info: Dict[str, Any] = field(default_factory=dict)
    ip_address: Optional[str] = None
    user_agent: str = ""
