"""
Activation outcome.

Activation failures are expected business outcomes, so they travel as
a typed result instead of an exception past the application layer.
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from core.domain.exceptions import DomainException
from core.domain.value_objects import LicenseStatus
from licenses.domain.license import License
from licenses.domain.services import LicenseStatusPolicy


class ActivationFailure(Enum):
    """Why an activation was refused."""

    NOT_FOUND = "LICENSE_NOT_FOUND"
    EXPIRED = "LICENSE_EXPIRED"
    SUSPENDED = "LICENSE_SUSPENDED"
    ALREADY_BOUND = "DEVICE_ALREADY_BOUND"
    INVALID_STATUS = "INVALID_LICENSE_STATUS"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_exception(cls, error: DomainException) -> "ActivationFailure":
        try:
            return cls(error.code)
        except ValueError:
            return cls.INVALID_STATUS


@dataclass(frozen=True)
class ActivationResult:
    """Success with the updated license, or a failure kind and message."""

    license: Optional[License] = None
    status: Optional[LicenseStatus] = None
    failure: Optional[ActivationFailure] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def succeeded(cls, license: License, now: datetime) -> "ActivationResult":
        """Success carrying the status the license has at the activation time."""
        return cls(
            license=license,
            status=LicenseStatusPolicy.compute_status(license, now),
            message="License activated successfully",
        )

    @classmethod
    def failed(cls, failure: ActivationFailure, message: str) -> "ActivationResult":
        return cls(failure=failure, message=message)
