"""
Registration repository port (interface).
"""
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Set

from registrations.domain.registration import DeviceRegistration, RegistrationHeader


@dataclass(frozen=True)
class DeviceReport:
    """What a device sends when it reports in."""

    tax_id: str
    company_name: str
    product: str
    device_uid: str
    version: str = ""
    module: str = ""
    users: Optional[int] = None
    os_info: str = ""
    notes: str = ""
    computer_key: Optional[str] = None


@dataclass(frozen=True)
class RegistrationOutcome:
    header: RegistrationHeader
    device: DeviceRegistration
    created: bool


class RegistrationRepository(ABC):
    """Abstract repository for registration headers and device rows."""

    @abstractmethod
    async def register(self, report: DeviceReport, now: datetime) -> RegistrationOutcome:
        """
        Upsert a header by tax ID and a device by (tax ID, device UID).

        The device's last access is stamped with ``now``, its activation
        date is set on first sight and the header's device total is
        recomputed, all in one database transaction.

        Args:
            report: Reported header and device fields
            now: Canonical timestamp

        Returns:
            RegistrationOutcome; ``created`` tells whether the device is new
        """
        pass

    @abstractmethod
    async def find_header(self, tax_id: str) -> Optional[RegistrationHeader]:
        pass

    @abstractmethod
    async def assign_license(
        self, tax_id: str, license_id: uuid.UUID, now: datetime
    ) -> RegistrationHeader:
        """
        Tie a header to a license.

        Raises:
            RegistrationNotFoundError: If no header has this tax ID
        """
        pass

    @abstractmethod
    async def list_headers(
        self, company_ids: Optional[Set[uuid.UUID]] = None
    ) -> List[RegistrationHeader]:
        """
        Headers newest first.

        Args:
            company_ids: Only headers assigned to licenses of clients of
                these companies (None for all, including unassigned ones)
        """
        pass

    @abstractmethod
    async def list_devices(self, tax_id: str) -> List[DeviceRegistration]:
        pass

    @abstractmethod
    async def count_authorized_devices(self, license_id: uuid.UUID) -> int:
        """Devices with a non-empty binding key under headers assigned to the license."""
        pass
