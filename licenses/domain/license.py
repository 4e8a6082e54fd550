"""
License domain entity.

This is the core domain entity representing a license.
It contains business logic and is independent of infrastructure.
The stored ``status`` only records explicit lifecycle decisions;
time-based expiry is derived by ``LicenseStatusPolicy``.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from core.domain.exceptions import DeviceAlreadyBoundError, InvalidLicenseStatusError
from core.domain.value_objects import LicenseStatus, LicenseType, quantize_amount


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    Represents one purchased license of a product for a client,
    optionally bound to a single device through its computer key.
    """

    id: uuid.UUID
    client_id: uuid.UUID
    product_id: uuid.UUID
    activation_key: str
    license_type: LicenseType
    status: LicenseStatus
    price: Decimal
    discount: Decimal
    max_users: int
    max_devices: int
    trial_days: int
    renewal_enabled: bool
    created_at: datetime
    updated_at: datetime
    computer_key: Optional[str] = None
    activation_date: Optional[datetime] = None
    expiry_date: Optional[datetime] = None
    assigned_company_id: Optional[uuid.UUID] = None
    assigned_agent_id: Optional[uuid.UUID] = None
    notes: str = ""

    def __post_init__(self):
        """Validate license entity."""
        if not self.client_id:
            raise ValueError("Client ID is required")
        if not self.product_id:
            raise ValueError("Product ID is required")
        if not self.activation_key:
            raise ValueError("Activation key is required")
        if self.max_users < 1 or self.max_devices < 1:
            raise ValueError("User and device limits must be at least 1")
        if self.discount < 0 or self.price < 0:
            raise ValueError("Price and discount cannot be negative")

    @classmethod
    def create(
        cls,
        client_id: uuid.UUID,
        product_id: uuid.UUID,
        activation_key: str,
        license_type: LicenseType,
        price: Decimal = Decimal("0"),
        discount: Decimal = Decimal("0"),
        max_users: int = 1,
        max_devices: int = 1,
        trial_days: int = 30,
        renewal_enabled: bool = False,
        expiry_date: Optional[datetime] = None,
        assigned_company_id: Optional[uuid.UUID] = None,
        assigned_agent_id: Optional[uuid.UUID] = None,
        notes: str = "",
        license_id: Optional[uuid.UUID] = None,
        now: Optional[datetime] = None,
    ) -> "License":
        """
        Create a new License entity.

        Trial licenses start as ``demo``, everything else as ``pending``
        until the first device activation.

        Args:
            client_id: Client UUID
            product_id: Product UUID
            activation_key: Unique activation key
            license_type: Term template
            price: License price
            discount: Discount on the price
            max_users: User limit
            max_devices: Device limit
            trial_days: Trial length for trial licenses
            renewal_enabled: Whether subscriptions renew automatically
            expiry_date: Explicit expiry (computed on activation when None)
            assigned_company_id: Company handling the license
            assigned_agent_id: Agent handling the license
            notes: Free text notes
            license_id: Optional UUID (generated if not provided)
            now: Creation timestamp

        Returns:
            License entity instance
        """
        now = now or datetime.now(timezone.utc)
        return cls(
            id=license_id or uuid.uuid4(),
            client_id=client_id,
            product_id=product_id,
            activation_key=activation_key,
            license_type=license_type,
            status=LicenseStatus.DEMO if license_type == LicenseType.TRIAL else LicenseStatus.PENDING,
            price=quantize_amount(price),
            discount=quantize_amount(discount),
            max_users=max_users,
            max_devices=max_devices,
            trial_days=trial_days,
            renewal_enabled=renewal_enabled,
            created_at=now,
            updated_at=now,
            expiry_date=expiry_date,
            assigned_company_id=assigned_company_id,
            assigned_agent_id=assigned_agent_id,
            notes=notes,
        )

    @property
    def final_price(self) -> Decimal:
        return max(Decimal("0.00"), self.price - self.discount)

    def is_bound_to_other_device(self, computer_key: str) -> bool:
        return bool(self.computer_key) and self.computer_key != computer_key

    def bind_device(
        self, computer_key: str, now: datetime, expiry_date: Optional[datetime]
    ) -> "License":
        """
        Bind the license to a device and mark it active.

        The activation date is only set on the first activation and an
        existing expiry date is never moved.

        Args:
            computer_key: Device binding key
            now: Canonical timestamp of the activation
            expiry_date: Expiry to use when none is set yet

        Returns:
            New License instance bound to the device

        Raises:
            DeviceAlreadyBoundError: If bound to a different device
        """
        if self.is_bound_to_other_device(computer_key):
            raise DeviceAlreadyBoundError(
                f"License {self.activation_key} is already bound to another device"
            )
        return replace(
            self,
            computer_key=computer_key,
            activation_date=self.activation_date or now,
            expiry_date=self.expiry_date or expiry_date,
            status=LicenseStatus.ACTIVE,
            updated_at=now,
        )

    def renew(self, new_expiry: datetime, now: datetime) -> "License":
        """
        Extend the license to a new expiry date.

        Args:
            new_expiry: New expiry datetime
            now: Canonical timestamp of the renewal

        Returns:
            New License instance with updated expiry
        """
        if self.status == LicenseStatus.SUSPENDED:
            raise InvalidLicenseStatusError("Cannot renew a suspended license")
        if new_expiry <= now:
            raise InvalidLicenseStatusError("Renewed expiry must be in the future")
        status = self.status
        if status == LicenseStatus.EXPIRED:
            status = LicenseStatus.ACTIVE if self.activation_date else LicenseStatus.PENDING
        return replace(self, expiry_date=new_expiry, status=status, updated_at=now)

    def suspend(self, now: datetime) -> "License":
        """
        Create a new License instance with suspended status.

        Returns:
            New License instance with suspended status
        """
        if self.status == LicenseStatus.SUSPENDED:
            raise InvalidLicenseStatusError("License is already suspended")
        return replace(self, status=LicenseStatus.SUSPENDED, updated_at=now)

    def resume(self, now: datetime) -> "License":
        """
        Lift a suspension.

        The license goes back to active when it was activated before,
        otherwise to its initial status.

        Returns:
            New License instance
        """
        if self.status != LicenseStatus.SUSPENDED:
            raise InvalidLicenseStatusError("Can only resume a suspended license")
        if self.activation_date:
            status = LicenseStatus.ACTIVE
        elif self.license_type == LicenseType.TRIAL:
            status = LicenseStatus.DEMO
        else:
            status = LicenseStatus.PENDING
        return replace(self, status=status, updated_at=now)

    def with_status(self, status: LicenseStatus, now: datetime) -> "License":
        return replace(self, status=status, updated_at=now)
