"""
Product domain entity.

A product carries the commercial template every license issued for it
starts from: price, discount, license type and limits.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from core.domain.value_objects import LicenseType, quantize_amount

DEFAULT_TRIAL_DAYS = 30


@dataclass(frozen=True)
class Product:
    """
    Product domain entity.

    Represents a piece of software that can be licensed.
    """

    id: uuid.UUID
    name: str
    version: str
    license_type: LicenseType
    price: Decimal
    discount: Decimal
    max_users: int
    max_devices: int
    trial_days: int
    created_at: datetime
    description: str = ""

    def __post_init__(self):
        """Validate product entity."""
        if not self.name or len(self.name.strip()) == 0:
            raise ValueError("Product name cannot be empty")
        if len(self.name) > 255:
            raise ValueError("Product name too long")
        if self.price < 0:
            raise ValueError("Price cannot be negative")
        if self.discount < 0 or self.discount > self.price:
            raise ValueError("Discount must be between zero and the price")
        if self.max_users < 1 or self.max_devices < 1:
            raise ValueError("User and device limits must be at least 1")
        if self.trial_days < 1:
            raise ValueError("Trial length must be at least one day")

    @classmethod
    def create(
        cls,
        name: str,
        version: str,
        license_type: LicenseType,
        price: Decimal = Decimal("0"),
        discount: Decimal = Decimal("0"),
        max_users: int = 1,
        max_devices: int = 1,
        trial_days: int = DEFAULT_TRIAL_DAYS,
        description: str = "",
        product_id: Optional[uuid.UUID] = None,
    ) -> "Product":
        """
        Create a new Product entity.

        Args:
            name: Product display name
            version: Product version string
            license_type: Default license type for issued licenses
            price: List price
            discount: Default discount
            max_users: Default user limit
            max_devices: Default device limit
            trial_days: Trial length used by trial licenses
            description: Free text description
            product_id: Optional UUID (generated if not provided)

        Returns:
            Product entity instance
        """
        return cls(
            id=product_id or uuid.uuid4(),
            name=name.strip(),
            version=version.strip(),
            license_type=license_type,
            price=quantize_amount(price),
            discount=quantize_amount(discount),
            max_users=max_users,
            max_devices=max_devices,
            trial_days=trial_days,
            created_at=datetime.now(timezone.utc),
            description=description,
        )

    def reprice(self, price: Decimal, discount: Decimal) -> "Product":
        return replace(self, price=quantize_amount(price), discount=quantize_amount(discount))

    @property
    def final_price(self) -> Decimal:
        return self.price - self.discount
