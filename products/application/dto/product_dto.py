"""
Product DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from products.domain.product import Product


@dataclass
class ProductDTO:
    """DTO for product data."""

    id: uuid.UUID
    name: str
    version: str
    description: str
    license_type: str
    price: Decimal
    discount: Decimal
    max_users: int
    max_devices: int
    trial_days: int
    created_at: datetime

    @classmethod
    def from_entity(cls, product: Product) -> "ProductDTO":
        return cls(
            id=product.id,
            name=product.name,
            version=product.version,
            description=product.description,
            license_type=product.license_type.value,
            price=product.price,
            discount=product.discount,
            max_users=product.max_users,
            max_devices=product.max_devices,
            trial_days=product.trial_days,
            created_at=product.created_at,
        )
