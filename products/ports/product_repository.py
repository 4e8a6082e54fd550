"""
Product repository port (interface).

This defines the contract for product persistence operations.
Implementations are in the infrastructure layer.
"""
import uuid
from abc import ABC, abstractmethod
from typing import List, Optional

from products.domain.product import Product


class ProductRepository(ABC):
    """Abstract repository for Product entities."""

    @abstractmethod
    async def save(self, product: Product) -> Product:
        """
        Save a product entity.

        Args:
            product: Product entity to save

        Returns:
            Saved product entity
        """
        pass

    @abstractmethod
    async def find_by_id(self, product_id: uuid.UUID) -> Optional[Product]:
        """
        Find a product by ID.

        Args:
            product_id: Product UUID

        Returns:
            Product entity or None if not found
        """
        pass

    @abstractmethod
    async def list(self) -> List[Product]:
        """
        List all products.

        Returns:
            List of Product entities ordered by name and version
        """
        pass
