"""
Product catalog handlers.
"""
import logging
import uuid
from typing import List

from core.domain.exceptions import PermissionDeniedError, ProductNotFoundError, ValidationError
from core.domain.value_objects import Role
from products.application.commands.create_product import CreateProductCommand
from products.application.dto.product_dto import ProductDTO
from products.domain.product import Product
from products.ports.product_repository import ProductRepository

logger = logging.getLogger(__name__)

CATALOG_ROLES = (Role.SUPERADMIN, Role.ADMIN)


class CreateProductHandler:
    """Handler for CreateProductCommand."""

    def __init__(self, product_repository: ProductRepository):
        self.product_repository = product_repository

    async def handle(self, command: CreateProductCommand) -> ProductDTO:
        """
        Handle create product command.

        Raises:
            PermissionDeniedError: If the actor may not edit the catalog
            ValidationError: For negative prices, a discount above the price
                or limits below one
        """
        if command.actor.role not in CATALOG_ROLES:
            raise PermissionDeniedError("Only administrators can edit the product catalog")
        try:
            product = Product.create(
                name=command.name,
                version=command.version,
                license_type=command.license_type,
                price=command.price,
                discount=command.discount,
                max_users=command.max_users,
                max_devices=command.max_devices,
                trial_days=command.trial_days,
                description=command.description,
            )
        except ValueError as e:
            raise ValidationError(str(e))

        saved = await self.product_repository.save(product)
        logger.info("Product %s %s created by %s", saved.name, saved.version, command.actor)
        return ProductDTO.from_entity(saved)


class ListProductsHandler:
    def __init__(self, product_repository: ProductRepository):
        self.product_repository = product_repository

    async def handle(self) -> List[ProductDTO]:
        return [ProductDTO.from_entity(product) for product in await self.product_repository.list()]


class GetProductHandler:
    def __init__(self, product_repository: ProductRepository):
        self.product_repository = product_repository

    async def handle(self, product_id: uuid.UUID) -> ProductDTO:
        product = await self.product_repository.find_by_id(product_id)
        if not product:
            raise ProductNotFoundError(f"Product {product_id} not found")
        return ProductDTO.from_entity(product)
