"""
Django implementation of ProductRepository port.
"""
import uuid
from typing import List, Optional

from asgiref.sync import sync_to_async

from core.domain.value_objects import LicenseType
from products.domain.product import Product
from products.infrastructure.models import Product as ProductModel
from products.ports.product_repository import ProductRepository


class DjangoProductRepository(ProductRepository):
    """Django ORM implementation of ProductRepository."""

    def _to_domain(self, model: ProductModel) -> Product:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Product model

        Returns:
            Product domain entity
        """
        return Product(
            id=model.id,
            name=model.name,
            version=model.version,
            license_type=LicenseType(model.license_type),
            price=model.price,
            discount=model.discount,
            max_users=model.max_users,
            max_devices=model.max_devices,
            trial_days=model.trial_days,
            created_at=model.created_at,
            description=model.description,
        )

    @sync_to_async
    def save(self, product: Product) -> Product:
        model, created = ProductModel.objects.get_or_create(
            id=product.id,
            defaults={
                "name": product.name,
                "version": product.version,
                "description": product.description,
                "license_type": product.license_type.value,
                "price": product.price,
                "discount": product.discount,
                "max_users": product.max_users,
                "max_devices": product.max_devices,
                "trial_days": product.trial_days,
            },
        )
        if not created:
            model.name = product.name
            model.version = product.version
            model.description = product.description
            model.license_type = product.license_type.value
            model.price = product.price
            model.discount = product.discount
            model.max_users = product.max_users
            model.max_devices = product.max_devices
            model.trial_days = product.trial_days
            model.save()
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(self, product_id: uuid.UUID) -> Optional[Product]:
        try:
            return self._to_domain(ProductModel.objects.get(id=product_id))
        except ProductModel.DoesNotExist:
            return None

    @sync_to_async
    def list(self) -> List[Product]:
        return [self._to_domain(model) for model in ProductModel.objects.all()]
