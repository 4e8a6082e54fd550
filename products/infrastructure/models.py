"""
Product model.
"""
import uuid
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models


class Product(models.Model):
    """
    Represents a product that can be licensed, together with the
    license template applied to new licenses.
    """

    LICENSE_TYPE_CHOICES = [
        ("permanent", "Permanent"),
        ("trial", "Trial"),
        ("monthly", "Monthly subscription"),
        ("annual", "Annual subscription"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255, help_text="Product display name")
    version = models.CharField(max_length=50)
    description = models.TextField(blank=True)
    license_type = models.CharField(max_length=20, choices=LICENSE_TYPE_CHOICES, default="permanent")
    price = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0"), validators=[MinValueValidator(0)]
    )
    discount = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0"), validators=[MinValueValidator(0)]
    )
    max_users = models.PositiveIntegerField(default=1)
    max_devices = models.PositiveIntegerField(default=1)
    trial_days = models.PositiveIntegerField(default=30)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "products"
        ordering = ["name", "version"]
        indexes = [
            models.Index(fields=["name", "version"]),
        ]

    def clean(self):
        """Validate product fields."""
        from django.core.exceptions import ValidationError

        if not self.name:
            raise ValidationError("Name is required")
        if self.discount is not None and self.price is not None and self.discount > self.price:
            raise ValidationError("Discount cannot exceed price")

    def save(self, *args, **kwargs):
        """Save product with validation."""
        self.full_clean()
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.name} {self.version}"
