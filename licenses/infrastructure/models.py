"""
License model.
"""
import uuid
from decimal import Decimal

from django.db import models


class License(models.Model):
    """
    A license grants a client the use of one product.
    It becomes bound to a single device on first activation.
    """

    STATUS_CHOICES = [
        ("pending", "Pending validation"),
        ("active", "Active"),
        ("demo", "Demo"),
        ("expired", "Expired"),
        ("suspended", "Suspended"),
    ]

    LICENSE_TYPE_CHOICES = [
        ("permanent", "Permanent"),
        ("trial", "Trial"),
        ("monthly", "Monthly subscription"),
        ("annual", "Annual subscription"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    client = models.ForeignKey("companies.Client", on_delete=models.PROTECT, related_name="licenses")
    product = models.ForeignKey("products.Product", on_delete=models.PROTECT, related_name="licenses")
    activation_key = models.CharField(max_length=100, unique=True)
    computer_key = models.CharField(max_length=255, null=True, blank=True, db_index=True)
    activation_date = models.DateTimeField(null=True, blank=True)
    expiry_date = models.DateTimeField(null=True, blank=True)
    license_type = models.CharField(max_length=20, choices=LICENSE_TYPE_CHOICES)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="pending")
    max_users = models.PositiveIntegerField(default=1)
    max_devices = models.PositiveIntegerField(default=1)
    price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0"))
    discount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0"))
    trial_days = models.PositiveIntegerField(default=30)
    renewal_enabled = models.BooleanField(default=False)
    assigned_company = models.ForeignKey(
        "companies.Company",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="assigned_licenses",
    )
    assigned_agent = models.ForeignKey(
        "companies.Company",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="agent_licenses",
    )
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()

    class Meta:
        db_table = "licenses"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "expiry_date"]),
            models.Index(fields=["client", "status"]),
            models.Index(fields=["expiry_date"]),
        ]

    def __str__(self):
        return self.activation_key
