"""
RegistrationHeader and DeviceRegistration models.
"""
import uuid
from decimal import Decimal

from django.db import models
from django.utils import timezone


class RegistrationHeader(models.Model):
    """Installation of a product at one company, keyed by tax ID."""

    tax_id = models.CharField(max_length=20, primary_key=True)
    company_name = models.CharField(max_length=255)
    product = models.CharField(max_length=100)
    version = models.CharField(max_length=50, blank=True)
    module = models.CharField(max_length=100, blank=True)
    users = models.PositiveIntegerField(default=0)
    total_devices = models.PositiveIntegerField(default=0)
    license = models.ForeignKey(
        "licenses.License",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="registrations",
    )
    total_orders = models.PositiveIntegerField(default=0)
    total_sales = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0"))
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "registration_headers"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["license"]),
        ]

    def __str__(self):
        return f"{self.company_name} ({self.tax_id})"


class DeviceRegistration(models.Model):
    """Device reported under a registration header."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    header = models.ForeignKey(
        RegistrationHeader, on_delete=models.CASCADE, related_name="devices"
    )
    device_uid = models.CharField(max_length=255)
    os_info = models.CharField(max_length=255, blank=True)
    notes = models.TextField(blank=True)
    activation_date = models.DateTimeField(null=True, blank=True)
    last_access = models.DateTimeField(null=True, blank=True)
    orders = models.PositiveIntegerField(default=0)
    sales = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0"))
    computer_key = models.CharField(max_length=255, null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "device_registrations"
        ordering = ["-last_access"]
        constraints = [
            models.UniqueConstraint(
                fields=["header", "device_uid"], name="device_registration_unique_device"
            ),
        ]

    def __str__(self):
        return f"{self.device_uid} @ {self.header_id}"
