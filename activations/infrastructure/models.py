"""
ActivationLog Django ORM model.

This is the infrastructure layer model for activation logs.
Domain entities are in activations.domain.activation_log.
"""
import uuid

from django.db import models
from django.utils import timezone


class ActivationLog(models.Model):
    """
    One activation or validation attempt against a license key.
    Rows are only ever inserted.
    """

    KEY_TYPE_CHOICES = [
        ("activation", "Activation key"),
        ("computer", "Computer key"),
    ]

    RESULT_CHOICES = [
        ("success", "Success"),
        ("failed", "Failed"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    license = models.ForeignKey(
        "licenses.License",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="activation_logs",
    )
    activation_key = models.CharField(max_length=100, db_index=True)
    key_type = models.CharField(max_length=20, choices=KEY_TYPE_CHOICES)
    device_info = models.JSONField(default=dict, blank=True)
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.TextField(blank=True)
    result = models.CharField(max_length=10, choices=RESULT_CHOICES)
    error_message = models.TextField(blank=True)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = "activation_logs"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["license", "created_at"]),
            models.Index(fields=["result", "created_at"]),
        ]

    def __str__(self):
        return f"{self.activation_key} {self.key_type} {self.result}"
