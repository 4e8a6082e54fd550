"""
Company and Client models.
"""
import uuid

from django.db import models


class Company(models.Model):
    """
    A node of the distribution hierarchy.
    The tree is stored as a plain parent foreign key.
    """

    TYPE_CHOICES = [
        ("reseller", "Reseller"),
        ("sub_company", "Sub-company"),
        ("agent", "Agent"),
        ("end_client", "End client"),
    ]

    STATUS_CHOICES = [
        ("active", "Active"),
        ("inactive", "Inactive"),
        ("pending", "Pending"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    company_type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    parent = models.ForeignKey(
        "self",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="children",
    )
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="active")
    contact_info = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "companies"
        ordering = ["name"]
        indexes = [
            models.Index(fields=["parent"]),
            models.Index(fields=["company_type", "status"]),
        ]

    def clean(self):
        """Validate company fields."""
        from django.core.exceptions import ValidationError

        if not self.name:
            raise ValidationError("Name is required")
        if self.parent_id and self.parent_id == self.id:
            raise ValidationError("A company cannot be its own parent")

    def save(self, *args, **kwargs):
        """Save company with validation."""
        self.full_clean()
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.name} ({self.company_type})"


class Client(models.Model):
    """
    A licensee. Optionally owned by a company of the hierarchy.
    """

    STATUS_CHOICES = [
        ("validated", "Validated"),
        ("pending", "Pending"),
        ("suspended", "Suspended"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    company = models.ForeignKey(
        Company,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="clients",
    )
    name = models.CharField(max_length=255)
    email = models.EmailField(db_index=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="pending")
    contact_info = models.JSONField(default=dict, blank=True)
    is_multi_site = models.BooleanField(default=False)
    is_multi_user = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "clients"
        ordering = ["name"]
        indexes = [
            models.Index(fields=["company", "status"]),
        ]

    def __str__(self):
        return self.name
