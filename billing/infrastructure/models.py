"""
Billing transaction model.
"""
import uuid
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models


class Transaction(models.Model):
    """
    A charge for a license activation, renewal or deferred payment.
    """

    TYPE_CHOICES = [
        ("activation", "Activation"),
        ("renewal", "Renewal"),
        ("deferred", "Deferred"),
    ]

    STATUS_CHOICES = [
        ("pending", "Pending"),
        ("completed", "Completed"),
        ("failed", "Failed"),
        ("paid_with_credits", "Paid with credits"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    license = models.ForeignKey(
        "licenses.License", on_delete=models.PROTECT, related_name="transactions"
    )
    client = models.ForeignKey(
        "companies.Client", on_delete=models.PROTECT, related_name="transactions"
    )
    company = models.ForeignKey(
        "companies.Company",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="transactions",
    )
    transaction_type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    amount = models.DecimalField(
        max_digits=12, decimal_places=2, validators=[MinValueValidator(Decimal("0"))]
    )
    discount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0"),
        validators=[MinValueValidator(Decimal("0"))],
    )
    final_amount = models.DecimalField(max_digits=12, decimal_places=2)
    payment_method = models.CharField(max_length=50, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="pending")
    payment_date = models.DateTimeField(null=True, blank=True)
    credits_used = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    notes = models.TextField(blank=True)
    modified_by = models.ForeignKey(
        "accounts.Operator",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="modified_transactions",
    )
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()

    class Meta:
        db_table = "transactions"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "created_at"]),
            models.Index(fields=["company", "created_at"]),
            models.Index(fields=["license"]),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(discount__lte=models.F("amount")),
                name="transaction_discount_lte_amount",
            ),
        ]

    def save(self, *args, **kwargs):
        """Keep final_amount consistent with amount and discount."""
        self.final_amount = self.amount - self.discount
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.transaction_type} {self.final_amount} ({self.status})"
