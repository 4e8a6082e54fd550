"""
CompanyWallet and WalletTransaction models.
"""
import uuid
from decimal import Decimal

from django.db import models
from django.utils import timezone


class CompanyWallet(models.Model):
    """
    Credit wallet of a company. ``balance`` caches the sum of the
    company's ledger rows.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    company = models.OneToOneField(
        "companies.Company", on_delete=models.PROTECT, related_name="wallet"
    )
    balance = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0"))
    total_recharged = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0"))
    total_spent = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0"))
    last_recharge_date = models.DateTimeField(null=True, blank=True)
    version = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "company_wallets"
        ordering = ["company__name"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(balance__gte=0),
                name="company_wallet_balance_non_negative",
            ),
        ]

    def __str__(self):
        return f"Wallet {self.company_id}: {self.balance}"


class WalletTransaction(models.Model):
    """
    Append-only ledger row. Updates and deletes are refused.
    """

    TYPE_CHOICES = [
        ("recharge", "Recharge"),
        ("spend", "Spend"),
        ("transfer_in", "Transfer in"),
        ("transfer_out", "Transfer out"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    wallet = models.ForeignKey(CompanyWallet, on_delete=models.PROTECT, related_name="transactions")
    company = models.ForeignKey(
        "companies.Company", on_delete=models.PROTECT, related_name="wallet_transactions"
    )
    transaction_type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    amount = models.DecimalField(max_digits=14, decimal_places=2)
    balance_before = models.DecimalField(max_digits=14, decimal_places=2)
    balance_after = models.DecimalField(max_digits=14, decimal_places=2)
    description = models.TextField(blank=True)
    related_entity_type = models.CharField(max_length=50, blank=True)
    related_entity_id = models.CharField(max_length=64, blank=True)
    counterparty_company = models.ForeignKey(
        "companies.Company",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="counterparty_wallet_transactions",
    )
    correlation_id = models.UUIDField(null=True, blank=True, db_index=True)
    created_by = models.ForeignKey(
        "accounts.Operator",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="wallet_transactions",
    )
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "wallet_transactions"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["company", "created_at"]),
            models.Index(fields=["related_entity_type", "related_entity_id"]),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(amount__gt=0),
                name="wallet_transaction_amount_positive",
            ),
        ]

    def save(self, *args, **kwargs):
        """Insert only."""
        if not self._state.adding:
            raise ValueError("Wallet ledger rows cannot be modified")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValueError("Wallet ledger rows cannot be deleted")

    @property
    def signed_amount(self) -> Decimal:
        return self.amount if self.transaction_type in ("recharge", "transfer_in") else -self.amount

    def __str__(self):
        return f"{self.transaction_type} {self.amount} ({self.company_id})"
