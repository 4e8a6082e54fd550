"""
Django admin configuration for wallets app.

Balances and ledger rows only change through the wallet commands, so
both models are read-only here.
"""
from django.contrib import admin

from wallets.infrastructure.models import CompanyWallet, WalletTransaction


class ReadOnlyAdmin(admin.ModelAdmin):
    """Admin that never adds, edits or deletes rows."""

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(CompanyWallet)
class CompanyWalletAdmin(ReadOnlyAdmin):
    """Admin interface for CompanyWallet model."""

    list_display = ["company", "balance", "total_recharged", "total_spent", "last_recharge_date"]
    search_fields = ["company__name"]

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("company")


@admin.register(WalletTransaction)
class WalletTransactionAdmin(ReadOnlyAdmin):
    """Admin interface for WalletTransaction model."""

    list_display = [
        "company",
        "transaction_type",
        "amount",
        "balance_before",
        "balance_after",
        "correlation_id",
        "created_at",
    ]
    list_filter = ["transaction_type", "created_at"]
    search_fields = ["company__name", "description", "related_entity_id", "correlation_id"]

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("company", "counterparty_company")
