"""
Django admin configuration for billing app.
"""
from django.contrib import admin
from django.utils.html import format_html

from billing.infrastructure.models import Transaction


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    """Admin interface for Transaction model."""

    list_display = [
        "license",
        "client",
        "transaction_type",
        "final_amount",
        "status_display",
        "payment_method",
        "payment_date",
        "created_at",
    ]
    list_filter = ["status", "transaction_type", "created_at"]
    search_fields = ["license__activation_key", "client__name", "notes"]
    readonly_fields = ["id", "final_amount", "credits_used", "created_at", "updated_at"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "license", "client", "company", "transaction_type"),
            },
        ),
        (
            "Amounts",
            {
                "fields": ("amount", "discount", "final_amount", "credits_used"),
            },
        ),
        (
            "Payment",
            {
                "fields": ("status", "payment_method", "payment_date", "notes", "modified_by"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    def status_display(self, obj):
        """Display status with color coding."""
        colors = {
            "pending": "orange",
            "completed": "green",
            "paid_with_credits": "blue",
            "failed": "red",
        }
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            colors.get(obj.status, "black"),
            obj.get_status_display(),
        )

    status_display.short_description = "Status"

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("license", "client", "company")
