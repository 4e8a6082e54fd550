"""
Django admin configuration for licenses app.
"""
from django.contrib import admin
from django.utils import timezone
from django.utils.html import format_html

from licenses.domain.services import LicenseStatusPolicy
from licenses.infrastructure.models import License
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository


@admin.register(License)
class LicenseAdmin(admin.ModelAdmin):
    """Admin interface for License model."""

    list_display = [
        "activation_key",
        "client",
        "product",
        "license_type",
        "status_display",
        "expiry_date",
        "renewal_enabled",
        "created_at",
    ]
    list_filter = ["status", "license_type", "renewal_enabled", "expiry_date"]
    search_fields = ["activation_key", "computer_key", "client__name", "client__email", "product__name"]
    readonly_fields = ["id", "activation_key", "activation_date", "created_at", "updated_at"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "client", "product", "activation_key", "license_type", "status"),
            },
        ),
        (
            "Device Binding",
            {
                "fields": ("computer_key", "activation_date", "expiry_date"),
            },
        ),
        (
            "Commercial",
            {
                "fields": (
                    "price",
                    "discount",
                    "max_users",
                    "max_devices",
                    "trial_days",
                    "renewal_enabled",
                ),
            },
        ),
        (
            "Assignment",
            {
                "fields": ("assigned_company", "assigned_agent", "notes"),
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
        """Display the effective status."""
        colors = {
            "active": "green",
            "demo": "blue",
            "pending": "black",
            "suspended": "orange",
            "expired": "gray",
        }
        status = LicenseStatusPolicy.compute_status(DjangoLicenseRepository().to_domain(obj), timezone.now()).value
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            colors.get(status, "black"),
            status.upper(),
        )

    status_display.short_description = "Status"

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("client", "product")
