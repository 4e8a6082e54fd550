"""
Django admin configuration for products app.
"""

from django.contrib import admin

from products.infrastructure.models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Admin interface for Product model."""

    list_display = ["name", "version", "license_type", "price", "discount", "license_count", "created_at"]
    list_filter = ["license_type", "created_at"]
    search_fields = ["name", "version"]
    readonly_fields = ["id", "created_at"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "name", "version", "description"),
            },
        ),
        (
            "License Template",
            {
                "fields": ("license_type", "price", "discount", "max_users", "max_devices", "trial_days"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at",),
                "classes": ("collapse",),
            },
        ),
    )

    def license_count(self, obj):
        """Display number of licenses for this product."""
        return obj.licenses.count()

    license_count.short_description = "Licenses"

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).prefetch_related("licenses")
