"""
Django admin configuration for activations app.
"""
from django.contrib import admin
from django.utils.html import format_html

from activations.infrastructure.models import ActivationLog


@admin.register(ActivationLog)
class ActivationLogAdmin(admin.ModelAdmin):
    """Read-only admin interface for ActivationLog model."""

    list_display = [
        "activation_key",
        "key_type",
        "result_display",
        "ip_address",
        "created_at",
    ]
    list_filter = ["result", "key_type", "created_at"]
    search_fields = ["activation_key", "ip_address", "license__client__name"]
    readonly_fields = [
        "id",
        "license",
        "activation_key",
        "key_type",
        "device_info",
        "ip_address",
        "user_agent",
        "result",
        "error_message",
        "created_at",
    ]

    def result_display(self, obj):
        """Display result with color coding."""
        color = "green" if obj.result == "success" else "red"
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            color,
            obj.result.upper(),
        )

    result_display.short_description = "Result"

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
