"""
Django admin configuration for accounts app.
"""
from django.contrib import admin, messages

from accounts.infrastructure.models import AccessLog, ApiKey, Operator


class ApiKeyInline(admin.TabularInline):
    model = ApiKey
    extra = 0
    fields = ["key_prefix", "expires_at", "last_used_at", "created_at"]
    readonly_fields = ["key_prefix", "last_used_at", "created_at"]


@admin.register(Operator)
class OperatorAdmin(admin.ModelAdmin):
    """Admin interface for Operator model."""

    list_display = ["username", "full_name", "role", "company", "is_active", "created_at"]
    list_filter = ["role", "is_active"]
    search_fields = ["username", "full_name", "email"]
    raw_id_fields = ["company"]
    inlines = [ApiKeyInline]
    actions = ["issue_api_key"]

    @admin.action(description="Issue a new API key")
    def issue_api_key(self, request, queryset):
        for operator in queryset:
            raw_key = operator.generate_api_key()
            # The raw key is shown once; only its hash is stored.
            self.message_user(request, f"{operator.username}: {raw_key}", level=messages.WARNING)


@admin.register(AccessLog)
class AccessLogAdmin(admin.ModelAdmin):
    """Read-only admin for access log rows."""

    list_display = ["created_at", "operator", "action", "resource", "status_code", "ip_address"]
    list_filter = ["action", "status_code"]
    search_fields = ["resource", "operator__username"]
    date_hierarchy = "created_at"

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
