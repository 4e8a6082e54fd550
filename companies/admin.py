"""
Django admin configuration for companies app.
"""
from django.contrib import admin

from companies.infrastructure.models import Client, Company


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):
    """Admin interface for Company model."""

    list_display = ["name", "company_type", "parent", "status", "created_at"]
    list_filter = ["company_type", "status"]
    search_fields = ["name"]
    readonly_fields = ["id", "created_at", "updated_at"]
    raw_id_fields = ["parent"]

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("parent")


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    """Admin interface for Client model."""

    list_display = ["name", "email", "company", "status", "is_multi_site", "created_at"]
    list_filter = ["status", "is_multi_site", "is_multi_user"]
    search_fields = ["name", "email", "company__name"]
    readonly_fields = ["id", "created_at"]
    raw_id_fields = ["company"]
    actions = ["mark_validated"]

    @admin.action(description="Mark selected clients as validated")
    def mark_validated(self, request, queryset):
        updated = queryset.update(status="validated")
        self.message_user(request, f"{updated} client(s) validated.")
