"""
Django admin configuration for registrations.
"""
from django.contrib import admin

from registrations.infrastructure.models import DeviceRegistration, RegistrationHeader


class DeviceRegistrationInline(admin.TabularInline):
    model = DeviceRegistration
    extra = 0
    fields = ["device_uid", "os_info", "computer_key", "activation_date", "last_access"]
    readonly_fields = ["activation_date", "last_access"]


@admin.register(RegistrationHeader)
class RegistrationHeaderAdmin(admin.ModelAdmin):
    """Admin interface for RegistrationHeader model."""

    list_display = ["tax_id", "company_name", "product", "version", "total_devices", "license", "updated_at"]
    list_filter = ["product"]
    search_fields = ["tax_id", "company_name"]
    readonly_fields = ["total_devices", "created_at", "updated_at"]
    raw_id_fields = ["license"]
    inlines = [DeviceRegistrationInline]
