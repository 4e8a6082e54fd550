"""
Serializers for license endpoints.
"""

from rest_framework import serializers

from api.v1.common import MoneyField
from core.domain.value_objects import LicenseStatus, LicenseType


class IssueLicenseRequestSerializer(serializers.Serializer):
    """Fields left out fall back to the product template."""

    client_id = serializers.UUIDField()
    product_id = serializers.UUIDField()
    license_type = serializers.ChoiceField(
        choices=[member.value for member in LicenseType], required=False
    )
    price = MoneyField(required=False)
    discount = MoneyField(required=False)
    max_users = serializers.IntegerField(min_value=1, required=False)
    max_devices = serializers.IntegerField(min_value=1, required=False)
    renewal_enabled = serializers.BooleanField(default=False)
    expiry_date = serializers.DateTimeField(required=False, allow_null=True)
    assigned_company_id = serializers.UUIDField(required=False, allow_null=True)
    assigned_agent_id = serializers.UUIDField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class LicenseSerializer(serializers.Serializer):
    """``status`` is computed at read time; ``stored_status`` is what the row holds."""

    id = serializers.UUIDField()
    client_id = serializers.UUIDField()
    product_id = serializers.UUIDField()
    activation_key = serializers.CharField()
    license_type = serializers.CharField()
    status = serializers.CharField()
    stored_status = serializers.CharField()
    price = MoneyField()
    discount = MoneyField()
    final_price = MoneyField()
    max_users = serializers.IntegerField()
    max_devices = serializers.IntegerField()
    renewal_enabled = serializers.BooleanField()
    computer_key = serializers.CharField(allow_null=True)
    activation_date = serializers.DateTimeField(allow_null=True)
    expiry_date = serializers.DateTimeField(allow_null=True)
    assigned_company_id = serializers.UUIDField(allow_null=True)
    assigned_agent_id = serializers.UUIDField(allow_null=True)
    notes = serializers.CharField()
    created_at = serializers.DateTimeField()


class LicenseListParamsSerializer(serializers.Serializer):
    client_id = serializers.UUIDField(required=False)
    status = serializers.ChoiceField(choices=[member.value for member in LicenseStatus], required=False)


class ExpiringParamsSerializer(serializers.Serializer):
    days = serializers.IntegerField(min_value=1, max_value=366, required=False)


class AuthorizedDevicesSerializer(serializers.Serializer):
    license_id = serializers.UUIDField()
    authorized_devices = serializers.IntegerField()
