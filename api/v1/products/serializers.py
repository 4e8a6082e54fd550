"""
Serializers for product catalog endpoints.
"""

from rest_framework import serializers

from api.v1.common import MoneyField
from core.domain.value_objects import LicenseType


class CreateProductRequestSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    version = serializers.CharField(max_length=50)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    license_type = serializers.ChoiceField(
        choices=[member.value for member in LicenseType], default="permanent"
    )
    price = MoneyField(default=0)
    discount = MoneyField(default=0)
    max_users = serializers.IntegerField(min_value=1, default=1)
    max_devices = serializers.IntegerField(min_value=1, default=1)
    trial_days = serializers.IntegerField(min_value=1, default=30)

    def validate(self, attrs):
        if attrs["discount"] > attrs["price"]:
            raise serializers.ValidationError({"discount": "Discount cannot exceed the price"})
        return attrs


class ProductSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    version = serializers.CharField()
    description = serializers.CharField()
    license_type = serializers.CharField()
    price = MoneyField()
    discount = MoneyField()
    max_users = serializers.IntegerField()
    max_devices = serializers.IntegerField()
    trial_days = serializers.IntegerField()
    created_at = serializers.DateTimeField()
