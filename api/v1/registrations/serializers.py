"""
Serializers for registration endpoints.
"""

from rest_framework import serializers

from api.v1.common import MoneyField


class RegisterDeviceRequestSerializer(serializers.Serializer):
    tax_id = serializers.CharField(max_length=20)
    company_name = serializers.CharField(max_length=255)
    product = serializers.CharField(max_length=100)
    device_uid = serializers.CharField(max_length=255)
    version = serializers.CharField(required=False, allow_blank=True, default="", max_length=50)
    module = serializers.CharField(required=False, allow_blank=True, default="", max_length=100)
    users = serializers.IntegerField(required=False, allow_null=True, min_value=0)
    os_info = serializers.CharField(required=False, allow_blank=True, default="")
    notes = serializers.CharField(required=False, allow_blank=True, default="")
    computer_key = serializers.CharField(required=False, allow_null=True, allow_blank=True, max_length=255)


class DeviceRegistrationResultSerializer(serializers.Serializer):
    tax_id = serializers.CharField()
    device_uid = serializers.CharField()
    created = serializers.BooleanField()
    total_devices = serializers.IntegerField()
    license_id = serializers.UUIDField(allow_null=True)
    last_access = serializers.DateTimeField(allow_null=True)


class DeviceRegistrationSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    device_uid = serializers.CharField()
    os_info = serializers.CharField()
    notes = serializers.CharField()
    activation_date = serializers.DateTimeField(allow_null=True)
    last_access = serializers.DateTimeField(allow_null=True)
    orders = serializers.IntegerField()
    sales = MoneyField()
    computer_key = serializers.CharField(allow_null=True)
    authorized = serializers.BooleanField()


class RegistrationSerializer(serializers.Serializer):
    tax_id = serializers.CharField()
    company_name = serializers.CharField()
    product = serializers.CharField()
    version = serializers.CharField()
    module = serializers.CharField()
    users = serializers.IntegerField()
    total_devices = serializers.IntegerField()
    license_id = serializers.UUIDField(allow_null=True)
    total_orders = serializers.IntegerField()
    total_sales = MoneyField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()
    devices = DeviceRegistrationSerializer(many=True)


class AssignLicenseRequestSerializer(serializers.Serializer):
    license_id = serializers.UUIDField()
