"""
Serializers for the device-facing activation endpoints.
"""

from rest_framework import serializers


class ActivateRequestSerializer(serializers.Serializer):
    activation_key = serializers.CharField(max_length=64)
    computer_key = serializers.CharField(max_length=255)
    device_info = serializers.DictField(required=False, default=dict)


class ValidateRequestSerializer(serializers.Serializer):
    activation_key = serializers.CharField(max_length=64)
    computer_key = serializers.CharField(max_length=255, required=False, allow_blank=True)
    device_info = serializers.DictField(required=False, default=dict)


class ActivationResultSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    message = serializers.CharField()
    error_code = serializers.CharField(allow_null=True)
    license_id = serializers.UUIDField(allow_null=True)
    status = serializers.CharField(allow_null=True)
    activation_date = serializers.DateTimeField(allow_null=True)
    expiry_date = serializers.DateTimeField(allow_null=True)


class ValidationResultSerializer(serializers.Serializer):
    valid = serializers.BooleanField()
    status = serializers.CharField(allow_null=True)
    expiry_date = serializers.DateTimeField(allow_null=True)
    message = serializers.CharField()
    error_code = serializers.CharField(allow_null=True)
