"""
Serializers for log endpoints.
"""

from rest_framework import serializers


class ActivationLogSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    license_id = serializers.UUIDField(allow_null=True)
    activation_key = serializers.CharField()
    key_type = serializers.CharField()
    result = serializers.CharField()
    device_info = serializers.DictField()
    ip_address = serializers.CharField(allow_null=True)
    user_agent = serializers.CharField()
    error_message = serializers.CharField()
    created_at = serializers.DateTimeField()


class AccessLogSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    operator_id = serializers.UUIDField(allow_null=True)
    action = serializers.CharField()
    resource = serializers.CharField()
    status_code = serializers.IntegerField(allow_null=True)
    ip_address = serializers.CharField(allow_null=True)
    user_agent = serializers.CharField()
    created_at = serializers.DateTimeField()


class ActivationLogParamsSerializer(serializers.Serializer):
    license_id = serializers.UUIDField(required=False)
    limit = serializers.IntegerField(min_value=1, max_value=1000, default=100)


class AccessLogParamsSerializer(serializers.Serializer):
    operator_id = serializers.UUIDField(required=False)
    limit = serializers.IntegerField(min_value=1, max_value=1000, default=100)
