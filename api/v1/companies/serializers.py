"""
Serializers for company and client endpoints.
"""

from rest_framework import serializers

from core.domain.value_objects import ClientStatus, CompanyStatus, CompanyType


def _choices(enum):
    return [member.value for member in enum]


class CreateCompanyRequestSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    company_type = serializers.ChoiceField(choices=_choices(CompanyType))
    parent_id = serializers.UUIDField(required=False, allow_null=True)
    status = serializers.ChoiceField(choices=_choices(CompanyStatus), default="active")
    contact_info = serializers.DictField(required=False, default=dict)


class UpdateCompanyRequestSerializer(serializers.Serializer):
    """Partial update; ``parent_id`` may be null to detach a company."""

    name = serializers.CharField(max_length=255, required=False)
    status = serializers.ChoiceField(choices=_choices(CompanyStatus), required=False)
    contact_info = serializers.DictField(required=False)
    parent_id = serializers.UUIDField(required=False, allow_null=True)


class CompanySerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    company_type = serializers.CharField()
    parent_id = serializers.UUIDField(allow_null=True)
    status = serializers.CharField()
    contact_info = serializers.DictField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class CreateClientRequestSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    email = serializers.EmailField()
    company_id = serializers.UUIDField(required=False, allow_null=True)
    contact_info = serializers.DictField(required=False, default=dict)
    is_multi_site = serializers.BooleanField(default=False)
    is_multi_user = serializers.BooleanField(default=True)


class UpdateClientStatusRequestSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=_choices(ClientStatus))


class ClientSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    company_id = serializers.UUIDField(allow_null=True)
    name = serializers.CharField()
    email = serializers.EmailField()
    status = serializers.CharField()
    contact_info = serializers.DictField()
    is_multi_site = serializers.BooleanField()
    is_multi_user = serializers.BooleanField()
    created_at = serializers.DateTimeField()
