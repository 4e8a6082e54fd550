"""
Serializers for billing endpoints.
"""

from rest_framework import serializers

from api.v1.common import MoneyField
from core.domain.value_objects import TransactionStatus, TransactionType


class CreateTransactionRequestSerializer(serializers.Serializer):
    license_id = serializers.UUIDField()
    transaction_type = serializers.ChoiceField(choices=[member.value for member in TransactionType])
    amount = MoneyField(required=False)
    discount = MoneyField(required=False)
    payment_method = serializers.CharField(required=False, allow_blank=True, default="", max_length=50)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class UpdateTransactionStatusRequestSerializer(serializers.Serializer):
    # paid_with_credits is reachable only through the pay-with-credits endpoint
    status = serializers.ChoiceField(
        choices=[
            member.value
            for member in TransactionStatus
            if member is not TransactionStatus.PAID_WITH_CREDITS
        ]
    )
    payment_method = serializers.CharField(required=False, allow_null=True, max_length=50)


class TransactionSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    license_id = serializers.UUIDField()
    client_id = serializers.UUIDField()
    company_id = serializers.UUIDField(allow_null=True)
    transaction_type = serializers.CharField()
    amount = MoneyField()
    discount = MoneyField()
    final_amount = MoneyField()
    payment_method = serializers.CharField()
    status = serializers.CharField()
    payment_date = serializers.DateTimeField(allow_null=True)
    credits_used = MoneyField(allow_null=True)
    notes = serializers.CharField()
    modified_by = serializers.UUIDField(allow_null=True)
    created_at = serializers.DateTimeField()


class TransactionListParamsSerializer(serializers.Serializer):
    license_id = serializers.UUIDField(required=False)
    status = serializers.ChoiceField(choices=[member.value for member in TransactionStatus], required=False)


class DashboardStatsSerializer(serializers.Serializer):
    active_licenses = serializers.IntegerField()
    demo_licenses = serializers.IntegerField()
    validated_clients = serializers.IntegerField()
    monthly_revenue = MoneyField()
    today_activations = serializers.IntegerField()
    expiring_renewals = serializers.IntegerField()
    daily_revenue = MoneyField()
