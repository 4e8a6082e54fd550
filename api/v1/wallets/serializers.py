"""
Serializers for wallet endpoints.
"""

from rest_framework import serializers

from api.v1.common import MoneyField


class LedgerAmountField(serializers.DecimalField):
    """Signed amount; non-positive values are refused by the ledger itself."""

    def __init__(self, **kwargs):
        kwargs.setdefault("max_digits", 12)
        kwargs.setdefault("decimal_places", 2)
        super().__init__(**kwargs)


class RechargeRequestSerializer(serializers.Serializer):
    amount = LedgerAmountField()
    description = serializers.CharField(required=False, allow_blank=True, default="")


class SpendRequestSerializer(serializers.Serializer):
    amount = LedgerAmountField()
    description = serializers.CharField(required=False, allow_blank=True, default="")
    related_entity_type = serializers.CharField(required=False, allow_blank=True, default="", max_length=50)
    related_entity_id = serializers.CharField(required=False, allow_blank=True, default="", max_length=64)


class TransferRequestSerializer(serializers.Serializer):
    from_company_id = serializers.UUIDField()
    to_company_id = serializers.UUIDField()
    amount = LedgerAmountField()
    description = serializers.CharField(required=False, allow_blank=True, default="")


class WalletSerializer(serializers.Serializer):
    company_id = serializers.UUIDField()
    balance = MoneyField()
    total_recharged = MoneyField()
    total_spent = MoneyField()
    last_recharge_date = serializers.DateTimeField(allow_null=True)


class WalletTransactionSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    company_id = serializers.UUIDField()
    transaction_type = serializers.CharField()
    amount = MoneyField()
    signed_amount = LedgerAmountField()
    balance_before = MoneyField()
    balance_after = MoneyField()
    description = serializers.CharField()
    related_entity_type = serializers.CharField()
    related_entity_id = serializers.CharField()
    counterparty_company_id = serializers.UUIDField(allow_null=True)
    correlation_id = serializers.UUIDField(allow_null=True)
    created_by = serializers.UUIDField(allow_null=True)
    created_at = serializers.DateTimeField()


class LedgerResultSerializer(serializers.Serializer):
    wallets = WalletSerializer(many=True)
    entries = WalletTransactionSerializer(many=True)


class LedgerParamsSerializer(serializers.Serializer):
    limit = serializers.IntegerField(min_value=1, max_value=500, default=50)
