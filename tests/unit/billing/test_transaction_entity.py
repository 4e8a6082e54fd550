"""
Unit tests for billing Transaction domain entity.
"""

import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from billing.domain.transaction import CREDITS_PAYMENT_METHOD, Transaction
from core.domain.exceptions import ValidationError
from core.domain.value_objects import TransactionStatus, TransactionType

NOW = datetime(2025, 4, 2, 14, 0, tzinfo=timezone.utc)


def make_transaction(amount="120", discount="20") -> Transaction:
    return Transaction.create(
        license_id=uuid.uuid4(),
        client_id=uuid.uuid4(),
        company_id=uuid.uuid4(),
        transaction_type=TransactionType.ACTIVATION,
        amount=amount,
        discount=discount,
        now=NOW,
    )


class TestTransactionEntity:
    """Tests for Transaction domain entity."""

    def test_create_transaction(self):
        """Test a new transaction is pending with a computed final amount."""
        transaction = make_transaction()

        assert transaction.status == TransactionStatus.PENDING
        assert transaction.amount == Decimal("120.00")
        assert transaction.final_amount == Decimal("100.00")
        assert transaction.payment_date is None

    def test_zero_amount_allowed(self):
        """Test free charges can still be recorded."""
        assert make_transaction("0", "0").final_amount == Decimal("0.00")

    @pytest.mark.parametrize(
        "amount, discount",
        [("-1", "0"), ("10", "-1"), ("10", "10.01"), ("ten", "0")],
    )
    def test_invalid_amounts(self, amount, discount):
        """Test negative, oversized or garbage figures raise ValidationError."""
        with pytest.raises(ValidationError):
            make_transaction(amount, discount)

    def test_paid_status_stamps_payment_date(self):
        """Test completing a transaction records the payment date."""
        completed = make_transaction().with_status(TransactionStatus.COMPLETED, NOW, payment_method="card")

        assert completed.payment_date == NOW
        assert completed.payment_method == "card"

    def test_back_to_pending_clears_payment_date(self):
        """Test reopening a paid transaction clears the payment date."""
        completed = make_transaction().with_status(TransactionStatus.COMPLETED, NOW)
        reopened = completed.with_status(TransactionStatus.PENDING, NOW + timedelta(hours=1))

        assert reopened.payment_date is None
        assert reopened.updated_at == NOW + timedelta(hours=1)

    def test_failed_keeps_payment_date(self):
        """Test a failure does not touch the payment date."""
        failed = make_transaction().with_status(TransactionStatus.FAILED, NOW)
        assert failed.payment_date is None

    def test_pay_with_credits(self):
        """Test credits payment records method, amount and date."""
        operator_id = uuid.uuid4()
        paid = make_transaction().pay_with_credits(NOW, operator_id)

        assert paid.status == TransactionStatus.PAID_WITH_CREDITS
        assert paid.payment_method == CREDITS_PAYMENT_METHOD
        assert paid.credits_used == Decimal("100.00")
        assert paid.payment_date == NOW
        assert paid.modified_by == operator_id

    def test_pay_twice_rejected(self):
        """Test an already paid transaction cannot be paid again."""
        paid = make_transaction().with_status(TransactionStatus.COMPLETED, NOW)
        with pytest.raises(ValidationError):
            paid.pay_with_credits(NOW)

    @pytest.mark.parametrize(
        "status", [TransactionStatus.PENDING, TransactionStatus.COMPLETED, TransactionStatus.FAILED]
    )
    def test_credit_payment_is_final(self, status):
        """Test a wallet-settled transaction cannot change status by hand."""
        paid = make_transaction().pay_with_credits(NOW)
        with pytest.raises(ValidationError):
            paid.with_status(status, NOW + timedelta(hours=1))
