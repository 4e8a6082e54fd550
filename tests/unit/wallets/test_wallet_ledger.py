"""
Unit tests for the wallet ledger rules.
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from core.domain.exceptions import InsufficientFundsError, InvalidAmountError, ValidationError
from core.domain.value_objects import Actor, Role, WalletTransactionType
from wallets.domain.services import WalletLedger
from wallets.domain.wallet import CompanyWallet, WalletTransaction

NOW = datetime(2025, 6, 1, 8, 0, tzinfo=timezone.utc)
ACTOR = Actor(operator_id=uuid.uuid4(), role=Role.ADMIN, name="admin")


@pytest.fixture
def parent_wallet():
    return CompanyWallet.create(uuid.uuid4())


@pytest.fixture
def child_wallet():
    return CompanyWallet.create(uuid.uuid4())


class TestWalletLedger:
    """Tests for WalletLedger."""

    @pytest.mark.parametrize("amount", [0, "0.00", -5, "-0.01", "abc", None])
    def test_rejects_non_positive_amounts(self, amount):
        """Test zero, negative and garbage amounts are refused."""
        with pytest.raises(InvalidAmountError):
            WalletLedger.validate_amount(amount)

    def test_amounts_are_quantized(self):
        """Test amounts are rounded half-up to cents."""
        assert WalletLedger.validate_amount("10.005") == Decimal("10.01")

    def test_recharge(self, parent_wallet):
        """Test a recharge credits the wallet and writes one row."""
        result = WalletLedger.recharge(parent_wallet, "100", ACTOR, NOW)

        wallet = result.wallets[parent_wallet.company_id]
        assert wallet.balance == Decimal("100.00")
        assert wallet.total_recharged == Decimal("100.00")
        assert wallet.last_recharge_date == NOW
        assert wallet.version == parent_wallet.version + 1

        (entry,) = result.entries
        assert entry.transaction_type == WalletTransactionType.RECHARGE
        assert (entry.balance_before, entry.balance_after) == (Decimal("0.00"), Decimal("100.00"))
        assert entry.created_by == ACTOR.operator_id

    def test_spend_insufficient_funds(self, parent_wallet):
        """Test spending more than the balance is refused."""
        funded = WalletLedger.recharge(parent_wallet, "30", ACTOR, NOW).wallets[parent_wallet.company_id]
        with pytest.raises(InsufficientFundsError):
            WalletLedger.spend(funded, "30.01", ACTOR, NOW)

    def test_spend_whole_balance(self, parent_wallet):
        """Test the balance may be spent down to exactly zero."""
        funded = WalletLedger.recharge(parent_wallet, "30", ACTOR, NOW).wallets[parent_wallet.company_id]
        result = WalletLedger.spend(funded, "30", ACTOR, NOW, related_entity_type="license")

        assert result.wallets[funded.company_id].balance == Decimal("0.00")
        assert result.wallets[funded.company_id].total_spent == Decimal("30.00")
        assert result.entries[0].related_entity_type == "license"

    def test_transfer_to_same_company(self, parent_wallet):
        """Test a wallet cannot transfer to itself."""
        with pytest.raises(ValidationError):
            WalletLedger.transfer(parent_wallet, parent_wallet, "1", ACTOR, NOW)

    def test_recharge_spend_transfer_sequence(self, parent_wallet, child_wallet):
        """Test balances and ledger rows after recharge 100, spend 50, transfer 20."""
        entries = []
        result = WalletLedger.recharge(parent_wallet, "100", ACTOR, NOW)
        entries += result.entries
        parent = result.wallets[parent_wallet.company_id]

        result = WalletLedger.spend(parent, "50", ACTOR, NOW)
        entries += result.entries
        parent = result.wallets[parent.company_id]

        result = WalletLedger.transfer(parent, child_wallet, "20", ACTOR, NOW)
        entries += result.entries
        parent = result.wallets[parent.company_id]
        child = result.wallets[child_wallet.company_id]

        assert parent.balance == Decimal("30.00")
        assert child.balance == Decimal("20.00")
        assert parent.total_spent == Decimal("50.00")
        assert child.total_recharged == Decimal("0.00")

        out_row, in_row = result.entries
        assert out_row.transaction_type == WalletTransactionType.TRANSFER_OUT
        assert in_row.transaction_type == WalletTransactionType.TRANSFER_IN
        assert out_row.correlation_id == in_row.correlation_id is not None
        assert out_row.counterparty_company_id == child.company_id
        assert in_row.counterparty_company_id == parent.company_id

        parent_rows = [entry for entry in entries if entry.company_id == parent.company_id]
        child_rows = [entry for entry in entries if entry.company_id == child.company_id]
        assert WalletLedger.running_balance(parent_rows) == parent.balance
        assert WalletLedger.running_balance(child_rows) == child.balance


class TestWalletEntities:
    """Tests for wallet entity validation."""

    def test_new_wallet_is_empty(self):
        """Test a new wallet starts at zero."""
        wallet = CompanyWallet.create(uuid.uuid4())
        assert wallet.balance == Decimal("0.00")
        assert wallet.version == 0

    def test_negative_balance_rejected(self):
        """Test a wallet can never hold a negative balance."""
        wallet = CompanyWallet.create(uuid.uuid4())
        with pytest.raises(ValueError):
            wallet.debited(Decimal("1.00"), NOW)

    def test_unbalanced_row_rejected(self):
        """Test a row whose balances do not add up is refused."""
        with pytest.raises(ValueError):
            WalletTransaction(
                id=uuid.uuid4(),
                company_id=uuid.uuid4(),
                transaction_type=WalletTransactionType.SPEND,
                amount=Decimal("5.00"),
                balance_before=Decimal("10.00"),
                balance_after=Decimal("15.00"),
                created_at=NOW,
            )
