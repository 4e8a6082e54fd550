"""
Integration tests for billing transactions and the dashboard.
"""
import uuid
from datetime import timedelta
from decimal import Decimal

import pytest
from asgiref.sync import async_to_sync
from django.utils import timezone

from api.v1 import container
from billing.application.commands.transaction_commands import (
    CreateTransactionCommand,
    PayTransactionWithCreditsCommand,
    UpdateTransactionStatusCommand,
)
from billing.application.queries.billing_queries import (
    GetDashboardStatsQuery,
    ListTransactionsQuery,
)
from billing.infrastructure.models import Transaction as TransactionModel
from core.domain.exceptions import (
    InsufficientFundsError,
    LicenseNotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from core.domain.value_objects import TransactionStatus, TransactionType
from wallets.application.commands.wallet_commands import RechargeWalletCommand
from wallets.infrastructure.models import CompanyWallet as WalletModel
from wallets.infrastructure.models import WalletTransaction as WalletTransactionModel


def run(handler, message):
    return async_to_sync(handler.handle)(message)


def create_transaction(license_row, actor, **kwargs):
    return run(
        container.create_transaction_handler(),
        CreateTransactionCommand(
            license_id=license_row.id,
            transaction_type=kwargs.pop("transaction_type", TransactionType.DEFERRED),
            actor=actor,
            **kwargs,
        ),
    )


@pytest.mark.django_db
@pytest.mark.integration
class TestTransactionHandlers:
    """Integration tests for transaction handlers."""

    def test_create_defaults_to_license_price(self, make_license, reseller_actor, company_tree):
        """Test amounts default to the license price and discount."""
        transaction = create_transaction(make_license(), reseller_actor)

        assert transaction.status == "pending"
        assert transaction.final_amount == Decimal("100.00")
        assert transaction.company_id == company_tree["sub_company"].id

    def test_create_rejects_oversized_discount(self, make_license, superadmin):
        """Test a discount above the amount is a validation error."""
        with pytest.raises(ValidationError):
            create_transaction(make_license(), superadmin, amount=Decimal("10"), discount=Decimal("11"))

    def test_create_for_missing_license(self, superadmin):
        """Test billing an unknown license fails."""
        with pytest.raises(LicenseNotFoundError):
            run(
                container.create_transaction_handler(),
                CreateTransactionCommand(uuid.uuid4(), TransactionType.RENEWAL, superadmin),
            )

    def test_status_change_stamps_payment_date(self, make_license, superadmin):
        """Test completing and reopening a transaction."""
        transaction = create_transaction(make_license(), superadmin)
        handler = container.update_transaction_status_handler()

        completed = run(
            handler,
            UpdateTransactionStatusCommand(transaction.id, TransactionStatus.COMPLETED, superadmin, "card"),
        )
        assert completed.payment_date is not None
        assert completed.payment_method == "card"

        reopened = run(handler, UpdateTransactionStatusCommand(transaction.id, TransactionStatus.PENDING, superadmin))
        assert reopened.payment_date is None
        assert TransactionModel.objects.get(id=transaction.id).status == "pending"

    def test_status_change_outside_scope(self, make_license, superadmin, other_reseller_actor):
        """Test operators cannot touch transactions of other resellers."""
        transaction = create_transaction(make_license(), superadmin)
        with pytest.raises(PermissionDeniedError):
            run(
                container.update_transaction_status_handler(),
                UpdateTransactionStatusCommand(transaction.id, TransactionStatus.COMPLETED, other_reseller_actor),
            )

    def test_list_is_scoped(self, make_license, superadmin, reseller_actor, other_reseller_actor):
        """Test transaction lists only show the operator's subtree."""
        transaction = create_transaction(make_license(), superadmin)

        visible = run(container.list_transactions_handler(), ListTransactionsQuery(reseller_actor))
        hidden = run(container.list_transactions_handler(), ListTransactionsQuery(other_reseller_actor))

        assert [row.id for row in visible] == [transaction.id]
        assert hidden == []


@pytest.mark.django_db
@pytest.mark.integration
class TestPayWithCredits:
    """Integration tests for paying transactions from a wallet."""

    def test_pays_from_booking_company_wallet(self, make_license, superadmin, company_tree):
        """Test the wallet debit and the paid status land together."""
        sub = company_tree["sub_company"]
        run(container.recharge_wallet_handler(), RechargeWalletCommand(sub.id, Decimal("150"), superadmin))
        transaction = create_transaction(make_license(), superadmin)

        paid = run(
            container.pay_transaction_with_credits_handler(),
            PayTransactionWithCreditsCommand(transaction.id, superadmin),
        )

        assert paid.status == "paid_with_credits"
        assert paid.credits_used == Decimal("100.00")
        assert WalletModel.objects.get(company=sub).balance == Decimal("50.00")
        spend_row = WalletTransactionModel.objects.get(company=sub, transaction_type="spend")
        assert spend_row.related_entity_type == "transaction"
        assert spend_row.related_entity_id == str(transaction.id)

    def test_insufficient_funds_keeps_transaction_pending(self, make_license, superadmin, company_tree):
        """Test a failed payment leaves both the wallet and the transaction untouched."""
        sub = company_tree["sub_company"]
        run(container.recharge_wallet_handler(), RechargeWalletCommand(sub.id, Decimal("20"), superadmin))
        transaction = create_transaction(make_license(), superadmin)

        with pytest.raises(InsufficientFundsError):
            run(
                container.pay_transaction_with_credits_handler(),
                PayTransactionWithCreditsCommand(transaction.id, superadmin),
            )

        assert TransactionModel.objects.get(id=transaction.id).status == "pending"
        assert WalletModel.objects.get(company=sub).balance == Decimal("20.00")

    def test_cannot_pay_twice(self, make_license, superadmin, company_tree):
        """Test a paid transaction is not charged again."""
        sub = company_tree["sub_company"]
        run(container.recharge_wallet_handler(), RechargeWalletCommand(sub.id, Decimal("500"), superadmin))
        transaction = create_transaction(make_license(), superadmin)
        handler = container.pay_transaction_with_credits_handler()
        run(handler, PayTransactionWithCreditsCommand(transaction.id, superadmin))

        with pytest.raises(ValidationError):
            run(handler, PayTransactionWithCreditsCommand(transaction.id, superadmin))
        assert WalletModel.objects.get(company=sub).balance == Decimal("400.00")

    def test_credit_payment_cannot_be_reopened(self, make_license, superadmin, company_tree):
        """Test a wallet-settled transaction keeps its status and is charged once."""
        sub = company_tree["sub_company"]
        run(container.recharge_wallet_handler(), RechargeWalletCommand(sub.id, Decimal("500"), superadmin))
        transaction = create_transaction(make_license(), superadmin)
        pay = container.pay_transaction_with_credits_handler()
        run(pay, PayTransactionWithCreditsCommand(transaction.id, superadmin))

        for status in (TransactionStatus.PENDING, TransactionStatus.COMPLETED, TransactionStatus.FAILED):
            with pytest.raises(ValidationError):
                run(
                    container.update_transaction_status_handler(),
                    UpdateTransactionStatusCommand(transaction.id, status, superadmin),
                )
        with pytest.raises(ValidationError):
            run(pay, PayTransactionWithCreditsCommand(transaction.id, superadmin))

        row = TransactionModel.objects.get(id=transaction.id)
        assert row.status == "paid_with_credits"
        assert row.credits_used == Decimal("100.00")
        assert WalletModel.objects.get(company=sub).balance == Decimal("400.00")
        assert WalletTransactionModel.objects.filter(company=sub, transaction_type="spend").count() == 1


@pytest.mark.django_db
@pytest.mark.integration
class TestDashboardStats:
    """Integration tests for dashboard figures."""

    def test_figures(self, make_license, trial_product, client_row, superadmin):
        """Test counts use computed status and revenue only counts paid rows."""
        now = timezone.now()
        make_license()
        make_license(expiry_date=now - timedelta(days=1))
        make_license(expiry_date=now + timedelta(days=5))
        make_license(product=trial_product, license_type="trial", status="demo", activation_date=None)
        paid = create_transaction(make_license(status="suspended"), superadmin)
        run(
            container.update_transaction_status_handler(),
            UpdateTransactionStatusCommand(paid.id, TransactionStatus.COMPLETED, superadmin),
        )
        create_transaction(make_license(status="suspended"), superadmin)

        stats = run(container.dashboard_stats_handler(), GetDashboardStatsQuery(superadmin))

        assert stats.active_licenses == 2
        assert stats.demo_licenses == 1
        assert stats.validated_clients == 1
        assert stats.expiring_renewals == 1
        assert stats.monthly_revenue == Decimal("100.00")
        assert stats.daily_revenue == Decimal("100.00")

    def test_figures_are_scoped(self, make_license, other_reseller_actor):
        """Test operators only see figures of their subtree."""
        make_license()
        stats = run(container.dashboard_stats_handler(), GetDashboardStatsQuery(other_reseller_actor))
        assert stats.active_licenses == 0
        assert stats.validated_clients == 0

    def test_cache_invalidated_by_events(self, make_license, superadmin):
        """Test a new transaction event drops the cached figures."""
        license_row = make_license(status="suspended")
        handler = container.dashboard_stats_handler()
        before = run(handler, GetDashboardStatsQuery(superadmin))

        transaction = create_transaction(license_row, superadmin)
        run(
            container.update_transaction_status_handler(),
            UpdateTransactionStatusCommand(transaction.id, TransactionStatus.COMPLETED, superadmin),
        )

        after = run(handler, GetDashboardStatsQuery(superadmin))
        assert after.daily_revenue == before.daily_revenue + Decimal("100.00")
