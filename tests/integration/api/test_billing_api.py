"""
Integration tests for billing transaction and dashboard endpoints.
"""
from decimal import Decimal

import pytest
from django.urls import reverse
from django.utils import timezone

from billing.infrastructure.models import Transaction as TransactionModel
from wallets.infrastructure.models import CompanyWallet as WalletModel


@pytest.fixture
def pending_transaction(make_license, company_tree):
    license = make_license()
    return TransactionModel.objects.create(
        license=license,
        client=license.client,
        company=company_tree["sub_company"],
        transaction_type="activation",
        amount=Decimal("120.00"),
        discount=Decimal("20.00"),
        final_amount=Decimal("100.00"),
        created_at=timezone.now(),
        updated_at=timezone.now(),
    )


@pytest.mark.django_db
@pytest.mark.integration
class TestTransactionAPI:
    """Tests for transaction endpoints."""

    def test_create_transaction(self, authenticated_client, reseller_operator, make_license):
        """Test amounts default to the license price."""
        license = make_license()
        client = authenticated_client(reseller_operator)

        response = client.post(
            reverse("transaction-list"),
            {"license_id": str(license.id), "transaction_type": "renewal"},
            format="json",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "pending"
        assert data["final_amount"] == "100.00"
        assert data["modified_by"] == str(reseller_operator.id)

    def test_discount_above_amount(self, authenticated_client, superadmin_operator, make_license):
        """Test a discount larger than the amount is refused."""
        license = make_license()
        client = authenticated_client(superadmin_operator)

        response = client.post(
            reverse("transaction-list"),
            {"license_id": str(license.id), "transaction_type": "deferred", "amount": "10.00", "discount": "15.00"},
            format="json",
        )

        assert response.status_code == 400

    def test_update_status(self, authenticated_client, reseller_operator, pending_transaction):
        """Test completing a transaction stamps its payment date."""
        client = authenticated_client(reseller_operator)

        response = client.post(
            reverse("transaction-status", args=[pending_transaction.id]),
            {"status": "completed", "payment_method": "card"},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["status"] == "completed"
        assert response.json()["payment_date"] is not None

    def test_status_cannot_claim_credit_payment(self, authenticated_client, superadmin_operator, pending_transaction):
        """Test paid_with_credits is not a manual status."""
        client = authenticated_client(superadmin_operator)

        response = client.post(
            reverse("transaction-status", args=[pending_transaction.id]),
            {"status": "paid_with_credits"},
            format="json",
        )

        assert response.status_code == 400

    def test_list_filtered_by_status(self, authenticated_client, reseller_operator, pending_transaction):
        """Test listing transactions by status."""
        client = authenticated_client(reseller_operator)

        pending = client.get(reverse("transaction-list"), {"status": "pending"})
        completed = client.get(reverse("transaction-list"), {"status": "completed"})

        assert [row["id"] for row in pending.json()] == [str(pending_transaction.id)]
        assert completed.json() == []


@pytest.mark.django_db
@pytest.mark.integration
class TestPayWithCreditsAPI:
    """Tests for POST /api/v1/transactions/<id>/pay-with-credits/."""

    def test_pay_with_credits(self, authenticated_client, reseller_operator, company_tree, pending_transaction):
        """Test the wallet is debited and the transaction marked paid."""
        WalletModel.objects.create(company=company_tree["sub_company"], balance=Decimal("150.00"))
        client = authenticated_client(reseller_operator)

        response = client.post(reverse("transaction-pay-with-credits", args=[pending_transaction.id]))

        assert response.status_code == 200
        assert response.json()["status"] == "paid_with_credits"
        assert response.json()["credits_used"] == "100.00"
        assert WalletModel.objects.get(company=company_tree["sub_company"]).balance == Decimal("50.00")

    def test_insufficient_credits(self, authenticated_client, reseller_operator, company_tree, pending_transaction):
        """Test an empty wallet leaves the transaction pending."""
        client = authenticated_client(reseller_operator)

        response = client.post(reverse("transaction-pay-with-credits", args=[pending_transaction.id]))

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "INSUFFICIENT_FUNDS"
        pending_transaction.refresh_from_db()
        assert pending_transaction.status == "pending"


@pytest.mark.django_db
@pytest.mark.integration
class TestDashboardAPI:
    """Tests for GET /api/v1/dashboard/stats/."""

    def test_dashboard_stats(self, authenticated_client, superadmin_operator, make_license, client_row):
        """Test the dashboard figures."""
        make_license()
        make_license(status="demo")
        client = authenticated_client(superadmin_operator)

        response = client.get(reverse("dashboard-stats"))

        assert response.status_code == 200
        data = response.json()
        assert data["active_licenses"] == 1
        assert data["demo_licenses"] == 1
        assert data["validated_clients"] == 1
        assert data["monthly_revenue"] == "0.00"
