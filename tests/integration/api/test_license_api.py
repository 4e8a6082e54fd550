"""
Integration tests for license API endpoints.
"""
import uuid
from datetime import timedelta

import pytest
from django.urls import reverse
from django.utils import timezone

from billing.infrastructure.models import Transaction as TransactionModel
from licenses.infrastructure.models import License as LicenseModel


@pytest.mark.django_db
@pytest.mark.integration
class TestIssueLicenseAPI:
    """Tests for POST /api/v1/licenses/."""

    def test_issue_license(self, authenticated_client, reseller_operator, client_row, annual_product):
        """Test issuing a license from the product template."""
        client = authenticated_client(reseller_operator)

        response = client.post(
            reverse("license-list"),
            {"client_id": str(client_row.id), "product_id": str(annual_product.id)},
            format="json",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["license_type"] == "annual"
        assert data["status"] == "pending"
        assert data["final_price"] == "100.00"
        assert data["max_users"] == 3
        assert TransactionModel.objects.filter(license_id=data["id"], transaction_type="activation").count() == 1

    def test_issue_for_foreign_client(self, authenticated_client, other_reseller_operator, client_row, annual_product):
        """Test clients outside the operator's subtree are refused."""
        client = authenticated_client(other_reseller_operator)

        response = client.post(
            reverse("license-list"),
            {"client_id": str(client_row.id), "product_id": str(annual_product.id)},
            format="json",
        )

        assert response.status_code == 403
        assert LicenseModel.objects.count() == 0

    def test_issue_with_unknown_product(self, authenticated_client, superadmin_operator, client_row):
        """Test unknown products return 404."""
        client = authenticated_client(superadmin_operator)

        response = client.post(
            reverse("license-list"),
            {"client_id": str(client_row.id), "product_id": str(uuid.uuid4())},
            format="json",
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "PRODUCT_NOT_FOUND"


@pytest.mark.django_db
@pytest.mark.integration
class TestLicenseReadAPI:
    """Tests for license read endpoints."""

    def test_detail_reports_computed_status(self, authenticated_client, superadmin_operator, make_license):
        """Test a lapsed license reads expired while its row still says active."""
        license = make_license(expiry_date=timezone.now() - timedelta(days=1))
        client = authenticated_client(superadmin_operator)

        response = client.get(reverse("license-detail", args=[license.id]))

        assert response.status_code == 200
        assert response.json()["status"] == "expired"
        assert response.json()["stored_status"] == "active"

    def test_unknown_license(self, authenticated_client, superadmin_operator):
        """Test unknown licenses return 404."""
        client = authenticated_client(superadmin_operator)

        response = client.get(reverse("license-detail", args=[uuid.uuid4()]))

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "LICENSE_NOT_FOUND"

    def test_list_filtered_by_status(self, authenticated_client, reseller_operator, make_license):
        """Test the status filter applies to the computed status."""
        active = make_license()
        make_license(status="suspended")
        client = authenticated_client(reseller_operator)

        response = client.get(reverse("license-list"), {"status": "active"})

        assert response.status_code == 200
        assert [row["id"] for row in response.json()] == [str(active.id)]

    def test_list_hides_foreign_licenses(self, authenticated_client, other_reseller_operator, make_license):
        """Test another reseller sees nothing."""
        make_license()
        client = authenticated_client(other_reseller_operator)

        response = client.get(reverse("license-list"))

        assert response.status_code == 200
        assert response.json() == []

    def test_expiring(self, authenticated_client, superadmin_operator, make_license):
        """Test expiring licenses are listed closest first."""
        now = timezone.now()
        later = make_license(expiry_date=now + timedelta(days=20))
        sooner = make_license(expiry_date=now + timedelta(days=5))
        make_license(expiry_date=now + timedelta(days=90))
        client = authenticated_client(superadmin_operator)

        response = client.get(reverse("license-expiring"))

        assert response.status_code == 200
        assert [row["id"] for row in response.json()] == [str(sooner.id), str(later.id)]

    def test_expiring_with_custom_horizon(self, authenticated_client, superadmin_operator, make_license):
        """Test the days parameter widens the horizon."""
        make_license(expiry_date=timezone.now() + timedelta(days=90))
        client = authenticated_client(superadmin_operator)

        response = client.get(reverse("license-expiring"), {"days": 120})

        assert len(response.json()) == 1

    def test_authorized_devices(self, authenticated_client, superadmin_operator, make_license):
        """Test a license without registrations has no authorized devices."""
        license = make_license()
        client = authenticated_client(superadmin_operator)

        response = client.get(reverse("license-authorized-devices", args=[license.id]))

        assert response.status_code == 200
        assert response.json() == {"license_id": str(license.id), "authorized_devices": 0}


@pytest.mark.django_db
@pytest.mark.integration
class TestLicenseLifecycleAPI:
    """Tests for renew, suspend and resume endpoints."""

    def test_renew(self, authenticated_client, reseller_operator, make_license):
        """Test renewal extends the expiry by one annual term."""
        license = make_license()
        previous_expiry = license.expiry_date
        client = authenticated_client(reseller_operator)

        response = client.post(reverse("license-renew", args=[license.id]))

        assert response.status_code == 200
        license.refresh_from_db()
        assert license.expiry_date > previous_expiry + timedelta(days=360)
        assert TransactionModel.objects.filter(license_id=license.id, transaction_type="renewal").count() == 1

    def test_renew_permanent_license(self, authenticated_client, superadmin_operator, make_license):
        """Test permanent licenses cannot be renewed."""
        license = make_license(license_type="permanent", expiry_date=None)
        client = authenticated_client(superadmin_operator)

        response = client.post(reverse("license-renew", args=[license.id]))

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "INVALID_LICENSE_STATUS"

    def test_suspend_and_resume(self, authenticated_client, reseller_operator, make_license):
        """Test suspending then resuming a license."""
        license = make_license()
        client = authenticated_client(reseller_operator)

        suspended = client.post(reverse("license-suspend", args=[license.id]))
        assert suspended.status_code == 200
        assert suspended.json()["status"] == "suspended"

        resumed = client.post(reverse("license-resume", args=[license.id]))
        assert resumed.status_code == 200
        assert resumed.json()["status"] == "active"

    def test_resume_active_license(self, authenticated_client, reseller_operator, make_license):
        """Test resuming a license that is not suspended is a conflict."""
        license = make_license()
        client = authenticated_client(reseller_operator)

        response = client.post(reverse("license-resume", args=[license.id]))

        assert response.status_code == 409

    def test_suspend_outside_scope(self, authenticated_client, other_reseller_operator, make_license):
        """Test foreign licenses cannot be suspended."""
        license = make_license()
        client = authenticated_client(other_reseller_operator)

        response = client.post(reverse("license-suspend", args=[license.id]))

        assert response.status_code == 403
        license.refresh_from_db()
        assert license.status == "active"
