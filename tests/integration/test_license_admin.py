"""
Integration tests for the license admin.
"""
from datetime import timedelta

import pytest
from django.contrib import admin
from django.utils import timezone

from licenses.admin import LicenseAdmin
from licenses.infrastructure.models import License as LicenseModel


@pytest.fixture
def license_admin():
    return LicenseAdmin(LicenseModel, admin.site)


@pytest.mark.django_db
@pytest.mark.integration
class TestLicenseAdminStatus:
    """Tests for the status column of the license admin."""

    def test_lapsed_license_shows_expired(self, license_admin, make_license):
        """Test a stored active license past its expiry is shown as expired."""
        license = make_license(expiry_date=timezone.now() - timedelta(minutes=1))

        assert "EXPIRED" in license_admin.status_display(license)

    def test_suspension_wins_over_expiry(self, license_admin, make_license):
        """Test a suspended license stays suspended after its expiry."""
        license = make_license(status="suspended", expiry_date=timezone.now() - timedelta(days=1))

        assert "SUSPENDED" in license_admin.status_display(license)

    def test_current_license(self, license_admin, make_license):
        """Test a license inside its term shows its stored status."""
        assert "ACTIVE" in license_admin.status_display(make_license())
