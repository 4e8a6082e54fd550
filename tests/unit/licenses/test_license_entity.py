"""
Unit tests for License domain entity.
"""

import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from core.domain.exceptions import DeviceAlreadyBoundError, InvalidLicenseStatusError
from core.domain.value_objects import LicenseStatus, LicenseType
from licenses.domain.license import License

NOW = datetime(2025, 3, 15, 12, 0, tzinfo=timezone.utc)


def make_license(license_type=LicenseType.ANNUAL, **overrides) -> License:
    license = License.create(
        client_id=uuid.uuid4(),
        product_id=uuid.uuid4(),
        activation_key="ANNUAL-AAAA-BBBB-CCCC",
        license_type=license_type,
        price=Decimal("120"),
        discount=Decimal("20"),
        now=NOW,
    )
    for key, value in overrides.items():
        object.__setattr__(license, key, value)
    return license


class TestLicenseEntity:
    """Tests for License domain entity."""

    def test_create_license(self):
        """Test creating a license entity."""
        license = make_license()

        assert license.status == LicenseStatus.PENDING
        assert license.price == Decimal("120.00")
        assert license.final_price == Decimal("100.00")
        assert license.computer_key is None
        assert license.created_at == NOW

    def test_trial_starts_as_demo(self):
        """Test trial licenses start in demo status."""
        assert make_license(LicenseType.TRIAL).status == LicenseStatus.DEMO

    def test_final_price_never_negative(self):
        """Test a discount above the price floors the final price at zero."""
        license = make_license(discount=Decimal("150.00"))
        assert license.final_price == Decimal("0.00")

    def test_rejects_negative_price(self):
        """Test negative prices are rejected."""
        with pytest.raises(ValueError):
            License.create(
                client_id=uuid.uuid4(),
                product_id=uuid.uuid4(),
                activation_key="KEY",
                license_type=LicenseType.MONTHLY,
                price=Decimal("-1"),
            )

    def test_rejects_zero_device_limit(self):
        """Test device limits below one are rejected."""
        with pytest.raises(ValueError):
            License.create(
                client_id=uuid.uuid4(),
                product_id=uuid.uuid4(),
                activation_key="KEY",
                license_type=LicenseType.MONTHLY,
                max_devices=0,
            )


class TestBindDevice:
    """Tests for License.bind_device."""

    def test_first_activation(self):
        """Test the first bind sets key, dates and active status."""
        expiry = NOW + timedelta(days=364)
        bound = make_license().bind_device("PC-1", NOW, expiry)

        assert bound.computer_key == "PC-1"
        assert bound.activation_date == NOW
        assert bound.expiry_date == expiry
        assert bound.status == LicenseStatus.ACTIVE

    def test_demo_becomes_active(self):
        """Test activating a trial moves it from demo to active."""
        bound = make_license(LicenseType.TRIAL).bind_device("PC-1", NOW, NOW + timedelta(days=30))
        assert bound.status == LicenseStatus.ACTIVE

    def test_same_device_keeps_first_dates(self):
        """Test re-activation on the bound device keeps activation and expiry."""
        first = make_license().bind_device("PC-1", NOW, NOW + timedelta(days=364))
        later = NOW + timedelta(days=10)

        again = first.bind_device("PC-1", later, later + timedelta(days=364))

        assert again.activation_date == NOW
        assert again.expiry_date == NOW + timedelta(days=364)

    def test_other_device_rejected(self):
        """Test a second device cannot take over the license."""
        bound = make_license().bind_device("PC-1", NOW, None)
        with pytest.raises(DeviceAlreadyBoundError):
            bound.bind_device("PC-2", NOW, None)


class TestLifecycle:
    """Tests for renew, suspend and resume."""

    def test_renew_extends_expiry(self):
        """Test renewing sets the new expiry."""
        license = make_license(status=LicenseStatus.ACTIVE, expiry_date=NOW + timedelta(days=5))
        renewed = license.renew(NOW + timedelta(days=370), NOW)

        assert renewed.expiry_date == NOW + timedelta(days=370)
        assert renewed.status == LicenseStatus.ACTIVE

    def test_renew_revives_expired_license(self):
        """Test an expired activated license returns to active."""
        license = make_license(
            status=LicenseStatus.EXPIRED,
            activation_date=NOW - timedelta(days=400),
            expiry_date=NOW - timedelta(days=35),
        )
        assert license.renew(NOW + timedelta(days=364), NOW).status == LicenseStatus.ACTIVE

    def test_renew_expired_never_activated_is_pending(self):
        """Test an expired license that was never activated returns to pending."""
        license = make_license(status=LicenseStatus.EXPIRED, expiry_date=NOW - timedelta(days=1))
        assert license.renew(NOW + timedelta(days=364), NOW).status == LicenseStatus.PENDING

    def test_renew_suspended_rejected(self):
        """Test suspended licenses cannot be renewed."""
        license = make_license(status=LicenseStatus.SUSPENDED)
        with pytest.raises(InvalidLicenseStatusError):
            license.renew(NOW + timedelta(days=30), NOW)

    def test_renew_into_the_past_rejected(self):
        """Test the renewed expiry must lie after now."""
        with pytest.raises(InvalidLicenseStatusError):
            make_license().renew(NOW, NOW)

    def test_suspend_and_resume_activated(self):
        """Test an activated license resumes as active."""
        license = make_license().bind_device("PC-1", NOW, None)
        suspended = license.suspend(NOW)

        assert suspended.status == LicenseStatus.SUSPENDED
        assert suspended.resume(NOW).status == LicenseStatus.ACTIVE

    def test_resume_never_activated_trial(self):
        """Test a trial that never ran resumes as demo."""
        suspended = make_license(LicenseType.TRIAL).suspend(NOW)
        assert suspended.resume(NOW).status == LicenseStatus.DEMO

    def test_suspend_twice_rejected(self):
        """Test suspending a suspended license fails."""
        with pytest.raises(InvalidLicenseStatusError):
            make_license().suspend(NOW).suspend(NOW)

    def test_resume_requires_suspension(self):
        """Test resume only applies to suspended licenses."""
        with pytest.raises(InvalidLicenseStatusError):
            make_license().resume(NOW)
