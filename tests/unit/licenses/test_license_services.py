"""
Unit tests for license domain services.
"""

import re
import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from core.domain.value_objects import LicenseStatus, LicenseType
from licenses.domain.license import License
from licenses.domain.services import (
    ActivationKeyGenerator,
    ExpiryCalculator,
    LicenseStatusPolicy,
)

NOW = datetime(2025, 1, 31, 9, 30, tzinfo=timezone.utc)


def license_with(status=LicenseStatus.ACTIVE, expiry_date=None, license_type=LicenseType.ANNUAL):
    return License(
        id=uuid.uuid4(),
        client_id=uuid.uuid4(),
        product_id=uuid.uuid4(),
        activation_key="ANNUAL-AAAA-BBBB-CCCC",
        license_type=license_type,
        status=status,
        price=Decimal("0.00"),
        discount=Decimal("0.00"),
        max_users=1,
        max_devices=1,
        trial_days=14,
        renewal_enabled=False,
        created_at=NOW,
        updated_at=NOW,
        expiry_date=expiry_date,
    )


class TestLicenseStatusPolicy:
    """Tests for LicenseStatusPolicy."""

    def test_past_expiry_is_expired(self):
        """Test an active license one second past expiry reads as expired."""
        license = license_with(expiry_date=NOW - timedelta(seconds=1))
        assert LicenseStatusPolicy.compute_status(license, NOW) == LicenseStatus.EXPIRED

    def test_expiry_moment_is_not_expired(self):
        """Test a license is still valid at the exact expiry moment."""
        license = license_with(expiry_date=NOW)
        assert LicenseStatusPolicy.compute_status(license, NOW) == LicenseStatus.ACTIVE

    def test_future_expiry_keeps_status(self):
        """Test a future expiry keeps the stored status."""
        license = license_with(status=LicenseStatus.DEMO, expiry_date=NOW + timedelta(seconds=1))
        assert LicenseStatusPolicy.compute_status(license, NOW) == LicenseStatus.DEMO

    def test_suspended_wins_over_expiry(self):
        """Test suspension is reported even after the expiry date."""
        license = license_with(status=LicenseStatus.SUSPENDED, expiry_date=NOW - timedelta(days=3))
        assert LicenseStatusPolicy.compute_status(license, NOW) == LicenseStatus.SUSPENDED

    def test_permanent_never_expires(self):
        """Test a license without expiry keeps its status."""
        license = license_with(license_type=LicenseType.PERMANENT)
        assert LicenseStatusPolicy.compute_status(license, NOW) == LicenseStatus.ACTIVE

    def test_is_expiring_within_horizon(self):
        """Test licenses ending inside the horizon are expiring."""
        license = license_with(expiry_date=NOW + timedelta(days=30))
        assert LicenseStatusPolicy.is_expiring(license, NOW, 30)
        assert not LicenseStatusPolicy.is_expiring(license, NOW, 29)

    def test_lapsed_license_is_not_expiring(self):
        """Test licenses already past expiry are not counted as expiring."""
        license = license_with(expiry_date=NOW - timedelta(days=1))
        assert not LicenseStatusPolicy.is_expiring(license, NOW, 30)

    def test_suspended_license_is_not_expiring(self):
        """Test unusable licenses are not counted as expiring."""
        license = license_with(status=LicenseStatus.SUSPENDED, expiry_date=NOW + timedelta(days=3))
        assert not LicenseStatusPolicy.is_expiring(license, NOW, 30)


class TestExpiryCalculator:
    """Tests for ExpiryCalculator."""

    def test_permanent(self):
        """Test permanent licenses have no expiry."""
        assert ExpiryCalculator.calculate(LicenseType.PERMANENT, NOW) is None

    def test_trial(self):
        """Test trials run for their trial days."""
        assert ExpiryCalculator.calculate(LicenseType.TRIAL, NOW, 15) == NOW + timedelta(days=15)

    def test_monthly_ends_day_before_anniversary(self):
        """Test a monthly term from Jan 31 clamps to the end of February."""
        assert ExpiryCalculator.calculate(LicenseType.MONTHLY, NOW) == datetime(
            2025, 2, 27, 9, 30, tzinfo=timezone.utc
        )

    def test_annual_ends_day_before_anniversary(self):
        """Test an annual term ends the day before the anniversary."""
        assert ExpiryCalculator.calculate(LicenseType.ANNUAL, NOW) == datetime(
            2026, 1, 30, 9, 30, tzinfo=timezone.utc
        )

    def test_next_term_continues_from_future_expiry(self):
        """Test renewing early stacks the new term onto the current one."""
        expiry = NOW + timedelta(days=10)
        license = license_with(expiry_date=expiry)
        assert ExpiryCalculator.next_term(license, NOW) == ExpiryCalculator.calculate(
            LicenseType.ANNUAL, expiry
        )

    def test_next_term_restarts_from_now_when_lapsed(self):
        """Test a lapsed license renews from the current moment."""
        license = license_with(expiry_date=NOW - timedelta(days=10))
        assert ExpiryCalculator.next_term(license, NOW) == ExpiryCalculator.calculate(
            LicenseType.ANNUAL, NOW
        )


class TestActivationKeyGenerator:
    """Tests for ActivationKeyGenerator."""

    @pytest.mark.parametrize("license_type", list(LicenseType))
    def test_key_format(self, license_type):
        """Test keys carry the type prefix and three groups of four."""
        key = ActivationKeyGenerator.generate(license_type)
        prefix = license_type.value.upper()
        assert re.fullmatch(rf"{prefix}-[A-Z0-9]{{4}}-[A-Z0-9]{{4}}-[A-Z0-9]{{4}}", key)

    def test_keys_are_random(self):
        """Test two generated keys differ."""
        assert ActivationKeyGenerator.generate(LicenseType.TRIAL) != ActivationKeyGenerator.generate(
            LicenseType.TRIAL
        )
