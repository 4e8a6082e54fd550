"""
Unit tests for device registration entities.
"""

import uuid
from datetime import datetime, timezone

import pytest

from registrations.domain.registration import DeviceRegistration, RegistrationHeader

NOW = datetime(2025, 5, 20, 10, 0, tzinfo=timezone.utc)


def header(**overrides) -> RegistrationHeader:
    fields = {
        "tax_id": "20123456789",
        "company_name": "Corner Shop",
        "product": "POS",
        "created_at": NOW,
        "updated_at": NOW,
    }
    fields.update(overrides)
    return RegistrationHeader(**fields)


class TestRegistrationHeader:
    """Tests for RegistrationHeader."""

    def test_valid_header(self):
        """Test a header with the required fields is accepted."""
        registration = header(version="4.2", users=3)
        assert registration.license_id is None
        assert registration.users == 3

    @pytest.mark.parametrize(
        "overrides",
        [
            {"tax_id": ""},
            {"tax_id": "   "},
            {"tax_id": "1" * 21},
            {"company_name": ""},
            {"product": ""},
        ],
    )
    def test_invalid_header(self, overrides):
        """Test missing or oversized identifying fields are refused."""
        with pytest.raises(ValueError):
            header(**overrides)

    def test_assign_license(self):
        """Test assigning a license links it and bumps updated_at."""
        license_id = uuid.uuid4()
        later = datetime(2025, 5, 21, tzinfo=timezone.utc)

        assigned = header().assign_license(license_id, later)

        assert assigned.license_id == license_id
        assert assigned.updated_at == later


class TestDeviceRegistration:
    """Tests for DeviceRegistration."""

    def test_device_uid_required(self):
        """Test devices need an identifier."""
        with pytest.raises(ValueError):
            DeviceRegistration(
                id=uuid.uuid4(), tax_id="20123456789", device_uid=" ", created_at=NOW, updated_at=NOW
            )

    def test_authorized_when_key_present(self):
        """Test a device is authorized once it carries a computer key."""
        device = DeviceRegistration(
            id=uuid.uuid4(), tax_id="20123456789", device_uid="HW-1", created_at=NOW, updated_at=NOW
        )
        assert not device.is_authorized
        assert DeviceRegistration(**{**device.__dict__, "computer_key": "PC-1"}).is_authorized
