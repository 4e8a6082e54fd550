"""
Integration tests for device registration endpoints.
"""
import pytest
from django.urls import reverse

from registrations.infrastructure.models import RegistrationHeader as RegistrationHeaderModel

TAX_ID = "B12345678"


def _register(api_client, device_uid="DEV-1", **extra):
    payload = {
        "tax_id": TAX_ID,
        "company_name": "Acme Bakery",
        "product": "Point of Sale",
        "device_uid": device_uid,
        "version": "5.2",
        **extra,
    }
    return api_client.post(reverse("registration-device"), payload, format="json")


@pytest.mark.django_db
@pytest.mark.integration
class TestRegisterDeviceAPI:
    """Tests for POST /api/v1/registrations/device/."""

    def test_new_then_repeat(self, api_client):
        """Test a new device returns 201 and a repeat returns 200."""
        first = _register(api_client)
        assert first.status_code == 201
        assert first.json()["created"] is True
        assert first.json()["total_devices"] == 1

        repeat = _register(api_client, os_info="Windows 11")
        assert repeat.status_code == 200
        assert repeat.json()["created"] is False
        assert repeat.json()["total_devices"] == 1

    def test_second_device_counts(self, api_client):
        """Test the header keeps a device total."""
        _register(api_client, "DEV-1")
        response = _register(api_client, "DEV-2")

        assert response.status_code == 201
        assert response.json()["total_devices"] == 2
        assert RegistrationHeaderModel.objects.get(tax_id=TAX_ID).total_devices == 2

    def test_missing_device_uid(self, api_client, db):
        """Test incomplete payloads return 400."""
        response = api_client.post(
            reverse("registration-device"),
            {"tax_id": TAX_ID, "company_name": "Acme Bakery", "product": "Point of Sale"},
            format="json",
        )

        assert response.status_code == 400


@pytest.mark.django_db
@pytest.mark.integration
class TestRegistrationManagementAPI:
    """Tests for registration read and assignment endpoints."""

    def test_assign_license(self, api_client, authenticated_client, reseller_operator, make_license):
        """Test assigning a license authorizes devices carrying a binding key."""
        license = make_license()
        _register(api_client, "DEV-1", computer_key="PC-1")
        _register(api_client, "DEV-2")
        client = authenticated_client(reseller_operator)

        assigned = client.post(
            reverse("registration-assign-license", args=[TAX_ID]), {"license_id": str(license.id)}, format="json"
        )
        assert assigned.status_code == 200
        assert assigned.json()["license_id"] == str(license.id)
        authorized = {device["device_uid"]: device["authorized"] for device in assigned.json()["devices"]}
        assert authorized == {"DEV-1": True, "DEV-2": False}

        count = client.get(reverse("license-authorized-devices", args=[license.id]))
        assert count.json()["authorized_devices"] == 1

        detail = client.get(reverse("registration-detail", args=[TAX_ID]))
        assert detail.status_code == 200
        assert detail.json()["total_devices"] == 2

    def test_unassigned_hidden_from_resellers(
        self, api_client, authenticated_client, superadmin_operator, reseller_operator
    ):
        """Test headers without a license are listed for superadmins only."""
        _register(api_client)

        assert authenticated_client(reseller_operator).get(reverse("registration-list")).json() == []
        rows = authenticated_client(superadmin_operator).get(reverse("registration-list")).json()
        assert [row["tax_id"] for row in rows] == [TAX_ID]

    def test_unknown_registration(self, authenticated_client, superadmin_operator):
        """Test unknown tax ids return 404."""
        client = authenticated_client(superadmin_operator)

        response = client.get(reverse("registration-detail", args=["X0000000"]))

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "REGISTRATION_NOT_FOUND"

    def test_listing_requires_api_key(self, api_client, db):
        """Test only the device endpoint is public."""
        response = api_client.get(reverse("registration-list"))

        assert response.status_code == 401
