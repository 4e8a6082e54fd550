"""
Integration tests for the public activation endpoints.
"""
from datetime import timedelta

import pytest
from django.urls import reverse
from django.utils import timezone

from activations.infrastructure.models import ActivationLog as ActivationLogModel
from licenses.infrastructure.models import License as LicenseModel


@pytest.fixture
def pending_license(make_license):
    return make_license(status="pending", activation_date=None, expiry_date=None)


@pytest.mark.django_db
@pytest.mark.integration
class TestActivateAPI:
    """Tests for POST /api/v1/activation/activate/."""

    def test_activate_without_api_key(self, api_client, pending_license):
        """Test devices activate without authenticating."""
        response = api_client.post(
            reverse("activation-activate"),
            {"activation_key": pending_license.activation_key, "computer_key": "PC-1"},
            format="json",
            HTTP_USER_AGENT="pos-client/1.0",
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["status"] == "active"
        assert data["error_code"] is None
        assert data["expiry_date"] is not None

        pending_license.refresh_from_db()
        assert pending_license.computer_key == "PC-1"
        log = ActivationLogModel.objects.get()
        assert log.result == "success"
        assert log.user_agent == "pos-client/1.0"

    def test_second_device_conflict(self, api_client, make_license):
        """Test a license bound to one device refuses another."""
        license = make_license(computer_key="PC-1")

        response = api_client.post(
            reverse("activation-activate"),
            {"activation_key": license.activation_key, "computer_key": "PC-2"},
            format="json",
        )

        assert response.status_code == 409
        assert response.json()["success"] is False
        assert response.json()["error_code"] == "DEVICE_ALREADY_BOUND"
        assert LicenseModel.objects.get(id=license.id).computer_key == "PC-1"

    def test_unknown_key(self, api_client, db):
        """Test unknown keys return 404 and are still logged."""
        response = api_client.post(
            reverse("activation-activate"),
            {"activation_key": "NOPE-0000", "computer_key": "PC-1"},
            format="json",
        )

        assert response.status_code == 404
        assert response.json()["error_code"] == "LICENSE_NOT_FOUND"
        assert ActivationLogModel.objects.filter(result="failed", license__isnull=True).count() == 1

    def test_expired_license(self, api_client, make_license):
        """Test lapsed licenses return 422."""
        license = make_license(expiry_date=timezone.now() - timedelta(days=2))

        response = api_client.post(
            reverse("activation-activate"),
            {"activation_key": license.activation_key, "computer_key": "PC-1"},
            format="json",
        )

        assert response.status_code == 422
        assert response.json()["error_code"] == "LICENSE_EXPIRED"

    def test_suspended_license(self, api_client, make_license):
        """Test suspended licenses return 422."""
        license = make_license(status="suspended")

        response = api_client.post(
            reverse("activation-activate"),
            {"activation_key": license.activation_key, "computer_key": "PC-1"},
            format="json",
        )

        assert response.status_code == 422
        assert response.json()["error_code"] == "LICENSE_SUSPENDED"

    def test_missing_computer_key(self, api_client, db):
        """Test malformed requests return 400."""
        response = api_client.post(reverse("activation-activate"), {"activation_key": "X"}, format="json")

        assert response.status_code == 400


@pytest.mark.django_db
@pytest.mark.integration
class TestValidateAPI:
    """Tests for POST /api/v1/activation/validate/."""

    def test_valid_license(self, api_client, make_license):
        """Test a bound license validates on its device."""
        license = make_license(computer_key="PC-1")

        response = api_client.post(
            reverse("activation-validate"),
            {"activation_key": license.activation_key, "computer_key": "PC-1"},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["valid"] is True
        assert response.json()["status"] == "active"

    def test_invalid_outcomes_still_return_200(self, api_client, make_license):
        """Test failures are reported in the body."""
        license = make_license(expiry_date=timezone.now() - timedelta(days=1))

        response = api_client.post(
            reverse("activation-validate"),
            {"activation_key": license.activation_key},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["valid"] is False
        assert response.json()["error_code"] == "LICENSE_EXPIRED"
