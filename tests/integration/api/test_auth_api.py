"""
Integration tests for API key authentication, access logs and health endpoints.
"""
import pytest
from django.urls import reverse

from accounts.infrastructure.models import AccessLog, ApiKey


@pytest.mark.django_db
@pytest.mark.integration
class TestAuthentication:
    """Tests for the API key middleware."""

    def test_missing_key(self, api_client):
        """Test back-office endpoints require a key."""
        response = api_client.get(reverse("company-list"))

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "INVALID_API_KEY"

    def test_unknown_key(self, api_client):
        """Test unknown keys are rejected."""
        api_client.credentials(HTTP_X_API_KEY="not-a-real-key")
        assert api_client.get(reverse("company-list")).status_code == 401

    def test_bearer_token(self, api_client, superadmin_operator):
        """Test the key is also accepted as a bearer token."""
        raw_key = superadmin_operator.generate_api_key()
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {raw_key}")
        assert api_client.get(reverse("company-list")).status_code == 200

    def test_disabled_operator(self, api_client, superadmin_operator):
        """Test keys of disabled operators stop working."""
        raw_key = superadmin_operator.generate_api_key()
        superadmin_operator.is_active = False
        superadmin_operator.save()
        api_client.credentials(HTTP_X_API_KEY=raw_key)

        assert api_client.get(reverse("company-list")).status_code == 401

    def test_authenticated_requests_are_logged(self, authenticated_client, reseller_operator):
        """Test every authenticated request leaves an access log row."""
        client = authenticated_client(reseller_operator)

        client.get(reverse("company-list"))

        log = AccessLog.objects.get(operator=reseller_operator)
        assert log.action == "GET"
        assert log.resource == "/api/v1/companies/"
        assert log.status_code == 200
        assert ApiKey.objects.get(operator=reseller_operator).last_used_at is not None

    def test_device_endpoints_are_public(self, api_client, db):
        """Test activation endpoints need no key."""
        response = api_client.post(
            reverse("activation-validate"), {"activation_key": "ANNUAL-0000-0000-0000"}, format="json"
        )
        assert response.status_code == 200
        assert not AccessLog.objects.exists()


@pytest.mark.django_db
@pytest.mark.integration
class TestHealthEndpoints:
    """Tests for health and readiness endpoints."""

    def test_health(self, api_client):
        """Test the liveness endpoint."""
        response = api_client.get(reverse("health"))
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_ready(self, api_client):
        """Test readiness reports database and cache."""
        response = api_client.get(reverse("ready"))
        assert response.status_code == 200
        assert response.json()["checks"] == {"database": True, "cache": True}

    def test_metrics(self, api_client):
        """Test the Prometheus endpoint exposes the HTTP counters."""
        api_client.get(reverse("health"))
        response = api_client.get(reverse("metrics"))
        assert response.status_code == 200
        assert b"http_requests_total" in response.content
