"""
Integration tests for activation and access log endpoints.
"""
import pytest
from django.urls import reverse


@pytest.mark.django_db
@pytest.mark.integration
class TestActivationLogAPI:
    """Tests for GET /api/v1/logs/activations/."""

    def _activate(self, api_client, activation_key, computer_key):
        return api_client.post(
            reverse("activation-activate"),
            {"activation_key": activation_key, "computer_key": computer_key},
            format="json",
        )

    def test_superadmin_lists_all(self, api_client, authenticated_client, superadmin_operator, make_license):
        """Test superadmins may list attempts without a license filter."""
        license = make_license(computer_key="PC-1")
        self._activate(api_client, license.activation_key, "PC-1")
        self._activate(api_client, license.activation_key, "PC-2")

        client = authenticated_client(superadmin_operator)
        response = client.get(reverse("activation-log-list"))

        assert response.status_code == 200
        assert sorted(row["result"] for row in response.json()) == ["failed", "success"]

    def test_reseller_lists_by_license(self, api_client, authenticated_client, reseller_operator, make_license):
        """Test resellers list attempts of a license inside their subtree."""
        license = make_license(computer_key="PC-1")
        self._activate(api_client, license.activation_key, "PC-1")

        client = authenticated_client(reseller_operator)
        response = client.get(reverse("activation-log-list"), {"license_id": str(license.id)})

        assert response.status_code == 200
        assert [row["license_id"] for row in response.json()] == [str(license.id)]

    def test_reseller_needs_license_filter(self, authenticated_client, reseller_operator):
        """Test unfiltered listing is reserved for superadmins."""
        client = authenticated_client(reseller_operator)

        response = client.get(reverse("activation-log-list"))

        assert response.status_code == 403


@pytest.mark.django_db
@pytest.mark.integration
class TestAccessLogAPI:
    """Tests for GET /api/v1/logs/access/."""

    def test_operator_sees_own_requests(self, authenticated_client, reseller_operator, agent_operator):
        """Test non-superadmins only see their own access log."""
        authenticated_client(agent_operator).get(reverse("company-list"))
        client = authenticated_client(reseller_operator)
        client.get(reverse("company-list"))

        response = client.get(reverse("access-log-list"))

        assert response.status_code == 200
        rows = response.json()
        assert len(rows) == 1
        assert rows[0]["operator_id"] == str(reseller_operator.id)
        assert rows[0]["action"] == "GET"
        assert rows[0]["resource"] == reverse("company-list")

    def test_foreign_operator_filter(self, authenticated_client, reseller_operator, agent_operator):
        """Test filtering on another operator is forbidden."""
        client = authenticated_client(reseller_operator)

        response = client.get(reverse("access-log-list"), {"operator_id": str(agent_operator.id)})

        assert response.status_code == 403

    def test_superadmin_filters_by_operator(self, authenticated_client, superadmin_operator, agent_operator):
        """Test superadmins can read another operator's requests."""
        authenticated_client(agent_operator).get(reverse("product-list"))
        client = authenticated_client(superadmin_operator)

        response = client.get(reverse("access-log-list"), {"operator_id": str(agent_operator.id)})

        assert response.status_code == 200
        assert [row["resource"] for row in response.json()] == [reverse("product-list")]
