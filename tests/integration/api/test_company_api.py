"""
Integration tests for company, client and product API endpoints.
"""
import uuid

import pytest
from django.urls import reverse

from companies.infrastructure.models import Company as CompanyModel


@pytest.mark.django_db
@pytest.mark.integration
class TestCompanyAPI:
    """Tests for company endpoints."""

    def test_create_company(self, authenticated_client, reseller_operator, company_tree):
        """Test POST /api/v1/companies/ under a visible parent."""
        client = authenticated_client(reseller_operator)

        response = client.post(
            reverse("company-list"),
            {"name": "Corner Shop", "company_type": "end_client", "parent_id": str(company_tree["agent"].id)},
            format="json",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["company_type"] == "end_client"
        assert data["parent_id"] == str(company_tree["agent"].id)

    def test_create_with_invalid_parent_type(self, authenticated_client, superadmin_operator, company_tree):
        """Test hierarchy violations return 400."""
        client = authenticated_client(superadmin_operator)

        response = client.post(
            reverse("company-list"),
            {"name": "Bad", "company_type": "sub_company", "parent_id": str(company_tree["agent"].id)},
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_COMPANY_HIERARCHY"

    def test_move_creating_cycle(self, authenticated_client, superadmin_operator, company_tree):
        """Test PATCH refuses to move a company below its descendant."""
        client = authenticated_client(superadmin_operator)

        response = client.patch(
            reverse("company-detail", args=[company_tree["sub_company"].id]),
            {"parent_id": str(company_tree["agent"].id)},
            format="json",
        )

        assert response.status_code == 400
        assert CompanyModel.objects.get(id=company_tree["sub_company"].id).parent_id == company_tree["reseller"].id

    def test_company_outside_scope(self, authenticated_client, other_reseller_operator, company_tree):
        """Test reading a foreign company is forbidden."""
        client = authenticated_client(other_reseller_operator)

        response = client.get(reverse("company-detail", args=[company_tree["reseller"].id]))

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "PERMISSION_DENIED"

    def test_unknown_company(self, authenticated_client, superadmin_operator):
        """Test unknown ids return 404."""
        client = authenticated_client(superadmin_operator)
        response = client.get(reverse("company-detail", args=[uuid.uuid4()]))

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "COMPANY_NOT_FOUND"

    def test_descendants(self, authenticated_client, reseller_operator, company_tree):
        """Test descendants are listed breadth first."""
        client = authenticated_client(reseller_operator)

        response = client.get(reverse("company-descendants", args=[company_tree["reseller"].id]))

        assert response.status_code == 200
        assert [row["id"] for row in response.json()] == [
            str(company_tree["sub_company"].id),
            str(company_tree["agent"].id),
        ]


@pytest.mark.django_db
@pytest.mark.integration
class TestClientAPI:
    """Tests for client endpoints."""

    def test_create_and_validate_client(self, authenticated_client, reseller_operator, company_tree):
        """Test creating a client and validating it."""
        client = authenticated_client(reseller_operator)

        created = client.post(
            reverse("client-list"),
            {"name": "Bakery", "email": "bakery@example.com", "company_id": str(company_tree["agent"].id)},
            format="json",
        )
        assert created.status_code == 201
        assert created.json()["status"] == "pending"

        validated = client.post(
            reverse("client-status", args=[created.json()["id"]]), {"status": "validated"}, format="json"
        )
        assert validated.status_code == 200
        assert validated.json()["status"] == "validated"

    def test_invalid_email(self, authenticated_client, superadmin_operator):
        """Test malformed emails are rejected."""
        client = authenticated_client(superadmin_operator)
        response = client.post(reverse("client-list"), {"name": "Bakery", "email": "nope"}, format="json")
        assert response.status_code == 400


@pytest.mark.django_db
@pytest.mark.integration
class TestProductAPI:
    """Tests for product catalog endpoints."""

    def test_create_product(self, authenticated_client, superadmin_operator):
        """Test superadmins can add catalog products."""
        client = authenticated_client(superadmin_operator)

        response = client.post(
            reverse("product-list"),
            {"name": "Inventory", "version": "2.0", "license_type": "monthly", "price": "9.90"},
            format="json",
        )

        assert response.status_code == 201
        assert response.json()["price"] == "9.90"

    def test_resellers_cannot_edit_catalog(self, authenticated_client, reseller_operator):
        """Test the catalog is managed by administrators only."""
        client = authenticated_client(reseller_operator)

        response = client.post(
            reverse("product-list"),
            {"name": "Inventory", "version": "2.0", "license_type": "monthly"},
            format="json",
        )

        assert response.status_code == 403

    def test_list_products(self, authenticated_client, agent_operator, annual_product):
        """Test every operator can read the catalog."""
        client = authenticated_client(agent_operator)

        response = client.get(reverse("product-list"))

        assert response.status_code == 200
        assert [row["name"] for row in response.json()] == ["Point of Sale"]
