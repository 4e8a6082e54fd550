"""
Pytest configuration and shared fixtures.

Integration tests drive the async handlers through ``async_to_sync`` so
that every ORM call runs on the test's database connection.
"""
import uuid
from datetime import timedelta
from decimal import Decimal

import pytest
from django.core.cache import cache
from django.utils import timezone

from accounts.infrastructure.models import Operator
from companies.infrastructure.models import Client as ClientModel
from companies.infrastructure.models import Company as CompanyModel
from core.middleware.auth import actor_for
from licenses.infrastructure.models import License as LicenseModel
from products.infrastructure.models import Product as ProductModel


@pytest.fixture(autouse=True)
def clear_cache():
    """Start every test with an empty cache."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def company_tree(db):
    """
    Two resellers; the first one has a sub-company with an agent below it.

    Returns:
        Dict of Company rows keyed by role in the tree
    """
    reseller = CompanyModel.objects.create(name="North Reseller", company_type="reseller")
    sub_company = CompanyModel.objects.create(
        name="North Sub", company_type="sub_company", parent=reseller
    )
    agent = CompanyModel.objects.create(name="North Agent", company_type="agent", parent=sub_company)
    other_reseller = CompanyModel.objects.create(name="South Reseller", company_type="reseller")
    return {
        "reseller": reseller,
        "sub_company": sub_company,
        "agent": agent,
        "other_reseller": other_reseller,
    }


def _operator(username, role, company=None):
    return Operator.objects.create(username=username, role=role, company=company)


@pytest.fixture
def superadmin_operator(db):
    return _operator(f"root-{uuid.uuid4().hex[:6]}", "superadmin")


@pytest.fixture
def reseller_operator(company_tree):
    return _operator(f"reseller-{uuid.uuid4().hex[:6]}", "reseller", company_tree["reseller"])


@pytest.fixture
def agent_operator(company_tree):
    return _operator(f"agent-{uuid.uuid4().hex[:6]}", "agent", company_tree["agent"])


@pytest.fixture
def other_reseller_operator(company_tree):
    return _operator(f"south-{uuid.uuid4().hex[:6]}", "reseller", company_tree["other_reseller"])


@pytest.fixture
def superadmin(superadmin_operator):
    """Actor of a superadmin operator."""
    return actor_for(superadmin_operator)


@pytest.fixture
def reseller_actor(reseller_operator):
    return actor_for(reseller_operator)


@pytest.fixture
def agent_actor(agent_operator):
    return actor_for(agent_operator)


@pytest.fixture
def other_reseller_actor(other_reseller_operator):
    return actor_for(other_reseller_operator)


@pytest.fixture
def client_row(company_tree):
    """A validated client of the sub-company."""
    return ClientModel.objects.create(
        name="Acme Bakery",
        email="owner@acme.example",
        company=company_tree["sub_company"],
        status="validated",
    )


@pytest.fixture
def annual_product(db):
    return ProductModel.objects.create(
        name="Point of Sale",
        version="5.2",
        license_type="annual",
        price=Decimal("120.00"),
        discount=Decimal("20.00"),
        max_users=3,
        max_devices=1,
    )


@pytest.fixture
def trial_product(db):
    return ProductModel.objects.create(
        name="Point of Sale Trial",
        version="5.2",
        license_type="trial",
        price=Decimal("0.00"),
        discount=Decimal("0.00"),
        trial_days=15,
    )


@pytest.fixture
def make_license(client_row, annual_product):
    """
    Factory writing License rows directly.

    Keyword arguments override the model defaults.
    """

    def make(**overrides):
        now = timezone.now()
        fields = {
            "client": client_row,
            "product": annual_product,
            "activation_key": f"ANNUAL-{uuid.uuid4().hex[:12].upper()}",
            "license_type": "annual",
            "status": "active",
            "price": Decimal("120.00"),
            "discount": Decimal("20.00"),
            "activation_date": now - timedelta(days=10),
            "expiry_date": now + timedelta(days=355),
            "created_at": now,
            "updated_at": now,
        }
        fields.update(overrides)
        return LicenseModel.objects.create(**fields)

    return make


@pytest.fixture
def authenticated_client(api_client):
    """
    Factory returning an APIClient sending the API key of ``operator``.
    """

    def authenticate(operator):
        raw_key = operator.generate_api_key()
        api_client.credentials(HTTP_X_API_KEY=raw_key)
        return api_client

    return authenticate
