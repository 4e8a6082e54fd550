"""
Integration tests for license issue, lifecycle and maintenance handlers.
"""
import uuid
from datetime import timedelta
from decimal import Decimal

import pytest
from asgiref.sync import async_to_sync
from django.utils import timezone

from api.v1 import container
from billing.infrastructure.models import Transaction as TransactionModel
from core.domain.exceptions import (
    ClientNotFoundError,
    InvalidLicenseStatusError,
    LicenseNotFoundError,
    PermissionDeniedError,
)
from core.domain.value_objects import LicenseType
from licenses.application.commands.issue_license import IssueLicenseCommand
from licenses.application.commands.renew_license import RenewLicenseCommand
from licenses.application.commands.resume_license import ResumeLicenseCommand
from licenses.application.commands.suspend_license import SuspendLicenseCommand
from licenses.application.queries.list_expiring_licenses import ListExpiringLicensesQuery
from licenses.application.queries.list_licenses import GetLicenseQuery, ListLicensesQuery
from licenses.infrastructure.models import License as LicenseModel


def run(handler, message):
    return async_to_sync(handler.handle)(message)


@pytest.mark.django_db
@pytest.mark.integration
class TestIssueLicense:
    """Integration tests for IssueLicenseHandler."""

    def test_issue_from_product_template(self, client_row, annual_product, reseller_actor, company_tree):
        """Test issuing copies the product template and bills the activation."""
        license = run(
            container.issue_license_handler(),
            IssueLicenseCommand(client_id=client_row.id, product_id=annual_product.id, actor=reseller_actor),
        )

        assert license.status == "pending"
        assert license.license_type == "annual"
        assert license.activation_key.startswith("ANNUAL-")
        assert license.final_price == Decimal("100.00")
        assert license.max_users == 3

        transaction = TransactionModel.objects.get(license_id=license.id)
        assert transaction.transaction_type == "activation"
        assert transaction.final_amount == Decimal("100.00")
        assert transaction.company_id == company_tree["sub_company"].id

    def test_free_trial_is_not_billed(self, client_row, trial_product, superadmin):
        """Test a zero-priced license creates no transaction."""
        license = run(
            container.issue_license_handler(),
            IssueLicenseCommand(client_id=client_row.id, product_id=trial_product.id, actor=superadmin),
        )

        assert license.status == "demo"
        assert not TransactionModel.objects.exists()

    def test_overrides(self, client_row, annual_product, superadmin):
        """Test explicit fields win over the product template."""
        license = run(
            container.issue_license_handler(),
            IssueLicenseCommand(
                client_id=client_row.id,
                product_id=annual_product.id,
                actor=superadmin,
                license_type=LicenseType.MONTHLY,
                price=Decimal("15"),
                discount=Decimal("0"),
                renewal_enabled=True,
            ),
        )
        assert license.license_type == "monthly"
        assert license.price == Decimal("15.00")
        assert license.renewal_enabled

    def test_outside_scope(self, client_row, annual_product, other_reseller_actor):
        """Test operators cannot issue licenses for foreign clients."""
        with pytest.raises(PermissionDeniedError):
            run(
                container.issue_license_handler(),
                IssueLicenseCommand(client_id=client_row.id, product_id=annual_product.id, actor=other_reseller_actor),
            )
        assert not LicenseModel.objects.exists()

    def test_unknown_client(self, annual_product, superadmin):
        """Test issuing for a missing client fails."""
        with pytest.raises(ClientNotFoundError):
            run(
                container.issue_license_handler(),
                IssueLicenseCommand(client_id=uuid.uuid4(), product_id=annual_product.id, actor=superadmin),
            )


@pytest.mark.django_db
@pytest.mark.integration
class TestLicenseLifecycle:
    """Integration tests for renew, suspend and resume."""

    def test_renew_extends_from_current_expiry(self, make_license, superadmin):
        """Test renewing early stacks a full term and bills it."""
        expiry = timezone.now() + timedelta(days=20)
        license_row = make_license(expiry_date=expiry)

        renewed = run(container.renew_license_handler(), RenewLicenseCommand(license_row.id, superadmin))

        assert renewed.expiry_date > expiry + timedelta(days=360)
        assert TransactionModel.objects.get(license=license_row).transaction_type == "renewal"

    def test_renew_lapsed_license(self, make_license, superadmin):
        """Test a lapsed license comes back active from now."""
        license_row = make_license(status="expired", expiry_date=timezone.now() - timedelta(days=40))

        renewed = run(container.renew_license_handler(), RenewLicenseCommand(license_row.id, superadmin))

        assert renewed.status == "active"
        assert renewed.expiry_date > timezone.now() + timedelta(days=360)

    def test_permanent_cannot_be_renewed(self, make_license, superadmin):
        """Test licenses without expiry are not renewable."""
        license_row = make_license(license_type="permanent", expiry_date=None)
        with pytest.raises(InvalidLicenseStatusError):
            run(container.renew_license_handler(), RenewLicenseCommand(license_row.id, superadmin))
        assert not TransactionModel.objects.exists()

    def test_suspend_then_resume(self, make_license, reseller_actor):
        """Test suspending blocks the license and resuming restores it."""
        license_row = make_license()

        suspended = run(container.suspend_license_handler(), SuspendLicenseCommand(license_row.id, reseller_actor))
        assert suspended.status == "suspended"

        with pytest.raises(InvalidLicenseStatusError):
            run(container.renew_license_handler(), RenewLicenseCommand(license_row.id, reseller_actor))

        resumed = run(container.resume_license_handler(), ResumeLicenseCommand(license_row.id, reseller_actor))
        assert resumed.status == "active"
        assert LicenseModel.objects.get(id=license_row.id).status == "active"

    def test_missing_license(self, superadmin):
        """Test lifecycle commands on unknown licenses fail."""
        with pytest.raises(LicenseNotFoundError):
            run(container.suspend_license_handler(), SuspendLicenseCommand(uuid.uuid4(), superadmin))


@pytest.mark.django_db
@pytest.mark.integration
class TestLicenseQueries:
    """Integration tests for license reads."""

    def test_computed_status_on_read(self, make_license, superadmin):
        """Test a lapsed active license reads as expired."""
        license_row = make_license(expiry_date=timezone.now() - timedelta(hours=1))

        license = run(container.get_license_handler(), GetLicenseQuery(license_row.id, superadmin))

        assert license.status == "expired"
        assert license.stored_status == "active"

    def test_list_filters_on_computed_status(self, make_license, superadmin):
        """Test the status filter uses the computed status."""
        make_license()
        lapsed = make_license(expiry_date=timezone.now() - timedelta(hours=1))

        expired = run(container.list_licenses_handler(), ListLicensesQuery(superadmin, status="expired"))

        assert [license.id for license in expired] == [lapsed.id]

    def test_list_is_scoped(self, make_license, agent_actor, reseller_actor, company_tree):
        """Test agents only see licenses assigned to them."""
        make_license()
        assigned = make_license(assigned_agent=company_tree["agent"])

        assert {license.id for license in run(container.list_licenses_handler(), ListLicensesQuery(agent_actor))} == {assigned.id}
        assert len(run(container.list_licenses_handler(), ListLicensesQuery(reseller_actor))) == 2

    def test_expiring(self, make_license, superadmin):
        """Test expiring licenses exclude lapsed and suspended ones, closest first."""
        now = timezone.now()
        later = make_license(expiry_date=now + timedelta(days=20))
        sooner = make_license(expiry_date=now + timedelta(days=3))
        make_license(expiry_date=now - timedelta(days=1))
        make_license(status="suspended", expiry_date=now + timedelta(days=2))
        make_license(expiry_date=now + timedelta(days=45))

        expiring = run(container.list_expiring_licenses_handler(), ListExpiringLicensesQuery(superadmin))

        assert [license.id for license in expiring] == [sooner.id, later.id]


@pytest.mark.django_db
@pytest.mark.integration
class TestLicenseMaintenance:
    """Integration tests for the scheduled license jobs."""

    def test_sweep_materializes_expiry(self, make_license):
        """Test the sweep stores expired for lapsed licenses only."""
        now = timezone.now()
        lapsed = make_license(expiry_date=now - timedelta(days=1))
        current = make_license()
        suspended = make_license(status="suspended", expiry_date=now - timedelta(days=1))

        report = async_to_sync(container.sweep_license_statuses_handler().handle)()

        assert report.license_ids == [lapsed.id]
        assert LicenseModel.objects.get(id=lapsed.id).status == "expired"
        assert LicenseModel.objects.get(id=current.id).status == "active"
        assert LicenseModel.objects.get(id=suspended.id).status == "suspended"

    def test_sweep_dry_run(self, make_license):
        """Test a dry run reports without writing."""
        lapsed = make_license(expiry_date=timezone.now() - timedelta(days=1))

        report = async_to_sync(container.sweep_license_statuses_handler().handle)(dry_run=True)

        assert report.processed == 0
        assert report.license_ids == [lapsed.id]
        assert LicenseModel.objects.get(id=lapsed.id).status == "active"

    def test_automatic_renewals(self, make_license):
        """Test subscriptions with renewal enabled renew and get billed."""
        now = timezone.now()
        due = make_license(renewal_enabled=True, expiry_date=now + timedelta(days=2))
        make_license(renewal_enabled=False, expiry_date=now + timedelta(days=2))
        make_license(renewal_enabled=True, expiry_date=now + timedelta(days=60))

        report = async_to_sync(container.process_automatic_renewals_handler().handle)()

        assert report.license_ids == [due.id]
        assert LicenseModel.objects.get(id=due.id).expiry_date > now + timedelta(days=360)
        charge = TransactionModel.objects.get(license=due)
        assert charge.transaction_type == "renewal"
        assert charge.modified_by_id is None
