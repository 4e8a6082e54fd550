"""
Integration tests for device activation and validation.
"""
from datetime import timedelta

import pytest
from asgiref.sync import async_to_sync
from django.utils import timezone

from activations.application.commands.activate_license import (
    ActivateLicenseCommand,
    ValidateLicenseCommand,
)
from activations.application.queries.list_activation_logs import ListActivationLogsQuery
from activations.domain.activation import ActivationFailure
from activations.infrastructure.models import ActivationLog
from api.v1 import container
from core.domain.exceptions import PermissionDeniedError
from core.domain.value_objects import LicenseStatus
from licenses.infrastructure.models import License as LicenseModel


def activate(activation_key, computer_key="PC-001"):
    return async_to_sync(container.activate_license_handler().handle)(
        ActivateLicenseCommand(
            activation_key=activation_key,
            computer_key=computer_key,
            device_info={"os": "Windows 11"},
            ip_address="10.0.0.8",
            user_agent="pos-client/5.2",
        )
    )


def validate(activation_key, computer_key=None):
    return async_to_sync(container.validate_license_handler().handle)(
        ValidateLicenseCommand(activation_key=activation_key, computer_key=computer_key)
    )


@pytest.fixture
def pending_license(make_license):
    return make_license(status="pending", activation_date=None, expiry_date=None)


@pytest.mark.django_db
@pytest.mark.integration
class TestActivateLicense:
    """Integration tests for ActivateLicenseHandler."""

    def test_first_activation(self, pending_license):
        """Test the first activation binds the device and starts the term."""
        result = activate(pending_license.activation_key)

        assert result.ok
        assert result.license.status == LicenseStatus.ACTIVE
        row = LicenseModel.objects.get(id=pending_license.id)
        assert row.computer_key == "PC-001"
        assert row.activation_date is not None
        assert row.expiry_date > timezone.now() + timedelta(days=360)

        log = ActivationLog.objects.get(license=pending_license)
        assert log.result == "success"
        assert log.key_type == "activation"
        assert log.ip_address == "10.0.0.8"

    def test_same_device_is_idempotent(self, pending_license):
        """Test activating again on the bound device keeps the dates."""
        first = activate(pending_license.activation_key).license
        second = activate(pending_license.activation_key)

        assert second.ok
        assert second.license.activation_date == first.activation_date
        assert second.license.expiry_date == first.expiry_date
        assert ActivationLog.objects.filter(license=pending_license).count() == 2

    def test_second_device_rejected(self, pending_license):
        """Test another device cannot take a bound license."""
        activate(pending_license.activation_key)

        result = activate(pending_license.activation_key, computer_key="PC-002")

        assert result.failure == ActivationFailure.ALREADY_BOUND
        assert LicenseModel.objects.get(id=pending_license.id).computer_key == "PC-001"
        assert ActivationLog.objects.filter(result="failed").count() == 1

    def test_unknown_key(self, db):
        """Test an unknown key fails and is still logged."""
        result = activate("ANNUAL-NOPE-NOPE-NOPE")

        assert result.failure == ActivationFailure.NOT_FOUND
        log = ActivationLog.objects.get()
        assert log.license_id is None
        assert log.result == "failed"

    def test_expired_license(self, make_license):
        """Test a license past its expiry cannot be activated."""
        license_row = make_license(computer_key=None, expiry_date=timezone.now() - timedelta(minutes=1))

        result = activate(license_row.activation_key)

        assert result.failure == ActivationFailure.EXPIRED
        assert LicenseModel.objects.get(id=license_row.id).computer_key is None

    def test_suspended_license(self, make_license):
        """Test a suspended license cannot be activated."""
        license_row = make_license(status="suspended")
        assert activate(license_row.activation_key).failure == ActivationFailure.SUSPENDED

    def test_trial_activation(self, make_license, trial_product):
        """Test a trial moves from demo to active for its trial days."""
        license_row = make_license(
            product=trial_product,
            license_type="trial",
            status="demo",
            trial_days=15,
            activation_date=None,
            expiry_date=None,
        )

        result = activate(license_row.activation_key)

        assert result.license.status == LicenseStatus.ACTIVE
        assert result.license.expiry_date - result.license.activation_date == timedelta(days=15)


@pytest.mark.django_db
@pytest.mark.integration
class TestValidateLicense:
    """Integration tests for ValidateLicenseHandler."""

    def test_valid_on_bound_device(self, make_license):
        """Test a bound active license validates on its device."""
        license_row = make_license(computer_key="PC-001")

        result = validate(license_row.activation_key, "PC-001")

        assert result.valid
        assert result.status == "active"
        assert ActivationLog.objects.get().key_type == "computer"

    def test_other_device(self, make_license):
        """Test validation fails on a different device."""
        license_row = make_license(computer_key="PC-001")
        result = validate(license_row.activation_key, "PC-002")
        assert not result.valid
        assert result.error_code == "DEVICE_ALREADY_BOUND"

    def test_lapsed_license_reads_expired(self, make_license):
        """Test validation uses the computed status, not the stored one."""
        license_row = make_license(expiry_date=timezone.now() - timedelta(seconds=5))

        result = validate(license_row.activation_key)

        assert not result.valid
        assert result.status == "expired"
        assert LicenseModel.objects.get(id=license_row.id).status == "active"

    def test_pending_license_is_not_valid(self, pending_license):
        """Test a never activated license is not usable."""
        result = validate(pending_license.activation_key)
        assert result.error_code == "INVALID_LICENSE_STATUS"

    def test_unknown_key(self, db):
        """Test unknown keys validate as not found."""
        result = validate("MONTHLY-0000-0000-0000")
        assert result.error_code == "LICENSE_NOT_FOUND"
        assert result.status is None


@pytest.mark.django_db
@pytest.mark.integration
class TestActivationLogs:
    """Integration tests for ListActivationLogsHandler."""

    def test_scoped_listing_requires_license(self, pending_license, reseller_actor, superadmin):
        """Test only superadmins may list logs across licenses."""
        activate(pending_license.activation_key)
        handler = container.list_activation_logs_handler()

        with pytest.raises(PermissionDeniedError):
            async_to_sync(handler.handle)(ListActivationLogsQuery(reseller_actor))

        scoped = async_to_sync(handler.handle)(ListActivationLogsQuery(reseller_actor, license_id=pending_license.id))
        everything = async_to_sync(handler.handle)(ListActivationLogsQuery(superadmin))
        assert len(scoped) == len(everything) == 1

    def test_other_reseller_cannot_read_logs(self, pending_license, other_reseller_actor):
        """Test logs of licenses outside the scope are hidden."""
        with pytest.raises(PermissionDeniedError):
            async_to_sync(container.list_activation_logs_handler().handle)(
                ListActivationLogsQuery(other_reseller_actor, license_id=pending_license.id)
            )
