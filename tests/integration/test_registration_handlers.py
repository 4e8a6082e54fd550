"""
Integration tests for device registrations.
"""
import pytest
from asgiref.sync import async_to_sync

from api.v1 import container
from core.domain.exceptions import PermissionDeniedError, RegistrationNotFoundError, ValidationError
from registrations.application.commands.registration_commands import (
    AssignRegistrationLicenseCommand,
    RegisterDeviceCommand,
)
from registrations.application.queries.registration_queries import (
    CountAuthorizedDevicesQuery,
    GetRegistrationQuery,
    ListRegistrationsQuery,
)
from registrations.infrastructure.models import DeviceRegistration as DeviceModel
from registrations.infrastructure.models import RegistrationHeader as HeaderModel

TAX_ID = "20123456789"


def run(handler, message):
    return async_to_sync(handler.handle)(message)


def register(device_uid="HW-1", **kwargs):
    fields = {"tax_id": TAX_ID, "company_name": "Corner Shop", "product": "POS", "device_uid": device_uid}
    fields.update(kwargs)
    return run(container.register_device_handler(), RegisterDeviceCommand(**fields))


@pytest.mark.django_db
@pytest.mark.integration
class TestRegisterDevice:
    """Integration tests for RegisterDeviceHandler."""

    def test_first_report_creates_header_and_device(self):
        """Test a new tax ID creates the header with one device."""
        result = register(version="5.2", users=4)

        assert result.created
        assert result.total_devices == 1
        header = HeaderModel.objects.get(tax_id=TAX_ID)
        assert header.version == "5.2"
        assert header.users == 4

    def test_repeat_report_updates_in_place(self):
        """Test the same device reporting again is not duplicated."""
        register(os_info="Windows 10")
        result = register(os_info="Windows 11")

        assert not result.created
        assert result.total_devices == 1
        device = DeviceModel.objects.get(device_uid="HW-1")
        assert device.os_info == "Windows 11"
        assert device.last_access is not None

    def test_device_total_counts_devices(self):
        """Test the header total follows the number of devices."""
        register("HW-1")
        assert register("HW-2").total_devices == 2

    @pytest.mark.parametrize("field", ["tax_id", "company_name", "product", "device_uid"])
    def test_required_fields(self, db, field):
        """Test identifying fields are required."""
        with pytest.raises(ValidationError):
            register(**{field: " "})

    def test_tax_id_length(self, db):
        """Test tax IDs are capped at 20 characters."""
        with pytest.raises(ValidationError):
            register(tax_id="9" * 21)


@pytest.mark.django_db
@pytest.mark.integration
class TestRegistrationQueries:
    """Integration tests for registration reads and license assignment."""

    def test_assign_and_count_authorized(self, make_license, reseller_actor):
        """Test devices with a binding key count as authorized for the license."""
        license_row = make_license()
        register("HW-1", computer_key="PC-1")
        register("HW-2")

        header = run(
            container.assign_registration_license_handler(),
            AssignRegistrationLicenseCommand(TAX_ID, license_row.id, reseller_actor),
        )
        count = run(
            container.count_authorized_devices_handler(),
            CountAuthorizedDevicesQuery(license_row.id, reseller_actor),
        )

        assert header.license_id == license_row.id
        assert {device.device_uid: device.authorized for device in header.devices} == {"HW-1": True, "HW-2": False}
        assert count == 1

    def test_unassigned_only_for_superadmin(self, reseller_actor, superadmin):
        """Test headers without a license are hidden from scoped operators."""
        register()

        with pytest.raises(PermissionDeniedError):
            run(container.get_registration_handler(), GetRegistrationQuery(TAX_ID, reseller_actor))
        assert run(container.list_registrations_handler(), ListRegistrationsQuery(reseller_actor)) == []

        registration = run(container.get_registration_handler(), GetRegistrationQuery(TAX_ID, superadmin))
        assert [device.device_uid for device in registration.devices] == ["HW-1"]

    def test_assigned_visible_in_scope(self, make_license, superadmin, reseller_actor, other_reseller_actor):
        """Test assigned headers follow the license's visibility."""
        license_row = make_license()
        register()
        run(
            container.assign_registration_license_handler(),
            AssignRegistrationLicenseCommand(TAX_ID, license_row.id, superadmin),
        )

        assert len(run(container.list_registrations_handler(), ListRegistrationsQuery(reseller_actor))) == 1
        assert run(container.list_registrations_handler(), ListRegistrationsQuery(other_reseller_actor)) == []

    def test_unknown_tax_id(self, superadmin):
        """Test reading a missing header fails."""
        with pytest.raises(RegistrationNotFoundError):
            run(container.get_registration_handler(), GetRegistrationQuery("00000000000", superadmin))
