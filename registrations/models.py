from registrations.infrastructure.models import DeviceRegistration, RegistrationHeader  # noqa: F401
