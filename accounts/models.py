from accounts.infrastructure.models import AccessLog, ApiKey, Operator  # noqa: F401
