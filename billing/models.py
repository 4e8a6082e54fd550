from billing.infrastructure.models import Transaction  # noqa: F401
