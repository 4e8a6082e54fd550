from activations.infrastructure.models import ActivationLog  # noqa: F401
