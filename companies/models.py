from companies.infrastructure.models import Client, Company  # noqa: F401
