"""
ASGI config for the LicenseBackOffice project.
"""
import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "LicenseBackOffice.settings.prod")

application = get_asgi_application()
