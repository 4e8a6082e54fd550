"""
WSGI config for the LicenseBackOffice project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "LicenseBackOffice.settings.prod")

application = get_wsgi_application()
