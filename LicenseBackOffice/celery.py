"""
Celery configuration for background tasks.

Runs the scheduled license maintenance (expiry sweep and automatic
renewals).
"""
import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "LicenseBackOffice.settings.dev")

app = Celery("LicenseBackOffice")

# Load configuration from Django settings
app.config_from_object("django.conf:settings", namespace="CELERY")

# Auto-discover tasks from all installed apps
app.autodiscover_tasks()
