"""
Production settings for LicenseBackOffice.
"""
import os

from .base import *  # noqa: F403, F401

DEBUG = False

ALLOWED_HOSTS = [host for host in os.environ.get("ALLOWED_HOSTS", "").split(",") if host]

# Security settings
SECURE_SSL_REDIRECT = os.environ.get("SECURE_SSL_REDIRECT", "true").lower() == "true"
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = "DENY"

# Health probes come over plain HTTP from inside the cluster
SECURE_REDIRECT_EXEMPT = [r"^health/", r"^ready/$", r"^metrics/$"]
