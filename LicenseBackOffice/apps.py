"""
App configuration for the license back-office project.
"""
import logging
import os
import sys

from django.apps import AppConfig

logger = logging.getLogger(__name__)

SKIPPED_COMMANDS = (
    "migrate",
    "makemigrations",
    "collectstatic",
    "shell",
    "check",
    "createsuperuser",
)


class LicenseBackOfficeConfig(AppConfig):
    """App configuration for LicenseBackOffice."""

    name = "LicenseBackOffice"
    verbose_name = "License Back Office"

    def ready(self):
        """Wire domain event handlers and observability once apps are loaded."""
        from core.infrastructure.event_handlers import register_event_handlers

        # Handlers are needed everywhere, tests and management commands included
        register_event_handlers()

        if len(sys.argv) > 1 and sys.argv[1] in SKIPPED_COMMANDS:
            return
        # Django's autoreloader imports the project twice
        if os.environ.get("RUN_MAIN") == "false":
            return

        from core.instrumentation import setup_opentelemetry

        if setup_opentelemetry():
            logger.info("Observability setup complete")
