"""
Celery tasks for background processing.

Scheduled license maintenance; the beat schedule lives in settings.
"""
import logging

from asgiref.sync import async_to_sync
from celery import shared_task

from api.v1 import container

logger = logging.getLogger(__name__)


@shared_task
def sweep_license_statuses() -> dict:
    """Store the expired status of every lapsed license."""
    report = async_to_sync(container.sweep_license_statuses_handler().handle)()
    logger.info(
        "License sweep finished",
        extra={"expired": report.processed, "failed": report.failed},
    )
    return {"expired": report.processed, "failed": report.failed}


@shared_task
def process_automatic_renewals() -> dict:
    """Renew subscriptions with automatic renewal inside the renewal window."""
    report = async_to_sync(container.process_automatic_renewals_handler().handle)()
    logger.info(
        "Automatic renewals finished",
        extra={"renewed": report.processed, "failed": report.failed},
    )
    return {"renewed": report.processed, "failed": report.failed}
