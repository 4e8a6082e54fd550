"""
Event handlers for domain events.

These handlers process domain events for side effects such as audit
logging and cache invalidation.
"""

import logging

from activations.domain.events import ActivationFailed, LicenseActivated
from billing.application.handlers.dashboard_handler import DASHBOARD_NAMESPACE
from billing.domain.events import TransactionCreated, TransactionStatusChanged
from companies.domain.events import ClientStatusChanged, CompanyCreated, CompanyUpdated
from core.domain.events import DomainEvent, EventHandler
from core.infrastructure.cache import CachePort, cache_adapter
from licenses.domain.events import (
    LicenseExpired,
    LicenseIssued,
    LicenseRenewed,
    LicenseResumed,
    LicenseSuspended,
)
from registrations.domain.events import DeviceRegistered, RegistrationLicenseAssigned
from wallets.domain.events import CreditsTransferred, WalletDebited, WalletRecharged

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger("audit")

AUDITED_EVENTS = (
    CompanyCreated,
    CompanyUpdated,
    ClientStatusChanged,
    LicenseIssued,
    LicenseRenewed,
    LicenseSuspended,
    LicenseResumed,
    LicenseExpired,
    LicenseActivated,
    ActivationFailed,
    WalletRecharged,
    WalletDebited,
    CreditsTransferred,
    TransactionCreated,
    TransactionStatusChanged,
    DeviceRegistered,
    RegistrationLicenseAssigned,
)

# Events that move a dashboard figure.
DASHBOARD_EVENTS = (
    ClientStatusChanged,
    LicenseIssued,
    LicenseRenewed,
    LicenseSuspended,
    LicenseResumed,
    LicenseExpired,
    LicenseActivated,
    TransactionCreated,
    TransactionStatusChanged,
)


class AuditLogEventHandler(EventHandler):
    """
    Event handler for audit logging.

    Writes every domain event as a structured record on the ``audit`` logger.
    """

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        payload = event.to_dict()
        audit_logger.info(
            "Audit log: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra={
                "event_id": payload["event_id"],
                "event_type": event.event_type,
                "aggregate_id": event.aggregate_id,
                "occurred_at": payload["occurred_at"],
                "data": payload["data"],
            },
        )


class DashboardCacheInvalidationHandler(EventHandler):
    """
    Event handler for cache invalidation.

    Bumps the dashboard cache namespace so every cached scope is
    recomputed on the next read.
    """

    def __init__(self, cache: CachePort = cache_adapter):
        self.cache = cache

    async def handle(self, event: DomainEvent) -> None:
        version = await self.cache.bump_namespace(DASHBOARD_NAMESPACE)
        logger.debug("Dashboard cache invalidated by %s (version %d)", event.event_type, version)


_registered = False


def register_event_handlers(force: bool = False) -> None:
    """Register all event handlers with the event bus."""
    from core.infrastructure.events import event_bus

    global _registered
    if _registered and not force:
        return

    audit_handler = AuditLogEventHandler()
    cache_handler = DashboardCacheInvalidationHandler()

    for event_type in AUDITED_EVENTS:
        event_bus.subscribe(event_type, audit_handler)
    for event_type in DASHBOARD_EVENTS:
        event_bus.subscribe(event_type, cache_handler)

    _registered = True
    logger.info("Event handlers registered")
