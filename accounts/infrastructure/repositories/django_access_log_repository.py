"""
Django implementation of AccessLogRepository port.
"""
import uuid
from typing import List, Optional

from asgiref.sync import sync_to_async

from accounts.domain.access_log import AccessLogEntry
from accounts.infrastructure.models import AccessLog
from accounts.ports.access_log_repository import AccessLogRepository


class DjangoAccessLogRepository(AccessLogRepository):
    """Django ORM implementation of AccessLogRepository."""

    def _to_domain(self, model: AccessLog) -> AccessLogEntry:
        return AccessLogEntry(
            id=model.id,
            operator_id=model.operator_id,
            action=model.action,
            resource=model.resource,
            status_code=model.status_code,
            ip_address=model.ip_address,
            user_agent=model.user_agent,
            created_at=model.created_at,
        )

    def add_sync(self, entry: AccessLogEntry) -> None:
        """Insert the row from synchronous code such as middleware."""
        AccessLog.objects.create(
            id=entry.id,
            operator_id=entry.operator_id,
            action=entry.action,
            resource=entry.resource[:500],
            status_code=entry.status_code,
            ip_address=entry.ip_address,
            user_agent=entry.user_agent,
            created_at=entry.created_at,
        )

    async def add(self, entry: AccessLogEntry) -> None:
        await sync_to_async(self.add_sync)(entry)

    @sync_to_async
    def list_recent(
        self, limit: int = 100, operator_id: Optional[uuid.UUID] = None
    ) -> List[AccessLogEntry]:
        queryset = AccessLog.objects.all()
        if operator_id:
            queryset = queryset.filter(operator_id=operator_id)
        return [self._to_domain(model) for model in queryset[:limit]]
