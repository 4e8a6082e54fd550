"""
ListAccessLogsHandler.
"""
from typing import List

from accounts.application.dto.access_log_dto import AccessLogDTO
from accounts.application.queries.list_access_logs import ListAccessLogsQuery
from accounts.ports.access_log_repository import AccessLogRepository
from core.domain.exceptions import PermissionDeniedError


class ListAccessLogsHandler:
    """Handler for ListAccessLogsQuery."""

    def __init__(self, access_log_repository: AccessLogRepository):
        self.access_log_repository = access_log_repository

    async def handle(self, query: ListAccessLogsQuery) -> List[AccessLogDTO]:
        """
        Handle list access logs query.

        Operators other than superadmins only see their own requests.
        """
        operator_id = query.operator_id
        if not query.actor.is_superadmin:
            if operator_id and operator_id != query.actor.operator_id:
                raise PermissionDeniedError("Operators can only list their own access log")
            operator_id = query.actor.operator_id
        entries = await self.access_log_repository.list_recent(limit=query.limit, operator_id=operator_id)
        return [AccessLogDTO.from_entity(entry) for entry in entries]
