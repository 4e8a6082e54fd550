"""
Access log repository port (interface).
"""
import uuid
from abc import ABC, abstractmethod
from typing import List, Optional

from accounts.domain.access_log import AccessLogEntry


class AccessLogRepository(ABC):
    """Append-only store for access log entries."""

    @abstractmethod
    async def add(self, entry: AccessLogEntry) -> None:
        """
        Append an access log entry.

        Args:
            entry: Entry to store
        """
        pass

    @abstractmethod
    async def list_recent(
        self, limit: int = 100, operator_id: Optional[uuid.UUID] = None
    ) -> List[AccessLogEntry]:
        """
        Most recent entries first.

        Args:
            limit: Maximum number of entries
            operator_id: Restrict to one operator

        Returns:
            List of AccessLogEntry
        """
        pass
