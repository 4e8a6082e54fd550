"""
Activation log repository port (interface).

This defines the contract for activation log persistence operations.
Implementations are in the infrastructure layer.
"""
import uuid
from abc import ABC, abstractmethod
from typing import List, Optional

from activations.domain.activation_log import ActivationLogEntry


class ActivationLogRepository(ABC):
    """
    Abstract repository for ActivationLogEntry records.

    Entries are append-only: there is no update or delete.
    """

    @abstractmethod
    async def add(self, entry: ActivationLogEntry) -> ActivationLogEntry:
        """
        Append an activation log entry.

        Args:
            entry: Entry to store

        Returns:
            Stored entry
        """
        pass

    @abstractmethod
    async def list(
        self, license_id: Optional[uuid.UUID] = None, limit: int = 100
    ) -> List[ActivationLogEntry]:
        """
        Most recent entries first.

        Args:
            license_id: Restrict to one license
            limit: Maximum number of entries
        """
        pass
