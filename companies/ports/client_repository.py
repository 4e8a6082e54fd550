"""
Client repository port (interface).
"""
import uuid
from abc import ABC, abstractmethod
from typing import List, Optional, Set

from companies.domain.client import Client


class ClientRepository(ABC):
    """Abstract repository for Client entities."""

    @abstractmethod
    async def save(self, client: Client) -> Client:
        """
        Save a client entity.

        Args:
            client: Client entity to save

        Returns:
            Saved client entity
        """
        pass

    @abstractmethod
    async def find_by_id(self, client_id: uuid.UUID) -> Optional[Client]:
        """
        Find a client by ID.

        Args:
            client_id: Client UUID

        Returns:
            Client entity or None if not found
        """
        pass

    @abstractmethod
    async def list(
        self, company_ids: Optional[Set[uuid.UUID]] = None, status: Optional[str] = None
    ) -> List[Client]:
        """
        List clients, optionally restricted to companies and a status.

        Args:
            company_ids: Restrict to clients of these companies (None for all)
            status: Restrict to this status value

        Returns:
            List of Client entities
        """
        pass
