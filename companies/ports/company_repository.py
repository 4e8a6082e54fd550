"""
Company repository port (interface).

This defines the contract for company persistence operations.
Implementations are in the infrastructure layer.
"""
import uuid
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Set

from companies.domain.company import Company


class CompanyRepository(ABC):
    """
    Abstract repository for Company entities.
    """

    @abstractmethod
    async def save(self, company: Company) -> Company:
        """
        Save a company entity.

        Args:
            company: Company entity to save

        Returns:
            Saved company entity
        """
        pass

    @abstractmethod
    async def find_by_id(self, company_id: uuid.UUID) -> Optional[Company]:
        """
        Find a company by ID.

        Args:
            company_id: Company UUID

        Returns:
            Company entity or None if not found
        """
        pass

    @abstractmethod
    async def list(self, company_ids: Optional[Set[uuid.UUID]] = None) -> List[Company]:
        """
        List companies.

        Args:
            company_ids: Restrict to these ids (None for all)

        Returns:
            List of Company entities ordered by name
        """
        pass

    @abstractmethod
    async def parent_map(self) -> Dict[uuid.UUID, Optional[uuid.UUID]]:
        """
        Load the whole parent-id relation.

        Returns:
            Mapping of company id to parent id
        """
        pass
