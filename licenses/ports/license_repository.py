"""
License repository port (interface).

This defines the contract for license persistence operations.
Implementations are in the infrastructure layer.
"""
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, List, Optional, Set

from licenses.domain.license import License

LicenseMutation = Callable[[License], License]
AfterApply = Callable[[License, License], None]


class LicenseRepository(ABC):
    """
    Abstract repository for License entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def save(
        self, license: License, after_save: Optional[Callable[[License], None]] = None
    ) -> License:
        """
        Save a license entity.

        Args:
            license: License entity to save
            after_save: Synchronous callback run in the same database
                transaction, after the row is written

        Returns:
            Saved license entity
        """
        pass

    @abstractmethod
    async def find_by_id(self, license_id: uuid.UUID) -> Optional[License]:
        """
        Find a license by ID.

        Args:
            license_id: License UUID

        Returns:
            License entity or None if not found
        """
        pass

    @abstractmethod
    async def find_by_activation_key(self, activation_key: str) -> Optional[License]:
        """
        Find a license by its activation key.

        Args:
            activation_key: Activation key string

        Returns:
            License entity or None if not found
        """
        pass

    @abstractmethod
    async def activation_key_exists(self, activation_key: str) -> bool:
        pass

    @abstractmethod
    async def apply(
        self,
        license_id: uuid.UUID,
        mutation: LicenseMutation,
        after_apply: Optional[AfterApply] = None,
    ) -> License:
        """
        Locked read-modify-write of one license.

        The row is locked, ``mutation`` computes the new state, the new
        state is written and ``after_apply`` runs, all in one database
        transaction. Any exception rolls everything back.

        Args:
            license_id: License UUID
            mutation: Pure function from current to new state
            after_apply: Synchronous callback receiving (before, after)

        Returns:
            The stored new state

        Raises:
            LicenseNotFoundError: If the license does not exist
        """
        pass

    @abstractmethod
    async def apply_by_activation_key(
        self,
        activation_key: str,
        mutation: LicenseMutation,
        after_apply: Optional[AfterApply] = None,
    ) -> License:
        """
        Same as ``apply`` but addressed by activation key.

        Raises:
            LicenseNotFoundError: If the key is unknown
        """
        pass

    @abstractmethod
    async def list(
        self,
        company_ids: Optional[Set[uuid.UUID]] = None,
        client_id: Optional[uuid.UUID] = None,
    ) -> List[License]:
        """
        List licenses visible to a set of companies.

        Args:
            company_ids: Companies owning the client or handling the
                license (None for all)
            client_id: Restrict to one client

        Returns:
            List of License entities, newest first
        """
        pass

    @abstractmethod
    async def list_expiring(
        self,
        now: datetime,
        until: datetime,
        company_ids: Optional[Set[uuid.UUID]] = None,
    ) -> List[License]:
        """
        Non-terminal licenses with ``now < expiry_date <= until``.

        Returns:
            List of License entities, closest expiry first
        """
        pass

    @abstractmethod
    async def list_lapsed(self, now: datetime) -> List[License]:
        """
        Licenses past their expiry whose stored status is not terminal.
        """
        pass

    @abstractmethod
    async def list_renewal_candidates(self, until: datetime) -> List[License]:
        """
        Active subscriptions with automatic renewal expiring by ``until``.
        """
        pass
