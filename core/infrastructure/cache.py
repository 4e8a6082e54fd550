"""
Cache port and its Django cache framework adapter.

Cached values are read models only (dashboard figures, scoped lists).
Ledger balances and license status are always read from the database.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from asgiref.sync import sync_to_async
from django.core.cache import cache

logger = logging.getLogger(__name__)


class CachePort(ABC):
    """Abstract cache port."""

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """
        Get a value from cache.

        Args:
            key: Cache key

        Returns:
            Cached value or None if not found
        """

    @abstractmethod
    async def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        """
        Set a value in cache.

        Args:
            key: Cache key
            value: Value to cache
            timeout: Timeout in seconds (None for no expiration)
        """

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Delete a value from cache."""

    @abstractmethod
    async def namespace_version(self, namespace: str) -> int:
        """Current version number of a key namespace."""

    @abstractmethod
    async def bump_namespace(self, namespace: str) -> int:
        """
        Invalidate every key of a namespace by moving to a new version.

        Args:
            namespace: Namespace name

        Returns:
            The new version number
        """


class DjangoCacheAdapter(CachePort):
    """
    CachePort backed by Django's cache framework (Redis in production,
    locmem in tests). Backend errors degrade to cache misses.
    """

    @staticmethod
    def _version_key(namespace: str) -> str:
        return f"ns:{namespace}:version"

    async def get(self, key: str) -> Optional[Any]:
        try:
            value = await sync_to_async(cache.get)(key)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error getting from cache: %s", e, exc_info=True)
            return None
        logger.debug("Cache %s: %s", "hit" if value is not None else "miss", key)
        return value

    async def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        try:
            await sync_to_async(cache.set)(key, value, timeout=timeout)
            logger.debug("Cache set: %s (timeout=%s)", key, timeout)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error setting cache: %s", e, exc_info=True)

    async def delete(self, key: str) -> None:
        try:
            await sync_to_async(cache.delete)(key)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error deleting from cache: %s", e, exc_info=True)

    async def namespace_version(self, namespace: str) -> int:
        version = await self.get(self._version_key(namespace))
        return int(version) if version is not None else 1

    async def bump_namespace(self, namespace: str) -> int:
        version = await self.namespace_version(namespace) + 1
        await self.set(self._version_key(namespace), version, timeout=None)
        logger.debug("Cache namespace %s moved to version %d", namespace, version)
        return version


cache_adapter = DjangoCacheAdapter()
