"""
Fire-and-forget audit sink.

Activation-log and access-log rows are written through an AuditSink.
A failing write is logged and counted, and the caller's result stands.
"""
import logging
from typing import Any, Awaitable, Callable, Generic, TypeVar

from core.metrics import audit_write_failures_total

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AuditSink(Generic[T]):
    """
    Wraps an append-only writer so that audit failures never change
    the outcome of the operation being audited.
    """

    def __init__(self, name: str, writer: Callable[[T], Awaitable[Any]]):
        """
        Initialize the sink.

        Args:
            name: Sink name used in logs and metrics
            writer: Coroutine function that persists one entry
        """
        self.name = name
        self._writer = writer

    async def record(self, entry: T) -> bool:
        """
        Persist an entry.

        Args:
            entry: Audit entry

        Returns:
            True if the entry was written
        """
        try:
            await self._writer(entry)
        except Exception as e:  # pylint: disable=broad-exception-caught
            audit_write_failures_total.labels(sink=self.name).inc()
            logger.error(
                "Audit sink %s failed to record entry: %s",
                self.name,
                e,
                extra={"sink": self.name, "entry_type": type(entry).__name__},
                exc_info=True,
            )
            return False
        return True
