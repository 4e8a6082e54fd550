"""
Django implementation of ActivationLogRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import uuid
from typing import List, Optional

from asgiref.sync import sync_to_async

from activations.domain.activation_log import ActivationLogEntry
from activations.infrastructure.models import ActivationLog as ActivationLogModel
from activations.ports.activation_log_repository import ActivationLogRepository
from core.domain.value_objects import ActivationKeyType


class DjangoActivationLogRepository(ActivationLogRepository):
    """Django ORM implementation of ActivationLogRepository."""

    def _to_domain(self, model: ActivationLogModel) -> ActivationLogEntry:
        return ActivationLogEntry(
            id=model.id,
            license_id=model.license_id,
            activation_key=model.activation_key,
            key_type=ActivationKeyType(model.key_type),
            success=model.result == "success",
            device_info=model.device_info or {},
            ip_address=model.ip_address,
            user_agent=model.user_agent,
            error_message=model.error_message,
            created_at=model.created_at,
        )

    @sync_to_async
    def add(self, entry: ActivationLogEntry) -> ActivationLogEntry:
        model = ActivationLogModel.objects.create(
            id=entry.id,
            license_id=entry.license_id,
            activation_key=entry.activation_key[:100],
            key_type=entry.key_type.value,
            device_info=entry.device_info,
            ip_address=entry.ip_address or None,
            user_agent=entry.user_agent,
            result=entry.result,
            error_message=entry.error_message,
            created_at=entry.created_at,
        )
        return self._to_domain(model)

    @sync_to_async
    def list(
        self, license_id: Optional[uuid.UUID] = None, limit: int = 100
    ) -> List[ActivationLogEntry]:
        queryset = ActivationLogModel.objects.all()
        if license_id:
            queryset = queryset.filter(license_id=license_id)
        return [self._to_domain(model) for model in queryset[:limit]]
