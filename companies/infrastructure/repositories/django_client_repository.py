"""
Django implementation of ClientRepository port.
"""
import uuid
from typing import List, Optional, Set

from asgiref.sync import sync_to_async

from companies.domain.client import Client
from companies.infrastructure.models import Client as ClientModel
from companies.ports.client_repository import ClientRepository
from core.domain.value_objects import ClientStatus, Email


class DjangoClientRepository(ClientRepository):
    """Django ORM implementation of ClientRepository."""

    def _to_domain(self, model: ClientModel) -> Client:
        return Client(
            id=model.id,
            company_id=model.company_id,
            name=model.name,
            email=Email(model.email),
            status=ClientStatus(model.status),
            created_at=model.created_at,
            contact_info=model.contact_info or {},
            is_multi_site=model.is_multi_site,
            is_multi_user=model.is_multi_user,
        )

    @sync_to_async
    def save(self, client: Client) -> Client:
        model, _ = ClientModel.objects.update_or_create(
            id=client.id,
            defaults={
                "company_id": client.company_id,
                "name": client.name,
                "email": str(client.email),
                "status": client.status.value,
                "contact_info": client.contact_info,
                "is_multi_site": client.is_multi_site,
                "is_multi_user": client.is_multi_user,
            },
        )
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(self, client_id: uuid.UUID) -> Optional[Client]:
        try:
            return self._to_domain(ClientModel.objects.get(id=client_id))
        except ClientModel.DoesNotExist:
            return None

    @sync_to_async
    def list(
        self, company_ids: Optional[Set[uuid.UUID]] = None, status: Optional[str] = None
    ) -> List[Client]:
        queryset = ClientModel.objects.all()
        if company_ids is not None:
            queryset = queryset.filter(company_id__in=company_ids)
        if status:
            queryset = queryset.filter(status=status)
        return [self._to_domain(model) for model in queryset]
