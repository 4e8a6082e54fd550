"""
Django implementation of CompanyRepository port.
"""
import uuid
from typing import Dict, List, Optional, Set

from asgiref.sync import sync_to_async

from companies.domain.company import Company
from companies.infrastructure.models import Company as CompanyModel
from companies.ports.company_repository import CompanyRepository
from core.domain.value_objects import CompanyStatus, CompanyType


class DjangoCompanyRepository(CompanyRepository):
    """Django ORM implementation of CompanyRepository."""

    def _to_domain(self, model: CompanyModel) -> Company:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Company model

        Returns:
            Company domain entity
        """
        return Company(
            id=model.id,
            name=model.name,
            company_type=CompanyType(model.company_type),
            parent_id=model.parent_id,
            status=CompanyStatus(model.status),
            created_at=model.created_at,
            updated_at=model.updated_at,
            contact_info=model.contact_info or {},
        )

    def _to_model(self, company: Company) -> CompanyModel:
        model, created = CompanyModel.objects.get_or_create(
            id=company.id,
            defaults={
                "name": company.name,
                "company_type": company.company_type.value,
                "parent_id": company.parent_id,
                "status": company.status.value,
                "contact_info": company.contact_info,
            },
        )
        if not created:
            model.name = company.name
            model.company_type = company.company_type.value
            model.parent_id = company.parent_id
            model.status = company.status.value
            model.contact_info = company.contact_info
        return model

    @sync_to_async
    def save(self, company: Company) -> Company:
        model = self._to_model(company)
        model.save()
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(self, company_id: uuid.UUID) -> Optional[Company]:
        try:
            return self._to_domain(CompanyModel.objects.get(id=company_id))
        except CompanyModel.DoesNotExist:
            return None

    @sync_to_async
    def list(self, company_ids: Optional[Set[uuid.UUID]] = None) -> List[Company]:
        queryset = CompanyModel.objects.all()
        if company_ids is not None:
            queryset = queryset.filter(id__in=company_ids)
        return [self._to_domain(model) for model in queryset]

    @sync_to_async
    def parent_map(self) -> Dict[uuid.UUID, Optional[uuid.UUID]]:
        return dict(CompanyModel.objects.values_list("id", "parent_id"))
