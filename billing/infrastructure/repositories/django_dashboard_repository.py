"""
Django implementation of DashboardRepository port.

All figures are computed with aggregate queries; licenses whose expiry
date has passed never count as active or demo, whatever their stored
status says.
"""
import uuid
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional, Set

from asgiref.sync import sync_to_async
from django.db.models import Q, Sum
from django.utils import timezone

from billing.domain.dashboard import DashboardStats
from billing.infrastructure.models import Transaction as TransactionModel
from billing.ports.dashboard_repository import DashboardRepository
from companies.infrastructure.models import Client as ClientModel
from licenses.infrastructure.models import License as LicenseModel

PAID_STATUSES = ["completed", "paid_with_credits"]


class DjangoDashboardRepository(DashboardRepository):
    """Django ORM implementation of DashboardRepository."""

    @staticmethod
    def _revenue(queryset) -> Decimal:
        return queryset.aggregate(total=Sum("final_amount"))["total"] or Decimal("0.00")

    @sync_to_async
    def stats(
        self,
        now: datetime,
        expiring_horizon_days: int,
        company_ids: Optional[Set[uuid.UUID]] = None,
    ) -> DashboardStats:
        local_now = timezone.localtime(now)
        day_start = local_now.replace(hour=0, minute=0, second=0, microsecond=0)
        month_start = day_start.replace(day=1)

        licenses = LicenseModel.objects.all()
        clients = ClientModel.objects.all()
        transactions = TransactionModel.objects.filter(status__in=PAID_STATUSES)
        if company_ids is not None:
            licenses = licenses.filter(client__company_id__in=company_ids)
            clients = clients.filter(company_id__in=company_ids)
            transactions = transactions.filter(client__company_id__in=company_ids)

        current = licenses.filter(Q(expiry_date__isnull=True) | Q(expiry_date__gte=now))

        return DashboardStats(
            active_licenses=current.filter(status="active").count(),
            demo_licenses=current.filter(
                Q(status="demo") | Q(license_type="trial", status="active")
            ).count(),
            validated_clients=clients.filter(status="validated").count(),
            monthly_revenue=self._revenue(transactions.filter(created_at__gte=month_start)),
            today_activations=licenses.filter(activation_date__gte=day_start).count(),
            expiring_renewals=licenses.filter(
                status__in=["active", "demo"],
                expiry_date__gt=now,
                expiry_date__lte=now + timedelta(days=expiring_horizon_days),
            ).count(),
            daily_revenue=self._revenue(transactions.filter(created_at__gte=day_start)),
        )
