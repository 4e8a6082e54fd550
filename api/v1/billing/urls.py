"""
URL configuration for billing endpoints.
"""

from django.urls import path

from api.v1.billing import views

urlpatterns = [
    path("transactions/", views.TransactionListView.as_view(), name="transaction-list"),
    path(
        "transactions/<uuid:transaction_id>/status/",
        views.TransactionStatusView.as_view(),
        name="transaction-status",
    ),
    path(
        "transactions/<uuid:transaction_id>/pay-with-credits/",
        views.PayWithCreditsView.as_view(),
        name="transaction-pay-with-credits",
    ),
    path("dashboard/stats/", views.DashboardStatsView.as_view(), name="dashboard-stats"),
]
