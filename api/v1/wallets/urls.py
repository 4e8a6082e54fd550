"""
URL configuration for wallet endpoints.
"""

from django.urls import path

from api.v1.wallets import views

urlpatterns = [
    path("wallets/", views.WalletListView.as_view(), name="wallet-list"),
    path("wallets/transfer/", views.TransferCreditsView.as_view(), name="wallet-transfer"),
    path("wallets/<uuid:company_id>/", views.WalletDetailView.as_view(), name="wallet-detail"),
    path(
        "wallets/<uuid:company_id>/transactions/",
        views.WalletTransactionsView.as_view(),
        name="wallet-transactions",
    ),
    path(
        "wallets/<uuid:company_id>/recharge/",
        views.RechargeWalletView.as_view(),
        name="wallet-recharge",
    ),
    path("wallets/<uuid:company_id>/spend/", views.SpendCreditsView.as_view(), name="wallet-spend"),
]
