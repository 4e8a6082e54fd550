"""
URL configuration for company and client endpoints.
"""

from django.urls import path

from api.v1.companies import views

urlpatterns = [
    path("companies/", views.CompanyListView.as_view(), name="company-list"),
    path("companies/<uuid:company_id>/", views.CompanyDetailView.as_view(), name="company-detail"),
    path(
        "companies/<uuid:company_id>/descendants/",
        views.CompanyDescendantsView.as_view(),
        name="company-descendants",
    ),
    path("clients/", views.ClientListView.as_view(), name="client-list"),
    path("clients/<uuid:client_id>/", views.ClientDetailView.as_view(), name="client-detail"),
    path("clients/<uuid:client_id>/status/", views.ClientStatusView.as_view(), name="client-status"),
]
