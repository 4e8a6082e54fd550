"""
URL configuration for registration endpoints.
"""

from django.urls import path

from api.v1.registrations import views

urlpatterns = [
    path("registrations/", views.RegistrationListView.as_view(), name="registration-list"),
    path("registrations/device/", views.RegisterDeviceView.as_view(), name="registration-device"),
    path(
        "registrations/<str:tax_id>/",
        views.RegistrationDetailView.as_view(),
        name="registration-detail",
    ),
    path(
        "registrations/<str:tax_id>/assign-license/",
        views.AssignRegistrationLicenseView.as_view(),
        name="registration-assign-license",
    ),
]
