"""
URL configuration for license endpoints.
"""

from django.urls import path

from api.v1.licenses import views

urlpatterns = [
    path("licenses/", views.LicenseListView.as_view(), name="license-list"),
    path("licenses/expiring/", views.ExpiringLicensesView.as_view(), name="license-expiring"),
    path("licenses/<uuid:license_id>/", views.LicenseDetailView.as_view(), name="license-detail"),
    path("licenses/<uuid:license_id>/renew/", views.RenewLicenseView.as_view(), name="license-renew"),
    path(
        "licenses/<uuid:license_id>/suspend/",
        views.SuspendLicenseView.as_view(),
        name="license-suspend",
    ),
    path(
        "licenses/<uuid:license_id>/resume/",
        views.ResumeLicenseView.as_view(),
        name="license-resume",
    ),
    path(
        "licenses/<uuid:license_id>/authorized-devices/",
        views.AuthorizedDevicesView.as_view(),
        name="license-authorized-devices",
    ),
]
