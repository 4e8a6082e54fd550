"""
URL configuration for the LicenseBackOffice project.
"""
from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularRedocView,
    SpectacularSwaggerView,
)

from core.views import HealthCacheView, HealthDBView, HealthView, MetricsView, ReadyView

urlpatterns = [
    path("admin/", admin.site.urls),
    # Health check endpoints
    path("health/", HealthView.as_view(), name="health"),
    path("health/db/", HealthDBView.as_view(), name="health-db"),
    path("health/cache/", HealthCacheView.as_view(), name="health-cache"),
    path("ready/", ReadyView.as_view(), name="ready"),
    path("metrics/", MetricsView.as_view(), name="metrics"),
    # API endpoints
    path("api/v1/", include("api.v1.companies.urls")),
    path("api/v1/", include("api.v1.products.urls")),
    path("api/v1/", include("api.v1.licenses.urls")),
    path("api/v1/", include("api.v1.activation.urls")),
    path("api/v1/", include("api.v1.wallets.urls")),
    path("api/v1/", include("api.v1.billing.urls")),
    path("api/v1/", include("api.v1.registrations.urls")),
    path("api/v1/", include("api.v1.logs.urls")),
    # OpenAPI Schema
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    # Swagger UI
    path(
        "api/docs/",
        SpectacularSwaggerView.as_view(url_name="schema"),
        name="swagger-ui",
    ),
    # ReDoc
    path(
        "api/redoc/",
        SpectacularRedocView.as_view(url_name="schema"),
        name="redoc",
    ),
]
