"""
URL configuration for activation endpoints.
"""

from django.urls import path

from api.v1.activation import views

urlpatterns = [
    path("activation/activate/", views.ActivateLicenseView.as_view(), name="activation-activate"),
    path("activation/validate/", views.ValidateLicenseView.as_view(), name="activation-validate"),
]
