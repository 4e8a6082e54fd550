"""
URL configuration for log endpoints.
"""

from django.urls import path

from api.v1.logs import views

urlpatterns = [
    path("logs/activations/", views.ActivationLogListView.as_view(), name="activation-log-list"),
    path("logs/access/", views.AccessLogListView.as_view(), name="access-log-list"),
]
