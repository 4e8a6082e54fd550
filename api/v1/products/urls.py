"""
URL configuration for product endpoints.
"""

from django.urls import path

from api.v1.products import views

urlpatterns = [
    path("products/", views.ProductListView.as_view(), name="product-list"),
    path("products/<uuid:product_id>/", views.ProductDetailView.as_view(), name="product-detail"),
]
