"""
Product catalog API views.
"""

import uuid
from decimal import Decimal

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1 import container
from api.v1.common import ErrorSerializer, actor_from
from api.v1.products.serializers import CreateProductRequestSerializer, ProductSerializer
from core.domain.value_objects import LicenseType
from products.application.commands.create_product import CreateProductCommand


class ProductListView(APIView):
    """List the catalog or add a product."""

    @extend_schema(
        operation_id="list_products",
        summary="List Products",
        tags=["Products"],
        responses={200: ProductSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        actor_from(request)
        products = async_to_sync(container.list_products_handler().handle)()
        return Response(ProductSerializer(products, many=True).data)

    @extend_schema(
        operation_id="create_product",
        summary="Create Product",
        tags=["Products"],
        request=CreateProductRequestSerializer,
        responses={201: ProductSerializer, 400: ErrorSerializer, 403: ErrorSerializer},
    )
    def post(self, request: Request) -> Response:
        serializer = CreateProductRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        command = CreateProductCommand(
            name=data["name"],
            version=data["version"],
            description=data["description"],
            license_type=LicenseType(data["license_type"]),
            price=Decimal(data["price"]),
            discount=Decimal(data["discount"]),
            max_users=data["max_users"],
            max_devices=data["max_devices"],
            trial_days=data["trial_days"],
            actor=actor_from(request),
        )
        product = async_to_sync(container.create_product_handler().handle)(command)
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)


class ProductDetailView(APIView):
    @extend_schema(
        operation_id="get_product",
        summary="Get Product",
        tags=["Products"],
        responses={200: ProductSerializer, 404: ErrorSerializer},
    )
    def get(self, request: Request, product_id: uuid.UUID) -> Response:
        actor_from(request)
        product = async_to_sync(container.get_product_handler().handle)(product_id)
        return Response(ProductSerializer(product).data)
