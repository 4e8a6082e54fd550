"""
Log API views.
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.application.queries.list_access_logs import ListAccessLogsQuery
from activations.application.queries.list_activation_logs import ListActivationLogsQuery
from api.v1 import container
from api.v1.common import ErrorSerializer, actor_from
from api.v1.logs.serializers import (
    AccessLogParamsSerializer,
    AccessLogSerializer,
    ActivationLogParamsSerializer,
    ActivationLogSerializer,
)

LIMIT_PARAMETER = OpenApiParameter(name="limit", type=int, location=OpenApiParameter.QUERY, required=False)


class ActivationLogListView(APIView):
    @extend_schema(
        operation_id="list_activation_logs",
        summary="List Activation Logs",
        description="Activation and validation attempts, newest first. Only superadmins may omit license_id.",
        tags=["Logs"],
        parameters=[
            OpenApiParameter(name="license_id", type=uuid.UUID, location=OpenApiParameter.QUERY, required=False),
            LIMIT_PARAMETER,
        ],
        responses={200: ActivationLogSerializer(many=True), 403: ErrorSerializer, 404: ErrorSerializer},
    )
    def get(self, request: Request) -> Response:
        params = ActivationLogParamsSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        query = ListActivationLogsQuery(
            actor=actor_from(request),
            license_id=params.validated_data.get("license_id"),
            limit=params.validated_data["limit"],
        )
        entries = async_to_sync(container.list_activation_logs_handler().handle)(query)
        return Response(ActivationLogSerializer(entries, many=True).data)


class AccessLogListView(APIView):
    @extend_schema(
        operation_id="list_access_logs",
        summary="List Access Logs",
        description="Operator requests, newest first. Non-superadmins only see their own.",
        tags=["Logs"],
        parameters=[
            OpenApiParameter(name="operator_id", type=uuid.UUID, location=OpenApiParameter.QUERY, required=False),
            LIMIT_PARAMETER,
        ],
        responses={200: AccessLogSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        params = AccessLogParamsSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        query = ListAccessLogsQuery(
            actor=actor_from(request),
            operator_id=params.validated_data.get("operator_id"),
            limit=params.validated_data["limit"],
        )
        entries = async_to_sync(container.list_access_logs_handler().handle)(query)
        return Response(AccessLogSerializer(entries, many=True).data)
