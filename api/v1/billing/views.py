"""
Billing API views.
"""

import uuid
from decimal import Decimal

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1 import container
from api.v1.billing.serializers import (
    CreateTransactionRequestSerializer,
    DashboardStatsSerializer,
    TransactionListParamsSerializer,
    TransactionSerializer,
    UpdateTransactionStatusRequestSerializer,
)
from api.v1.common import ErrorSerializer, actor_from
from billing.application.commands.transaction_commands import (
    CreateTransactionCommand,
    PayTransactionWithCreditsCommand,
    UpdateTransactionStatusCommand,
)
from billing.application.queries.billing_queries import GetDashboardStatsQuery, ListTransactionsQuery
from core.domain.value_objects import TransactionStatus, TransactionType
from core.instrumentation import Status, StatusCode, get_tracer

tracer = get_tracer(__name__)


class TransactionListView(APIView):
    """List billing transactions or record a new one."""

    @extend_schema(
        operation_id="list_transactions",
        summary="List Transactions",
        tags=["Billing"],
        parameters=[
            OpenApiParameter(name="license_id", type=uuid.UUID, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="status", type=str, location=OpenApiParameter.QUERY, required=False),
        ],
        responses={200: TransactionSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        params = TransactionListParamsSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        query = ListTransactionsQuery(
            actor=actor_from(request),
            license_id=params.validated_data.get("license_id"),
            status=params.validated_data.get("status"),
        )
        transactions = async_to_sync(container.list_transactions_handler().handle)(query)
        return Response(TransactionSerializer(transactions, many=True).data)

    @extend_schema(
        operation_id="create_transaction",
        summary="Create Transaction",
        description="Record a pending transaction. Amount and discount default to the license's.",
        tags=["Billing"],
        request=CreateTransactionRequestSerializer,
        responses={201: TransactionSerializer, 400: ErrorSerializer, 404: ErrorSerializer},
    )
    def post(self, request: Request) -> Response:
        serializer = CreateTransactionRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        command = CreateTransactionCommand(
            license_id=data["license_id"],
            transaction_type=TransactionType(data["transaction_type"]),
            actor=actor_from(request),
            amount=Decimal(data["amount"]) if "amount" in data else None,
            discount=Decimal(data["discount"]) if "discount" in data else None,
            payment_method=data["payment_method"],
            notes=data["notes"],
        )
        transaction = async_to_sync(container.create_transaction_handler().handle)(command)
        return Response(TransactionSerializer(transaction).data, status=status.HTTP_201_CREATED)


class TransactionStatusView(APIView):
    @extend_schema(
        operation_id="update_transaction_status",
        summary="Update Transaction Status",
        tags=["Billing"],
        request=UpdateTransactionStatusRequestSerializer,
        responses={200: TransactionSerializer, 400: ErrorSerializer, 404: ErrorSerializer},
    )
    def post(self, request: Request, transaction_id: uuid.UUID) -> Response:
        serializer = UpdateTransactionStatusRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        command = UpdateTransactionStatusCommand(
            transaction_id=transaction_id,
            status=TransactionStatus(data["status"]),
            actor=actor_from(request),
            payment_method=data.get("payment_method"),
        )
        transaction = async_to_sync(container.update_transaction_status_handler().handle)(command)
        return Response(TransactionSerializer(transaction).data)


class PayWithCreditsView(APIView):
    @extend_schema(
        operation_id="pay_transaction_with_credits",
        summary="Pay Transaction With Credits",
        description=(
            "Settle a pending transaction from the booking company's wallet. The debit "
            "and the status change commit together."
        ),
        tags=["Billing"],
        request=None,
        responses={
            200: TransactionSerializer,
            400: ErrorSerializer,
            404: ErrorSerializer,
            409: ErrorSerializer,
            422: ErrorSerializer,
        },
    )
    def post(self, request: Request, transaction_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_pay)(request, transaction_id)

    async def _handle_pay(self, request: Request, transaction_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("pay_transaction_with_credits") as span:
            span.set_attribute("transaction.id", str(transaction_id))
            command = PayTransactionWithCreditsCommand(
                transaction_id=transaction_id, actor=actor_from(request)
            )
            transaction = await container.pay_transaction_with_credits_handler().handle(command)

            span.set_attribute("transaction.credits_used", str(transaction.credits_used))
            span.set_status(Status(StatusCode.OK))
            return Response(TransactionSerializer(transaction).data)


class DashboardStatsView(APIView):
    @extend_schema(
        operation_id="dashboard_stats",
        summary="Dashboard Statistics",
        description="Headline figures for the operator's scope, cached briefly.",
        tags=["Billing"],
        responses={200: DashboardStatsSerializer},
    )
    def get(self, request: Request) -> Response:
        stats = async_to_sync(container.dashboard_stats_handler().handle)(
            GetDashboardStatsQuery(actor=actor_from(request))
        )
        return Response(DashboardStatsSerializer(stats).data)
