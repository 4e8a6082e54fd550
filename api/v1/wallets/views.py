"""
Wallet API views.

Credits move only through recharge, spend and transfer; each call
commits the balance change and its ledger rows together.
"""

import uuid
from decimal import Decimal

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1 import container
from api.v1.common import ErrorSerializer, actor_from
from api.v1.wallets.serializers import (
    LedgerParamsSerializer,
    LedgerResultSerializer,
    RechargeRequestSerializer,
    SpendRequestSerializer,
    TransferRequestSerializer,
    WalletSerializer,
    WalletTransactionSerializer,
)
from core.instrumentation import Status, StatusCode, get_tracer
from wallets.application.commands.wallet_commands import (
    RechargeWalletCommand,
    SpendCreditsCommand,
    TransferCreditsCommand,
)
from wallets.application.queries.wallet_queries import (
    GetWalletQuery,
    ListWalletsQuery,
    ListWalletTransactionsQuery,
)

tracer = get_tracer(__name__)

LEDGER_ERRORS = {
    400: ErrorSerializer,
    403: ErrorSerializer,
    404: ErrorSerializer,
    409: ErrorSerializer,
    422: ErrorSerializer,
}


class WalletListView(APIView):
    @extend_schema(
        operation_id="list_wallets",
        summary="List Wallets",
        tags=["Wallets"],
        responses={200: WalletSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        wallets = async_to_sync(container.list_wallets_handler().handle)(
            ListWalletsQuery(actor=actor_from(request))
        )
        return Response(WalletSerializer(wallets, many=True).data)


class WalletDetailView(APIView):
    @extend_schema(
        operation_id="get_wallet",
        summary="Get Wallet",
        tags=["Wallets"],
        responses={200: WalletSerializer, 404: ErrorSerializer},
    )
    def get(self, request: Request, company_id: uuid.UUID) -> Response:
        wallet = async_to_sync(container.get_wallet_handler().handle)(
            GetWalletQuery(company_id=company_id, actor=actor_from(request))
        )
        return Response(WalletSerializer(wallet).data)


class WalletTransactionsView(APIView):
    @extend_schema(
        operation_id="list_wallet_transactions",
        summary="List Wallet Transactions",
        description="Ledger rows of a company wallet, newest first.",
        tags=["Wallets"],
        parameters=[
            OpenApiParameter(name="limit", type=int, location=OpenApiParameter.QUERY, required=False),
        ],
        responses={200: WalletTransactionSerializer(many=True), 404: ErrorSerializer},
    )
    def get(self, request: Request, company_id: uuid.UUID) -> Response:
        params = LedgerParamsSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        query = ListWalletTransactionsQuery(
            company_id=company_id,
            actor=actor_from(request),
            limit=params.validated_data["limit"],
        )
        entries = async_to_sync(container.list_wallet_transactions_handler().handle)(query)
        return Response(WalletTransactionSerializer(entries, many=True).data)


class RechargeWalletView(APIView):
    @extend_schema(
        operation_id="recharge_wallet",
        summary="Recharge Wallet",
        description="Add credits to a company wallet. Restricted to administrators.",
        tags=["Wallets"],
        request=RechargeRequestSerializer,
        responses={200: LedgerResultSerializer, **LEDGER_ERRORS},
    )
    def post(self, request: Request, company_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_recharge)(request, company_id)

    async def _handle_recharge(self, request: Request, company_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("recharge_wallet") as span:
            serializer = RechargeRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data
            span.set_attribute("company.id", str(company_id))
            span.set_attribute("wallet.amount", str(data["amount"]))

            command = RechargeWalletCommand(
                company_id=company_id,
                amount=Decimal(data["amount"]),
                actor=actor_from(request),
                description=data["description"],
            )
            result = await container.recharge_wallet_handler().handle(command)

            span.set_status(Status(StatusCode.OK))
            return Response(LedgerResultSerializer(result).data)


class SpendCreditsView(APIView):
    @extend_schema(
        operation_id="spend_credits",
        summary="Spend Credits",
        tags=["Wallets"],
        request=SpendRequestSerializer,
        responses={200: LedgerResultSerializer, **LEDGER_ERRORS},
    )
    def post(self, request: Request, company_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_spend)(request, company_id)

    async def _handle_spend(self, request: Request, company_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("spend_credits") as span:
            serializer = SpendRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data
            span.set_attribute("company.id", str(company_id))
            span.set_attribute("wallet.amount", str(data["amount"]))

            command = SpendCreditsCommand(
                company_id=company_id,
                amount=Decimal(data["amount"]),
                actor=actor_from(request),
                description=data["description"],
                related_entity_type=data["related_entity_type"],
                related_entity_id=data["related_entity_id"],
            )
            result = await container.spend_credits_handler().handle(command)

            span.set_status(Status(StatusCode.OK))
            return Response(LedgerResultSerializer(result).data)


class TransferCreditsView(APIView):
    @extend_schema(
        operation_id="transfer_credits",
        summary="Transfer Credits",
        description=(
            "Move credits from a company to one of its descendants. Both ledger rows "
            "share a correlation id."
        ),
        tags=["Wallets"],
        request=TransferRequestSerializer,
        responses={200: LedgerResultSerializer, **LEDGER_ERRORS},
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_transfer)(request)

    async def _handle_transfer(self, request: Request) -> Response:
        with tracer.start_as_current_span("transfer_credits") as span:
            serializer = TransferRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data
            span.set_attribute("transfer.from", str(data["from_company_id"]))
            span.set_attribute("transfer.to", str(data["to_company_id"]))

            command = TransferCreditsCommand(
                from_company_id=data["from_company_id"],
                to_company_id=data["to_company_id"],
                amount=Decimal(data["amount"]),
                actor=actor_from(request),
                description=data["description"],
            )
            result = await container.transfer_credits_handler().handle(command)

            span.set_status(Status(StatusCode.OK))
            return Response(LedgerResultSerializer(result).data)
