"""
License API views.

Back-office endpoints to issue licenses, manage their lifecycle and
list them. Every status in a response is computed at read time.
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
from api.v1.common import ErrorSerializer, actor_from
from api.v1.licenses.serializers import (
    AuthorizedDevicesSerializer,
    ExpiringParamsSerializer,
    IssueLicenseRequestSerializer,
    LicenseListParamsSerializer,
    LicenseSerializer,
)
from core.domain.value_objects import LicenseType
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.commands.issue_license import IssueLicenseCommand
from licenses.application.commands.renew_license import RenewLicenseCommand
from licenses.application.commands.resume_license import ResumeLicenseCommand
from licenses.application.commands.suspend_license import SuspendLicenseCommand
from licenses.application.queries.list_expiring_licenses import ListExpiringLicensesQuery
from licenses.application.queries.list_licenses import GetLicenseQuery, ListLicensesQuery
from registrations.application.queries.registration_queries import CountAuthorizedDevicesQuery

tracer = get_tracer(__name__)

LIFECYCLE_ERRORS = {404: ErrorSerializer, 403: ErrorSerializer, 409: ErrorSerializer}


class LicenseListView(APIView):
    """List visible licenses or issue a new one."""

    @extend_schema(
        operation_id="list_licenses",
        summary="List Licenses",
        tags=["Licenses"],
        parameters=[
            OpenApiParameter(name="client_id", type=uuid.UUID, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(
                name="status",
                type=str,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Filter on the computed status",
            ),
        ],
        responses={200: LicenseSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        params = LicenseListParamsSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        query = ListLicensesQuery(
            actor=actor_from(request),
            client_id=params.validated_data.get("client_id"),
            status=params.validated_data.get("status"),
        )
        licenses = async_to_sync(container.list_licenses_handler().handle)(query)
        return Response(LicenseSerializer(licenses, many=True).data)

    @extend_schema(
        operation_id="issue_license",
        summary="Issue License",
        description=(
            "Create a license from the product template with a generated activation key. "
            "A pending activation transaction is recorded when the final price is positive."
        ),
        tags=["Licenses"],
        request=IssueLicenseRequestSerializer,
        responses={201: LicenseSerializer, 400: ErrorSerializer, 403: ErrorSerializer, 404: ErrorSerializer},
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_issue_license)(request)

    async def _handle_issue_license(self, request: Request) -> Response:
        with tracer.start_as_current_span("issue_license") as span:
            serializer = IssueLicenseRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data
            actor = actor_from(request)
            span.set_attribute("operator.id", str(actor.operator_id))
            span.set_attribute("client.id", str(data["client_id"]))
            span.set_attribute("product.id", str(data["product_id"]))

            command = IssueLicenseCommand(
                client_id=data["client_id"],
                product_id=data["product_id"],
                actor=actor,
                license_type=LicenseType(data["license_type"]) if data.get("license_type") else None,
                price=Decimal(data["price"]) if "price" in data else None,
                discount=Decimal(data["discount"]) if "discount" in data else None,
                max_users=data.get("max_users"),
                max_devices=data.get("max_devices"),
                renewal_enabled=data["renewal_enabled"],
                expiry_date=data.get("expiry_date"),
                assigned_company_id=data.get("assigned_company_id"),
                assigned_agent_id=data.get("assigned_agent_id"),
                notes=data["notes"],
            )
            license = await container.issue_license_handler().handle(command)

            span.set_attribute("license.id", str(license.id))
            span.set_attribute("license.type", license.license_type)
            span.set_status(Status(StatusCode.OK))
            return Response(LicenseSerializer(license).data, status=status.HTTP_201_CREATED)


class LicenseDetailView(APIView):
    @extend_schema(
        operation_id="get_license",
        summary="Get License",
        tags=["Licenses"],
        responses={200: LicenseSerializer, 404: ErrorSerializer},
    )
    def get(self, request: Request, license_id: uuid.UUID) -> Response:
        query = GetLicenseQuery(license_id=license_id, actor=actor_from(request))
        license = async_to_sync(container.get_license_handler().handle)(query)
        return Response(LicenseSerializer(license).data)


class ExpiringLicensesView(APIView):
    @extend_schema(
        operation_id="list_expiring_licenses",
        summary="List Expiring Licenses",
        description=(
            "Active or demo licenses expiring within the horizon, closest first. "
            "Defaults to LICENSE_EXPIRING_HORIZON_DAYS."
        ),
        tags=["Licenses"],
        parameters=[
            OpenApiParameter(name="days", type=int, location=OpenApiParameter.QUERY, required=False),
        ],
        responses={200: LicenseSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        params = ExpiringParamsSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        query = ListExpiringLicensesQuery(
            actor=actor_from(request), horizon_days=params.validated_data.get("days")
        )
        licenses = async_to_sync(container.list_expiring_licenses_handler().handle)(query)
        return Response(LicenseSerializer(licenses, many=True).data)


class _LicenseLifecycleView(APIView):
    """POST-only view running one lifecycle command on a license."""

    operation = ""
    command_class = None

    def _handler(self):
        raise NotImplementedError

    def post(self, request: Request, license_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle)(request, license_id)

    async def _handle(self, request: Request, license_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span(self.operation) as span:
            actor = actor_from(request)
            span.set_attribute("license.id", str(license_id))
            span.set_attribute("operator.id", str(actor.operator_id))

            license = await self._handler().handle(self.command_class(license_id=license_id, actor=actor))

            span.set_attribute("license.status", license.status)
            span.set_status(Status(StatusCode.OK))
            return Response(LicenseSerializer(license).data)


class RenewLicenseView(_LicenseLifecycleView):
    operation = "renew_license"
    command_class = RenewLicenseCommand

    def _handler(self):
        return container.renew_license_handler()

    @extend_schema(
        operation_id="renew_license",
        summary="Renew License",
        description=(
            "Extend a subscription by one term from its expiry (or from now if it already "
            "lapsed) and record a pending renewal transaction."
        ),
        tags=["Licenses"],
        request=None,
        responses={200: LicenseSerializer, **LIFECYCLE_ERRORS},
    )
    def post(self, request: Request, license_id: uuid.UUID) -> Response:
        return super().post(request, license_id)


class SuspendLicenseView(_LicenseLifecycleView):
    operation = "suspend_license"
    command_class = SuspendLicenseCommand

    def _handler(self):
        return container.suspend_license_handler()

    @extend_schema(
        operation_id="suspend_license",
        summary="Suspend License",
        tags=["Licenses"],
        request=None,
        responses={200: LicenseSerializer, **LIFECYCLE_ERRORS},
    )
    def post(self, request: Request, license_id: uuid.UUID) -> Response:
        return super().post(request, license_id)


class ResumeLicenseView(_LicenseLifecycleView):
    operation = "resume_license"
    command_class = ResumeLicenseCommand

    def _handler(self):
        return container.resume_license_handler()

    @extend_schema(
        operation_id="resume_license",
        summary="Resume License",
        tags=["Licenses"],
        request=None,
        responses={200: LicenseSerializer, **LIFECYCLE_ERRORS},
    )
    def post(self, request: Request, license_id: uuid.UUID) -> Response:
        return super().post(request, license_id)


class AuthorizedDevicesView(APIView):
    @extend_schema(
        operation_id="count_authorized_devices",
        summary="Count Authorized Devices",
        description="Registered devices carrying a binding key under headers assigned to the license.",
        tags=["Licenses"],
        responses={200: AuthorizedDevicesSerializer, 404: ErrorSerializer},
    )
    def get(self, request: Request, license_id: uuid.UUID) -> Response:
        query = CountAuthorizedDevicesQuery(license_id=license_id, actor=actor_from(request))
        count = async_to_sync(container.count_authorized_devices_handler().handle)(query)
        return Response({"license_id": str(license_id), "authorized_devices": count})
