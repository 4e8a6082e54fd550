"""
Registration API views.

Devices report in without an operator key; operators browse the
registrations and tie them to licenses.
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1 import container
from api.v1.common import ErrorSerializer, actor_from
from api.v1.registrations.serializers import (
    AssignLicenseRequestSerializer,
    DeviceRegistrationResultSerializer,
    RegisterDeviceRequestSerializer,
    RegistrationSerializer,
)
from registrations.application.commands.registration_commands import (
    AssignRegistrationLicenseCommand,
    RegisterDeviceCommand,
)
from registrations.application.queries.registration_queries import (
    GetRegistrationQuery,
    ListRegistrationsQuery,
)


class RegisterDeviceView(APIView):
    @extend_schema(
        operation_id="register_device",
        summary="Register Device",
        description=(
            "Upsert the registration header of a tax ID and the reporting device. "
            "Returns 201 the first time a device reports, 200 afterwards."
        ),
        tags=["Registrations"],
        request=RegisterDeviceRequestSerializer,
        responses={
            200: DeviceRegistrationResultSerializer,
            201: DeviceRegistrationResultSerializer,
            400: ErrorSerializer,
        },
    )
    def post(self, request: Request) -> Response:
        serializer = RegisterDeviceRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        command = RegisterDeviceCommand(
            tax_id=data["tax_id"],
            company_name=data["company_name"],
            product=data["product"],
            device_uid=data["device_uid"],
            version=data["version"],
            module=data["module"],
            users=data.get("users"),
            os_info=data["os_info"],
            notes=data["notes"],
            computer_key=data.get("computer_key") or None,
        )
        result = async_to_sync(container.register_device_handler().handle)(command)
        return Response(
            DeviceRegistrationResultSerializer(result).data,
            status=status.HTTP_201_CREATED if result.created else status.HTTP_200_OK,
        )


class RegistrationListView(APIView):
    @extend_schema(
        operation_id="list_registrations",
        summary="List Registrations",
        tags=["Registrations"],
        responses={200: RegistrationSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        registrations = async_to_sync(container.list_registrations_handler().handle)(
            ListRegistrationsQuery(actor=actor_from(request))
        )
        return Response(RegistrationSerializer(registrations, many=True).data)


class RegistrationDetailView(APIView):
    @extend_schema(
        operation_id="get_registration",
        summary="Get Registration",
        description="A registration header with its devices.",
        tags=["Registrations"],
        responses={200: RegistrationSerializer, 403: ErrorSerializer, 404: ErrorSerializer},
    )
    def get(self, request: Request, tax_id: str) -> Response:
        registration = async_to_sync(container.get_registration_handler().handle)(
            GetRegistrationQuery(tax_id=tax_id, actor=actor_from(request))
        )
        return Response(RegistrationSerializer(registration).data)


class AssignRegistrationLicenseView(APIView):
    @extend_schema(
        operation_id="assign_registration_license",
        summary="Assign License To Registration",
        tags=["Registrations"],
        request=AssignLicenseRequestSerializer,
        responses={200: RegistrationSerializer, 403: ErrorSerializer, 404: ErrorSerializer},
    )
    def post(self, request: Request, tax_id: str) -> Response:
        serializer = AssignLicenseRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        command = AssignRegistrationLicenseCommand(
            tax_id=tax_id,
            license_id=serializer.validated_data["license_id"],
            actor=actor_from(request),
        )
        registration = async_to_sync(container.assign_registration_license_handler().handle)(command)
        return Response(RegistrationSerializer(registration).data)
