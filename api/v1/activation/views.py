"""
Activation API views.

Public endpoints called by installed software. They do not require an
operator API key; every attempt is recorded in the activation log.
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from activations.application.commands.activate_license import (
    ActivateLicenseCommand,
    ValidateLicenseCommand,
)
from activations.application.dto.activation_dto import ActivationResultDTO
from activations.domain.activation import ActivationFailure, ActivationResult
from api.v1 import container
from api.v1.activation.serializers import (
    ActivateRequestSerializer,
    ActivationResultSerializer,
    ValidateRequestSerializer,
    ValidationResultSerializer,
)
from api.v1.common import ErrorSerializer, client_ip
from core.instrumentation import Status, StatusCode, get_tracer

tracer = get_tracer(__name__)

FAILURE_STATUS_CODES = {
    ActivationFailure.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ActivationFailure.ALREADY_BOUND: status.HTTP_409_CONFLICT,
    ActivationFailure.INVALID_STATUS: status.HTTP_409_CONFLICT,
    ActivationFailure.EXPIRED: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ActivationFailure.SUSPENDED: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def _result_dto(result: ActivationResult) -> ActivationResultDTO:
    if not result.ok:
        return ActivationResultDTO(
            success=False, message=result.message, error_code=str(result.failure)
        )
    license = result.license
    return ActivationResultDTO(
        success=True,
        message=result.message,
        license_id=license.id,
        status=result.status.value,
        activation_date=license.activation_date,
        expiry_date=license.expiry_date,
    )


class ActivateLicenseView(APIView):
    """Bind a license to the calling device."""

    @extend_schema(
        operation_id="activate_license",
        summary="Activate License",
        description=(
            "Bind the license behind an activation key to a device. Activating again "
            "from the same device is accepted; another device gets 409."
        ),
        tags=["Activation"],
        request=ActivateRequestSerializer,
        responses={
            200: ActivationResultSerializer,
            400: ErrorSerializer,
            404: ActivationResultSerializer,
            409: ActivationResultSerializer,
            422: ActivationResultSerializer,
        },
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_activate)(request)

    async def _handle_activate(self, request: Request) -> Response:
        with tracer.start_as_current_span("activate_license") as span:
            serializer = ActivateRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data

            command = ActivateLicenseCommand(
                activation_key=data["activation_key"],
                computer_key=data["computer_key"],
                device_info=data["device_info"],
                ip_address=client_ip(request),
                user_agent=request.META.get("HTTP_USER_AGENT", ""),
            )
            result = await container.activate_license_handler().handle(command)
            body = ActivationResultSerializer(_result_dto(result)).data

            if not result.ok:
                span.set_attribute("activation.failure", str(result.failure))
                span.set_status(Status(StatusCode.ERROR, result.message))
                return Response(body, status=FAILURE_STATUS_CODES[result.failure])

            span.set_attribute("license.id", str(result.license.id))
            span.set_status(Status(StatusCode.OK))
            return Response(body)


class ValidateLicenseView(APIView):
    """Check whether a license is usable."""

    @extend_schema(
        operation_id="validate_license",
        summary="Validate License",
        description=(
            "Report whether the license is currently usable. The answer is always 200; "
            "``valid`` and ``error_code`` carry the outcome."
        ),
        tags=["Activation"],
        request=ValidateRequestSerializer,
        responses={200: ValidationResultSerializer, 400: ErrorSerializer},
    )
    def post(self, request: Request) -> Response:
        serializer = ValidateRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        command = ValidateLicenseCommand(
            activation_key=data["activation_key"],
            computer_key=data.get("computer_key") or None,
            device_info=data["device_info"],
            ip_address=client_ip(request),
            user_agent=request.META.get("HTTP_USER_AGENT", ""),
        )
        result = async_to_sync(container.validate_license_handler().handle)(command)
        return Response(ValidationResultSerializer(result).data)
