"""
API exception handlers.

This module maps domain exceptions and DRF errors to the
``{"error": {"code", "message"}}`` response body.
"""

import logging
from typing import Any, Dict, Optional

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    ConcurrentUpdateError,
    DeviceAlreadyBoundError,
    DomainException,
    InsufficientFundsError,
    InvalidAmountError,
    InvalidAPIKeyError,
    InvalidLicenseStatusError,
    LicenseExpiredError,
    LicenseSuspendedError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from core.metrics import errors_total

logger = logging.getLogger(__name__)

# Checked in order; the first matching class wins.
DOMAIN_STATUS_CODES = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (InvalidAPIKeyError, status.HTTP_401_UNAUTHORIZED),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
    (DeviceAlreadyBoundError, status.HTTP_409_CONFLICT),
    (ConcurrentUpdateError, status.HTTP_409_CONFLICT),
    (InvalidLicenseStatusError, status.HTTP_409_CONFLICT),
    (LicenseExpiredError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (LicenseSuspendedError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (InsufficientFundsError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (InvalidAmountError, status.HTTP_400_BAD_REQUEST),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
)


def status_code_for(exc: DomainException) -> int:
    for exception_class, status_code in DOMAIN_STATUS_CODES:
        if isinstance(exc, exception_class):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def error_response(code: str, message: Any, status_code: int) -> Response:
    return Response({"error": {"code": code, "message": message}}, status=status_code)


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    trace_id = _get_trace_id(context)

    if isinstance(exc, DomainException):
        response = _handle_domain_exception(exc, trace_id)
    elif isinstance(exc, DRFValidationError):
        response = error_response("VALIDATION_ERROR", exc.detail, status.HTTP_400_BAD_REQUEST)
    elif isinstance(exc, APIException):
        response = exception_handler(exc, context)
        code = exc.default_code.upper().replace("-", "_") if exc.default_code else "API_ERROR"
        response.data = {
            "error": {"code": code, "message": response.data.get("detail", exc.default_detail)}
        }
    elif isinstance(exc, Http404):
        response = error_response("NOT_FOUND", "Resource not found", status.HTTP_404_NOT_FOUND)
    else:
        response = _handle_unexpected_exception(exc, context, trace_id)

    if trace_id:
        response["X-Trace-ID"] = trace_id
    return response


def _get_trace_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract trace ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "trace_id", getattr(request, "correlation_id", None))


def _handle_domain_exception(exc: DomainException, trace_id: Optional[str]) -> Response:
    """Handle domain-specific exceptions."""
    status_code = status_code_for(exc)
    logger.warning("Domain exception: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id})
    return error_response(exc.code, exc.message, status_code)


def _handle_unexpected_exception(
    exc: Exception, context: Dict[str, Any], trace_id: Optional[str]
) -> Response:
    """Handle unexpected or untracked exceptions."""
    view = context.get("view")
    errors_total.labels(
        error_type=type(exc).__name__, endpoint=type(view).__name__ if view else "unknown"
    ).inc()
    logger.error("Unexpected error: %s", exc, extra={"trace_id": trace_id}, exc_info=True)
    return error_response(
        "INTERNAL_ERROR", "An internal error occurred", status.HTTP_500_INTERNAL_SERVER_ERROR
    )
