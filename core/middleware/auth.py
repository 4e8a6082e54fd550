"""
API key authentication middleware.

Back-office endpoints under /api/v1/ require an operator API key in the
X-API-Key header (or as a Bearer token). Device-facing endpoints
(activation, validation, device registration) are public.
"""

import logging
from typing import Optional

from asgiref.sync import async_to_sync
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.deprecation import MiddlewareMixin

from accounts.domain.access_log import AccessLogEntry
from accounts.infrastructure.models import ApiKey
from accounts.infrastructure.repositories.django_access_log_repository import (
    DjangoAccessLogRepository,
)
from core.domain.value_objects import Actor, Role
from core.infrastructure.audit import AuditSink

logger = logging.getLogger(__name__)

PROTECTED_PREFIX = "/api/v1/"

PUBLIC_PATHS = (
    "/api/v1/activation/",
    "/api/v1/registrations/device/",
)


def actor_for(operator) -> Actor:
    """Build the acting identity passed into commands from an Operator row."""
    return Actor(
        operator_id=operator.id,
        role=Role(operator.role),
        company_id=operator.company_id,
        name=operator.username,
    )


class APIKeyAuthenticationMiddleware(MiddlewareMixin):
    """
    Middleware for operator authentication.

    This middleware:
    1. Resolves the operator behind an API key for back-office APIs
    2. Sets ``request.operator`` and ``request.actor``
    3. Returns 401 Unauthorized if authentication fails
    4. Appends an access log row for every authenticated request
    """

    def __init__(self, get_response=None):
        super().__init__(get_response)
        self.access_log = AuditSink("access_log", DjangoAccessLogRepository().add)

    def process_request(self, request: HttpRequest) -> Optional[HttpResponse]:
        """
        Process request and validate authentication.

        Args:
            request: HTTP request

        Returns:
            HttpResponse with 401 if authentication fails, None otherwise
        """
        request.operator = None  # type: ignore
        request.actor = None  # type: ignore
        if self._should_skip_auth(request.path):
            return None
        return self._authenticate_operator(request)

    def process_response(self, request: HttpRequest, response: HttpResponse) -> HttpResponse:
        operator = getattr(request, "operator", None)
        if operator is not None:
            entry = AccessLogEntry(
                operator_id=operator.id,
                action=request.method,
                resource=request.get_full_path(),
                status_code=response.status_code,
                ip_address=client_ip(request),
                user_agent=request.META.get("HTTP_USER_AGENT", ""),
            )
            async_to_sync(self.access_log.record)(entry)
        return response

    def _should_skip_auth(self, path: str) -> bool:
        """
        Check if authentication should be skipped for this path.

        Args:
            path: Request path

        Returns:
            True if auth should be skipped
        """
        if not path.startswith(PROTECTED_PREFIX):
            return True
        return any(path.startswith(public) for public in PUBLIC_PATHS)

    def _authenticate_operator(self, request: HttpRequest) -> Optional[HttpResponse]:
        raw_key = request.headers.get("X-API-Key") or request.headers.get(
            "Authorization", ""
        ).replace("Bearer ", "")

        if not raw_key:
            return self._unauthorized("Missing API key. Provide X-API-Key header.")

        api_key = (
            ApiKey.objects.select_related("operator")
            .filter(key_hash=ApiKey.hash_key(raw_key))
            .first()
        )
        if not api_key:
            logger.warning("Invalid API key attempted: %s...", raw_key[:8])
            return self._unauthorized("Invalid API key")

        if not api_key.is_valid():
            logger.warning("Expired or disabled API key attempted: %s...", raw_key[:8])
            return self._unauthorized("API key expired or operator disabled")

        api_key.mark_used()
        request.operator = api_key.operator  # type: ignore
        request.actor = actor_for(api_key.operator)  # type: ignore
        return None

    @staticmethod
    def _unauthorized(message: str) -> JsonResponse:
        return JsonResponse(
            {"error": {"code": "INVALID_API_KEY", "message": message}},
            status=401,
        )


def client_ip(request: HttpRequest) -> Optional[str]:
    """Client address, honouring the first X-Forwarded-For hop."""
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR")
