"""
Metrics middleware for Prometheus.

Records HTTP request metrics for monitoring.
"""

import re
import time
from typing import Callable

from django.http import HttpRequest, HttpResponse

from core.metrics import errors_total, http_request_duration_seconds, http_requests_total

UUID_SEGMENT = re.compile(r"/[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}")
NUMERIC_SEGMENT = re.compile(r"/\d+")


def normalize_endpoint(path: str) -> str:
    """Collapse ids in a path so that metric labels stay bounded."""
    return NUMERIC_SEGMENT.sub("/{id}", UUID_SEGMENT.sub("/{id}", path))


class MetricsMiddleware:
    """
    Middleware to record HTTP metrics for Prometheus.

    Records:
    - Request count by method, endpoint, status
    - Request duration histogram
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Process request and record metrics."""
        start_time = time.time()
        endpoint = normalize_endpoint(request.path)

        try:
            response = self.get_response(request)
        except Exception as e:
            self._record(request.method, endpoint, 500, time.time() - start_time)
            errors_total.labels(error_type=type(e).__name__, endpoint=endpoint).inc()
            raise

        self._record(request.method, endpoint, response.status_code, time.time() - start_time)
        return response

    @staticmethod
    def _record(method: str, endpoint: str, status_code: int, duration: float) -> None:
        http_requests_total.labels(method=method, endpoint=endpoint, status_code=status_code).inc()
        http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(duration)
