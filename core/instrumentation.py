"""
OpenTelemetry instrumentation setup.

This module configures OpenTelemetry tracing and the Prometheus
metrics endpoint.
"""

import logging
import os

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.django import DjangoInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import Status, StatusCode, format_span_id, format_trace_id
from prometheus_client import start_http_server

logger = logging.getLogger(__name__)

__all__ = [
    "Status",
    "StatusCode",
    "current_trace_ids",
    "get_tracer",
    "setup_opentelemetry",
]

_configured = False


def setup_opentelemetry() -> bool:
    """
    Configure OpenTelemetry instrumentation.

    Sets up:
    - Distributed tracing exported over OTLP
    - Auto-instrumentation for Django
    - The Prometheus scrape endpoint when PROMETHEUS_PORT is set

    Returns:
        True when tracing was configured by this call
    """
    global _configured
    if _configured:
        return False
    if os.environ.get("OTEL_ENABLED", "false").lower() not in ("1", "true", "yes"):
        logger.info("OpenTelemetry disabled (OTEL_ENABLED is not set)")
        return False

    resource = Resource.create(
        {
            "service.name": os.environ.get("OTEL_SERVICE_NAME", "license-backoffice"),
            "service.version": os.environ.get("OTEL_SERVICE_VERSION", "1.0.0"),
            "deployment.environment": os.environ.get("ENVIRONMENT", "development"),
        }
    )

    trace_provider = TracerProvider(resource=resource)
    trace.set_tracer_provider(trace_provider)

    otlp_endpoint = os.environ.get("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4317")
    otlp_exporter = OTLPSpanExporter(
        endpoint=otlp_endpoint,
        insecure=os.environ.get("OTEL_EXPORTER_OTLP_INSECURE", "true").lower() == "true",
    )
    trace_provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    DjangoInstrumentor().instrument()

    prometheus_port = os.environ.get("PROMETHEUS_PORT")
    if prometheus_port:
        try:
            start_http_server(int(prometheus_port), addr="0.0.0.0")
            logger.info("Prometheus metrics server started on 0.0.0.0:%s", prometheus_port)
        except OSError as e:
            logger.warning("Could not start Prometheus metrics server: %s", e)

    _configured = True
    logger.info("OpenTelemetry instrumentation configured (exporter %s)", otlp_endpoint)
    return True


def get_tracer(name: str) -> trace.Tracer:
    """
    Get a tracer instance for manual instrumentation.

    Without a configured provider the API hands out a no-op tracer.

    Args:
        name: Tracer name (usually module name)

    Returns:
        Tracer instance
    """
    return trace.get_tracer(name)


def current_trace_ids():
    """
    Trace and span id of the active span.

    Returns:
        (trace_id, span_id) as hex strings, or (None, None) outside a span
    """
    context = trace.get_current_span().get_span_context()
    if not context.is_valid:
        return None, None
    return format_trace_id(context.trace_id), format_span_id(context.span_id)
