"""
Logging configuration.

JSON logs on stdout, one object per line, with the trace and span id
of the active OpenTelemetry span when there is one.
"""
import sys

from opentelemetry import trace
from pythonjsonlogger.json import JsonFormatter

APP_LOGGERS = (
    "core",
    "api",
    "accounts",
    "companies",
    "products",
    "licenses",
    "activations",
    "billing",
    "wallets",
    "registrations",
    "audit",
)


class CustomJsonFormatter(JsonFormatter):
    """JSON formatter that adds trace context."""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        context = trace.get_current_span().get_span_context()
        if context.is_valid:
            log_record["trace_id"] = format(context.trace_id, "032x")
            log_record["span_id"] = format(context.span_id, "016x")


def get_logging_config(environment: str = "development") -> dict:
    """
    Get logging configuration for the application.

    Args:
        environment: Environment name (development, production, test)

    Returns:
        Django logging configuration dictionary
    """
    log_level = "DEBUG" if environment == "development" else "INFO"

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": CustomJsonFormatter,
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s %(pathname)s %(lineno)d",
            },
            "simple": {
                "format": "{levelname} {name} {message}",
                "style": "{",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "simple" if environment == "development" else "json",
                "stream": sys.stdout,
            },
        },
        "root": {
            "handlers": ["console"],
            "level": log_level,
        },
        "loggers": {
            "django": {
                "handlers": ["console"],
                "level": "INFO",
                "propagate": False,
            },
            "django.request": {
                "handlers": ["console"],
                "level": "WARNING",
                "propagate": False,
            },
            "django.db.backends": {
                "handlers": ["console"],
                "level": "WARNING",
                "propagate": False,
            },
            **{
                name: {"handlers": ["console"], "level": log_level, "propagate": False}
                for name in APP_LOGGERS
            },
        },
    }
