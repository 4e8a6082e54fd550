"""
Helpers shared by the back-office API views.
"""
from rest_framework import serializers
from rest_framework.request import Request

from core.domain.exceptions import InvalidAPIKeyError
from core.domain.value_objects import Actor
from core.middleware.auth import client_ip  # noqa: F401


def actor_from(request: Request) -> Actor:
    """
    Acting operator resolved by the authentication middleware.

    Raises:
        InvalidAPIKeyError: If the request was not authenticated
    """
    actor = getattr(request, "actor", None)
    if actor is None:
        raise InvalidAPIKeyError("Authentication required")
    return actor


class ErrorSerializer(serializers.Serializer):
    """Body of every error response."""

    class ErrorDetailSerializer(serializers.Serializer):
        code = serializers.CharField()
        message = serializers.CharField()

    error = ErrorDetailSerializer()


class MoneyField(serializers.DecimalField):
    """Two-digit decimal amount, non-negative unless stated otherwise."""

    def __init__(self, **kwargs):
        kwargs.setdefault("max_digits", 12)
        kwargs.setdefault("decimal_places", 2)
        kwargs.setdefault("min_value", 0)
        super().__init__(**kwargs)
