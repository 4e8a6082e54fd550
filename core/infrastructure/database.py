"""
Database utilities and transaction management.
"""

import functools
from typing import Callable, TypeVar

from asgiref.sync import sync_to_async
from django.db import transaction

R = TypeVar("R")


def transactional(func: Callable[..., R]):
    """
    Turn a synchronous repository method into an awaitable that runs
    inside ``transaction.atomic()`` on the ORM thread.

    Everything the method does, including callbacks it invokes, commits
    or rolls back as one unit.

    Usage:
        class DjangoWalletRepository(WalletRepository):
            @transactional
            def mutate(self, ...):
                ...
    """

    @functools.wraps(func)
    def atomic_call(*args, **kwargs) -> R:
        with transaction.atomic():
            return func(*args, **kwargs)

    return sync_to_async(atomic_call)
