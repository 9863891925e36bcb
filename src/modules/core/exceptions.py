"""Cross-module error plumbing.

- ``StorageFailure``: the persistence layer is unavailable or an operation
  faulted.  Repositories raise it in place of raw ``DatabaseError``.
- ``storage_errors``: decorator that performs that translation.
- ``api_exception_handler``: DRF exception handler that renders storage
  faults with a generic message, never leaking driver detail.
"""

from __future__ import annotations

import functools
from typing import Any, Callable, Optional, TypeVar

import structlog
from django.db import DatabaseError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler, set_rollback

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

STORAGE_FAILURE_MESSAGE = "The service is temporarily unavailable. Please try again."


class StorageFailure(Exception):
    """The underlying store is unavailable or a storage operation faulted."""


def storage_errors(func: F) -> F:
    """Re-raise ``DatabaseError`` from *func* as ``StorageFailure``."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except DatabaseError as exc:
            logger.error(
                "storage.operation_failed",
                operation=func.__qualname__,
                error=str(exc),
            )
            raise StorageFailure(f"{func.__qualname__} failed.") from exc

    return wrapper  # type: ignore[return-value]


def api_exception_handler(exc: Exception, context: dict) -> Optional[Response]:
    """Extend DRF's default handler with ``StorageFailure`` rendering."""
    if isinstance(exc, (StorageFailure, DatabaseError)):
        view = context.get("view")
        logger.error(
            "api.storage_failure",
            view=type(view).__name__ if view is not None else None,
        )
        set_rollback()
        return Response(
            {"detail": STORAGE_FAILURE_MESSAGE},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    return exception_handler(exc, context)
