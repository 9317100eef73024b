"""
Error boundary for use cases.

Domain errors pass through untouched. Anything else is logged with the
operation name and re-raised as InternalError, chained to the original so
callers (e.g. the deadlock retry helper) can still inspect the cause.
"""

import logging
from functools import wraps
from typing import Callable, TypeVar

from app.domain.errors import DomainError, InternalError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def error_boundary(operation: str):
    """
    Decorator for async use case entry points.

    Example:
        class CancelBookingUseCase:
            @error_boundary("cancel_booking")
            async def execute(self, ...): ...
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        async def wrapper(*args, **kwargs) -> T:
            try:
                return await func(*args, **kwargs)
            except DomainError:
                raise
            except Exception as exc:
                logger.exception(
                    "Unexpected error in use case",
                    extra={"operation": operation, "error_type": type(exc).__name__},
                )
                raise InternalError(operation) from exc

        return wrapper

    return decorator
