"""
Retry helpers for transient database failures.

Deadlocks (MySQL 1213) and lock wait timeouts (1205) are retried with
exponential backoff. Use cases wrap infrastructure faults in InternalError,
so the cause chain is inspected too.
"""

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from sqlalchemy.exc import DBAPIError, OperationalError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# MySQL error codes
MYSQL_DEADLOCK_ERROR = "1213"
MYSQL_LOCK_WAIT_TIMEOUT = "1205"


def is_deadlock_error(error: BaseException | None) -> bool:
    """
    Check if an exception, or anything in its cause chain, is a deadlock.

    Args:
        error: The exception to check

    Returns:
        True if the error is a deadlock that should be retried
    """
    seen: set[int] = set()
    while error is not None and id(error) not in seen:
        seen.add(id(error))
        if isinstance(error, (OperationalError, DBAPIError)):
            error_str = str(error)
            if MYSQL_DEADLOCK_ERROR in error_str or MYSQL_LOCK_WAIT_TIMEOUT in error_str:
                return True
        error = error.__cause__ or error.__context__
    return False


async def retry_on_deadlock(
    func: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    base_delay: float = 0.1,
) -> T:
    """
    Retry a function if it fails due to a database deadlock.

    Uses exponential backoff: base_delay * (2 ** attempt)

    Args:
        func: The async function to execute
        max_attempts: Maximum number of attempts (default: 3)
        base_delay: Base delay in seconds for exponential backoff (default: 0.1)

    Raises:
        The original exception if max attempts exceeded or non-deadlock error

    Example:
        report = await retry_on_deadlock(lambda: sweep.execute())
    """
    for attempt in range(max_attempts):
        try:
            return await func()
        except Exception as e:
            if not is_deadlock_error(e) or attempt == max_attempts - 1:
                if is_deadlock_error(e):
                    logger.error(
                        "Database deadlock persists after max retries",
                        extra={"attempts": max_attempts, "error": str(e)},
                    )
                raise

            delay = base_delay * (2 ** attempt)
            logger.warning(
                "Database deadlock detected, retrying",
                extra={
                    "attempt": attempt + 1,
                    "max_attempts": max_attempts,
                    "retry_delay": delay,
                    "error": str(e),
                },
            )
            await asyncio.sleep(delay)

    raise RuntimeError("Unexpected state in retry_on_deadlock")

