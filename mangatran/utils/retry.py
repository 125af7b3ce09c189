"""Fixed-count retry for async operations."""

import logging
from typing import Awaitable, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def always_retry(error: BaseException) -> bool:
    """Retry predicate that treats every failure as retryable."""
    return True


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    attempts: int = 2,
    should_retry: Callable[[BaseException], bool] = always_retry,
) -> T:
    """
    Await ``operation()`` up to ``attempts`` times.

    There is no backoff between attempts. The outcome of the last attempt is
    returned, or its exception re-raised unchanged. Cancellation of the caller
    (asyncio.CancelledError) is never retried.

    Args:
        operation: Zero-argument factory returning a fresh awaitable per attempt
        attempts: Total number of calls allowed (2 = one retry)
        should_retry: Decides whether a failure earns another attempt

    Returns:
        Result of the first successful attempt
    """
    if attempts < 1:
        raise ValueError(f"attempts must be at least 1, got {attempts}")

    for attempt in range(1, attempts):
        try:
            return await operation()
        except Exception as e:
            if not should_retry(e):
                raise
            logger.debug(f"Attempt {attempt}/{attempts} failed ({type(e).__name__}: {e}), retrying")

    return await operation()
