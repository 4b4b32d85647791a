"""
Opt-in retry helper.

The API client never retries on its own; callers that want resilience wrap
a call in with_retry.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def with_retry(
    request_fn: Callable[[], Awaitable[T]],
    max_retries: int = 3,
    delay: float = 1.0,
    retry_on: type[Exception] | tuple[type[Exception], ...] = Exception,
) -> T:
    """
    Call request_fn until it succeeds or max_retries attempts are used.

    Waits delay * 2**(attempt - 1) seconds between attempts and re-raises
    the last error.
    """
    if max_retries < 1:
        raise ValueError("max_retries must be at least 1")

    for attempt in range(1, max_retries + 1):
        try:
            return await request_fn()
        except retry_on as e:
            if attempt == max_retries:
                logger.error(
                    f"Giving up after {attempt} attempts: {e}",
                    extra={"attempts": attempt, "error_type": type(e).__name__},
                )
                raise

            backoff_time = delay * (2 ** (attempt - 1))
            logger.warning(
                f"Attempt {attempt} failed, retrying in {backoff_time}s: {e}",
                extra={"attempt": attempt, "error_type": type(e).__name__},
            )
            await asyncio.sleep(backoff_time)

    raise RuntimeError("unreachable")
