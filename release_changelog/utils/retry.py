"""Retry decorator for GitHub API reads that hit rate limits.

Only rate limit responses are retried. Every other failure is raised to the
caller immediately, and calls that mutate state are never decorated.
"""

import asyncio
import functools
import time
from typing import Any, Awaitable, Callable, TypeVar

import structlog
from githubkit import Response
from githubkit.exception import PrimaryRateLimitExceeded, RequestFailed, SecondaryRateLimitExceeded

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def wait_time_from_headers(response: Response[Any], default: float) -> float:
    """Return how long to wait before retrying, based on the rate limit headers of a response."""
    retry_after = response.headers.get("retry-after")
    if retry_after:
        try:
            return float(retry_after)
        except ValueError:
            logger.warning("Invalid retry-after header value", retry_after=retry_after)

    rate_limit_reset = response.headers.get("x-ratelimit-reset")
    if rate_limit_reset:
        try:
            reset_timestamp = int(rate_limit_reset)
        except ValueError:
            logger.warning("Invalid x-ratelimit-reset header value", rate_limit_reset=rate_limit_reset)
        else:
            current_timestamp = int(time.time())
            if reset_timestamp > current_timestamp:
                return float(reset_timestamp - current_timestamp + 1)

    return default


def is_rate_limit_error(exc: RequestFailed) -> bool:
    """Check whether a failed request was rejected because of a rate limit."""
    if isinstance(exc, (PrimaryRateLimitExceeded, SecondaryRateLimitExceeded)):
        return True
    status_code = exc.response.status_code
    return status_code == 429 or (status_code == 403 and "rate limit" in str(exc).lower())


def retry_on_rate_limit(
    max_retries: int = 5,
    initial_delay: float = 10.0,
    max_delay: float = 300.0,
    exponential_base: float = 2.0,
) -> Callable[[F], F]:
    """Decorator for retrying async GitHub reads when they encounter rate limits.

    The wait honours ``retry_after`` of githubkit's rate limit exceptions, then
    the retry-after and x-ratelimit-reset headers, and otherwise backs off
    exponentially. Waits are capped at ``max_delay``.

    Args:
        max_retries: Maximum number of retry attempts (default: 5)
        initial_delay: Initial delay in seconds between retries (default: 10.0)
        max_delay: Maximum delay in seconds between retries (default: 300.0)
        exponential_base: Base for exponential backoff calculation (default: 2.0)

    Returns:
        Decorated function with retry logic
    """

    def decorator(func: F) -> F:
        if not asyncio.iscoroutinefunction(func):
            raise TypeError(f"Function {func.__name__} decorated with @retry_on_rate_limit must be async.")

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            delay = initial_delay
            for attempt in range(max_retries + 1):
                try:
                    return await func(*args, **kwargs)
                except RequestFailed as exc:
                    if not is_rate_limit_error(exc):
                        raise
                    if attempt == max_retries:
                        logger.error(
                            "Max retries reached for GitHub rate limit error",
                            function=func.__name__,
                            attempt=attempt + 1,
                            status_code=exc.response.status_code,
                        )
                        raise

                    retry_after = getattr(exc, "retry_after", None)
                    if retry_after:
                        wait_time = retry_after.total_seconds()
                    else:
                        wait_time = wait_time_from_headers(exc.response, delay)
                    wait_time = min(wait_time, max_delay)

                    logger.warning(
                        "GitHub rate limit exceeded, retrying",
                        function=func.__name__,
                        attempt=attempt + 1,
                        max_retries=max_retries,
                        wait_time=wait_time,
                        status_code=exc.response.status_code,
                    )
                    await asyncio.sleep(wait_time)
                    delay = min(delay * exponential_base, max_delay)

        return wrapper  # type: ignore

    return decorator
