import asyncio
import functools
import logging
from collections.abc import Awaitable, Callable

import httpx

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 3
BASE_DELAY = 3.0
RETRYABLE_STATUS = frozenset({429, 503})

RequestFunc = Callable[..., Awaitable[httpx.Response]]


def retry_on_status(
    attempts: int = MAX_ATTEMPTS,
    base_delay: float = BASE_DELAY,
    statuses: frozenset[int] = RETRYABLE_STATUS,
) -> Callable[[RequestFunc], RequestFunc]:
    """Re-issue a request while it answers with a rate-limit status.

    Waits ``base_delay * 2**attempt`` seconds between attempts. The last
    response is returned as-is once attempts run out, so the caller decides
    what a failure means.
    """

    def decorator(func: RequestFunc) -> RequestFunc:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> httpx.Response:
            for attempt in range(attempts):
                response = await func(*args, **kwargs)
                if response.status_code not in statuses or attempt == attempts - 1:
                    return response
                wait = base_delay * 2**attempt
                logger.warning(
                    "Rate limited (%d), attempt %d/%d, retrying in %.0fs",
                    response.status_code, attempt + 1, attempts, wait,
                )
                await asyncio.sleep(wait)
            raise RuntimeError("retry_on_status requires at least one attempt")

        return wrapper

    return decorator
