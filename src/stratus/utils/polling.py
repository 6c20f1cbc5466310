"""Bounded polling for provider resources that change state asynchronously."""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Tuple, Type

from stratus.errors import PollTimeoutError


logger = logging.getLogger(__name__)

ErrorTypes = Tuple[Type[BaseException], ...]


async def poll(
    operation: Callable[[], Awaitable[bool]],
    interval: float,
    max_attempts: int,
    recoverable: ErrorTypes = (),
    success_on: ErrorTypes = (),
    description: str = "resource",
) -> None:
    """Run ``operation`` until it returns True.

    Each attempt either returns a bool or raises. Errors listed in
    ``success_on`` end polling successfully, errors listed in
    ``recoverable`` are retried, anything else propagates unchanged.

    Raises:
        PollTimeoutError: After ``max_attempts`` attempts without success.
            ``last_error`` holds the last recoverable error seen, if any.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    last_error: Optional[BaseException] = None

    for attempt in range(1, max_attempts + 1):
        try:
            if await operation():
                logger.debug(f"{description} ready after {attempt} attempt(s)")
                return
        except success_on as e:
            logger.debug(f"{description}: {type(e).__name__} treated as done: {e}")
            return
        except recoverable as e:
            last_error = e
            logger.debug(
                f"{description}: attempt {attempt}/{max_attempts} failed "
                f"with {type(e).__name__}: {e}"
            )

        if attempt < max_attempts:
            await asyncio.sleep(interval)

    message = f"Timed out waiting for {description} after {max_attempts} attempt(s)"
    if last_error is not None:
        message = f"{message}: {last_error}"
        raise PollTimeoutError(message, max_attempts, last_error) from last_error
    raise PollTimeoutError(message, max_attempts)
