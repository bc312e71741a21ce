"""
Retry decorator for feed fetches.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from functools import wraps
from typing import Any, Awaitable, Callable, Optional, Tuple, Type, TypeVar, cast

from config import settings
from datasources.exceptions import DataSourceUnavailable, QueryTimeout

log = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])

TRANSIENT: Tuple[Type[Exception], ...] = (DataSourceUnavailable, QueryTimeout)


def retry(
    *,
    attempts: Optional[int] = None,
    delay: Optional[float] = None,
    backoff: Optional[float] = None,
    exceptions: Tuple[Type[Exception], ...] = TRANSIENT,
) -> Callable[[F], F]:
    """Retry an async callable on ``exceptions`` with exponential backoff.

    Unset arguments fall back to the ``feed_retry_*`` settings at call time.
    """

    def decorator(func: F) -> F:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"retry expects a coroutine function, got {func!r}")

        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            limit = attempts if attempts is not None else settings.feed_retry_attempts
            wait = delay if delay is not None else settings.feed_retry_delay
            factor = backoff if backoff is not None else settings.feed_retry_backoff
            attempt = 0
            while True:
                try:
                    return await func(*args, **kwargs)
                except exceptions as exc:
                    attempt += 1
                    if attempt >= limit:
                        log.error("%s failed after %d attempt(s): %s", func.__name__, attempt, exc)
                        raise
                    log.warning("%s attempt %d/%d failed: %s; retrying in %.2fs", func.__name__, attempt, limit, exc, wait)
                    await asyncio.sleep(wait)
                    wait *= factor

        return cast(F, wrapper)

    return decorator
