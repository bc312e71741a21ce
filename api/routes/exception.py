"""
Centralized exception handling decorator for API route functions.

The :func:`handle_exceptions` decorator wraps an endpoint handler and converts
uncaught exceptions into :class:`fastapi.HTTPException` responses.
HTTPExceptions raised by the handler propagate untouched. Domain errors map to
the status codes in ``_STATUS_BY_ERROR`` (first match wins); anything else
becomes a ``500`` with the exception message as the detail.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import inspect
import logging
from functools import wraps
from typing import Any, Callable, Tuple, Type, TypeVar, cast

from fastapi import HTTPException

from datasources.exceptions import (
    DataSourceUnavailable,
    FeedFormatError,
    InvalidQuery,
    QueryTimeout,
    SeriesNotFound,
)
from engine.errors import ForecastError

log = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

_STATUS_BY_ERROR: Tuple[Tuple[Type[Exception], int], ...] = (
    (SeriesNotFound, 404),
    (ForecastError, 422),
    (FeedFormatError, 422),
    (InvalidQuery, 502),
    (DataSourceUnavailable, 502),
    (QueryTimeout, 504),
)


def to_http_exception(exc: Exception) -> HTTPException:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    log.exception("unhandled error in route: %s", exc)
    return HTTPException(status_code=500, detail=str(exc))


def handle_exceptions(func: F) -> F:
    """Decorator that converts uncaught exceptions to HTTP errors.

    Works with both regular and async functions.
    """

    if inspect.iscoroutinefunction(func):
        @wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                raise
            except Exception as exc:
                raise to_http_exception(exc) from exc

        return cast(F, async_wrapper)

    @wraps(func)
    def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except HTTPException:
            raise
        except Exception as exc:
            raise to_http_exception(exc) from exc

    return cast(F, sync_wrapper)
