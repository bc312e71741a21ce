"""
Health check route to verify database connectivity and store contents.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio

from fastapi import APIRouter

from api.responses import HealthResponse
from api.routes.common import get_source
from api.routes.exception import handle_exceptions
from database import connection_test

router = APIRouter(tags=["Health"])


@router.get("/health")
@handle_exceptions
async def health() -> HealthResponse:
    if not await asyncio.to_thread(connection_test):
        return HealthResponse(status="unavailable", table_exists=False, row_count=0, instruments=[])
    status = await asyncio.to_thread(get_source().status)
    return HealthResponse(
        status="ok" if status.healthy else "empty",
        table_exists=status.table_exists,
        row_count=status.row_count,
        instruments=status.instruments,
    )
