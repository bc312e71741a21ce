"""
Entry point for the TrendCast forecasting API server.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI
from fastapi.responses import JSONResponse

from api.routes import router
from api.routes.common import get_source, reset_source
from config import settings
from database import dispose_database, init_database, init_db

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    stream=sys.stdout,
)
log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    init_database(settings.database_url)
    await asyncio.to_thread(init_db)
    status = await asyncio.to_thread(get_source().status)
    if status.healthy:
        log.info("store ready: %d observation(s) for %s", status.row_count, ", ".join(status.instruments))
    else:
        log.warning("store is empty; import a feed via POST /api/v1/series/import")
    try:
        yield
    finally:
        reset_source()
        dispose_database()


app = FastAPI(
    title="TrendCast Forecast Engine",
    description="Short-horizon probabilistic price forecasts from the difference decomposition of a single series.",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(router, prefix="/api/v1")


@app.get("/api/v1/ready", tags=["health"], summary="Store readiness probe")
async def ready() -> JSONResponse:
    try:
        status = await asyncio.to_thread(get_source().status)
    except RuntimeError as exc:
        return JSONResponse(status_code=503, content={"ready": False, "detail": str(exc)})
    code = 200 if status.healthy else 503
    return JSONResponse(
        status_code=code,
        content={"ready": status.healthy, "rows": status.row_count, "instruments": status.instruments},
    )


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level="info",
        access_log=True,
    )
