"""
Series routes: stored observations by date and range, availability listings, feed
import and SQL export.

Imports read an inline document, the configured feed file or the configured feed
URL; exports always go to the configured export path. Store access runs in a
worker thread.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, Query

from api.requests import ExportRequest, ImportRequest
from api.responses import DayResponse, ExportResponse, ImportResponse, SeriesPointOut, SeriesResponse, ValueResponse
from api.routes.common import get_source
from api.routes.exception import handle_exceptions
from config import settings
from datasources.export import export_sql
from datasources.feed import fetch_feed, import_feed, load_feed_file

router = APIRouter(tags=["Series"])


@router.post("/series/import", summary="Import a daily feed document into the store")
@handle_exceptions
async def import_series(req: ImportRequest) -> ImportResponse:
    document: Optional[Dict[str, Any]] = req.document
    if document is None and settings.feed_path:
        document = await asyncio.to_thread(load_feed_file, settings.feed_path)
    if document is None:
        if not settings.feed_url:
            raise HTTPException(status_code=400, detail="no document given and no feed path or URL configured")
        document = await fetch_feed(settings.feed_url, params=req.params or None)
    summary = await asyncio.to_thread(import_feed, get_source(), document, req.instrument)
    return ImportResponse(**summary.__dict__)


@router.post("/series/export", summary="Write the observation table to the configured SQL dump")
@handle_exceptions
async def export_series(req: ExportRequest) -> ExportResponse:
    summary = await asyncio.to_thread(export_sql, settings.export_path, req.instrument)
    return ExportResponse(path=summary.path, rows=summary.rows)


@router.get("/series/{instrument}/parameters", summary="Parameters stored for an instrument")
@handle_exceptions
async def list_parameters(instrument: str) -> Dict[str, List[str]]:
    names = await asyncio.to_thread(get_source().available_parameters, instrument)
    return {"parameters": names}


@router.get("/series/{instrument}/dates", summary="Dates stored for an instrument")
@handle_exceptions
async def list_dates(instrument: str) -> Dict[str, List[str]]:
    dates = await asyncio.to_thread(get_source().available_dates, instrument)
    return {"dates": [d.isoformat() for d in dates]}


@router.get("/series/{instrument}/day/{observed_on}", summary="Every parameter for one date")
@handle_exceptions
async def day_values(instrument: str, observed_on: date) -> DayResponse:
    values = await asyncio.to_thread(get_source().day, instrument, observed_on)
    if not values:
        raise HTTPException(status_code=404, detail=f"no data for {instrument.upper()} on {observed_on}")
    return DayResponse(instrument=instrument.upper(), observed_on=observed_on, values=values)


@router.get("/series/{instrument}/{parameter}/{observed_on}", summary="One parameter value for one date")
@handle_exceptions
async def value_on(instrument: str, parameter: str, observed_on: date) -> ValueResponse:
    value = await asyncio.to_thread(get_source().value_on, instrument, parameter, observed_on)
    if value is None:
        raise HTTPException(
            status_code=404,
            detail=f"no {parameter.lower()} for {instrument.upper()} on {observed_on}",
        )
    return ValueResponse(instrument=instrument.upper(), parameter=parameter.lower(), observed_on=observed_on, value=value)


@router.get("/series/{instrument}/{parameter}", summary="Parameter values over a date range")
@handle_exceptions
async def series_range(
    instrument: str,
    parameter: str,
    start: Optional[date] = Query(default=None),
    end: Optional[date] = Query(default=None),
) -> SeriesResponse:
    points = await asyncio.to_thread(get_source().points, instrument, parameter, start, end)
    return SeriesResponse(
        instrument=instrument.upper(),
        parameter=parameter.lower(),
        count=len(points),
        points=[SeriesPointOut(observed_on=p.observed_on, value=p.value) for p in points],
    )
