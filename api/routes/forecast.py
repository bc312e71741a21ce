"""
Forecast routes: magnitude-weighted and asymmetric-trend forecasts over a stored
or caller-supplied price series.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio

from fastapi import APIRouter

from api.requests import ForecastRequest
from api.responses import ForecastResponse, ForecastTriple, Probabilities
from api.routes.common import get_source
from api.routes.exception import handle_exceptions
from services.forecast_service import ForecastReport, forecast_series, run_forecast

router = APIRouter(tags=["Forecast"])


def _to_response(report: ForecastReport) -> ForecastResponse:
    return ForecastResponse(
        instrument=report.instrument,
        parameter=report.parameter,
        observations=report.observations,
        anchor=report.anchor,
        tendency=report.tendency,
        dispersion=report.dispersion,
        bias=int(report.bias),
        probabilities=Probabilities.of(report.probabilities),
        magnitude_weighted=ForecastTriple.of(report.magnitude_weighted),
        asymmetric_trend=ForecastTriple.of(report.asymmetric_trend),
    )


@router.post("/forecast", summary="Three-point forecasts from the difference decomposition of a series")
@handle_exceptions
async def forecast(req: ForecastRequest) -> ForecastResponse:
    options = {
        "bias": req.bias,
        "tendency": req.tendency,
        "dispersion": req.dispersion,
        "anchor": req.anchor,
    }
    if req.values is not None:
        report = await asyncio.to_thread(
            run_forecast, req.values, instrument=req.instrument, parameter=req.parameter, **options
        )
    else:
        report = await asyncio.to_thread(
            forecast_series, get_source(), req.instrument, req.parameter, req.start, req.end, **options
        )
    return _to_response(report)
