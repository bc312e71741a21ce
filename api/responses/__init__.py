"""
Response models for API endpoints.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal, localcontext
from typing import Annotated, Dict, List, Optional

from pydantic import BaseModel, PlainSerializer

from engine.decimals import EXACT
from engine.enums import Dispersion
from engine.forecast import ForecastResult, ProbabilityPair


def _plain(value: Decimal) -> str:
    # trailing zeros dropped, never exponent notation
    with localcontext(EXACT):
        return f"{value.normalize():f}"


# decimals travel as strings so no precision is lost to JSON floats
PlainDecimal = Annotated[Decimal, PlainSerializer(_plain, return_type=str)]


class ForecastTriple(BaseModel):

    lower: PlainDecimal
    central: PlainDecimal
    upper: PlainDecimal

    @classmethod
    def of(cls, result: ForecastResult) -> ForecastTriple:
        return cls(lower=result.lower, central=result.central, upper=result.upper)


class Probabilities(BaseModel):

    negative: PlainDecimal
    positive: PlainDecimal

    @classmethod
    def of(cls, pair: ProbabilityPair) -> Probabilities:
        return cls(negative=pair.negative, positive=pair.positive)


class ForecastResponse(BaseModel):

    instrument: Optional[str] = None
    parameter: Optional[str] = None
    observations: int
    anchor: PlainDecimal
    tendency: str
    dispersion: Dispersion
    bias: int
    probabilities: Probabilities
    magnitude_weighted: ForecastTriple
    asymmetric_trend: ForecastTriple


class SeriesPointOut(BaseModel):

    observed_on: date
    value: PlainDecimal


class SeriesResponse(BaseModel):

    instrument: str
    parameter: str
    count: int
    points: List[SeriesPointOut]


class ValueResponse(BaseModel):

    instrument: str
    parameter: str
    observed_on: date
    value: PlainDecimal


class DayResponse(BaseModel):

    instrument: str
    observed_on: date
    values: Dict[str, PlainDecimal]


class ImportResponse(BaseModel):

    instrument: str
    dates: int
    inserted: int
    updated: int
    skipped: int


class ExportResponse(BaseModel):

    path: str
    rows: int


class HealthResponse(BaseModel):

    status: str
    table_exists: bool
    row_count: int
    instruments: List[str]
