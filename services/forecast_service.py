from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from config import settings
from datasources.base import SeriesSource
from engine.decimals import Number
from engine.enums import Bias, Dispersion, Tendency
from engine.forecast import ForecastEngine, ForecastResult, ProbabilityPair
from engine.tendency import TendencyEstimator

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ForecastReport:
    instrument: Optional[str]
    parameter: Optional[str]
    observations: int
    anchor: Decimal
    tendency: str
    dispersion: Dispersion
    bias: Bias
    probabilities: ProbabilityPair
    magnitude_weighted: ForecastResult
    asymmetric_trend: ForecastResult


def build_engine(
    values: Sequence[Number],
    tendency: Optional[Tendency | str] = None,
    dispersion: Optional[Dispersion | str] = None,
) -> ForecastEngine:
    estimator = TendencyEstimator(Tendency(tendency or settings.default_tendency))
    return ForecastEngine(estimator, values, dispersion or settings.default_dispersion)


def run_forecast(
    values: Sequence[Number],
    bias: Bias | int = Bias.neutral,
    tendency: Optional[Tendency | str] = None,
    dispersion: Optional[Dispersion | str] = None,
    anchor: Optional[Number] = None,
    instrument: Optional[str] = None,
    parameter: Optional[str] = None,
) -> ForecastReport:
    engine = build_engine(values, tendency, dispersion)
    engine.set_probability_bias(bias)
    if anchor is not None:
        engine.set_anchor(anchor)

    report = ForecastReport(
        instrument=instrument,
        parameter=parameter,
        observations=len(engine.series),
        anchor=engine.anchor,
        tendency=engine.estimator.name,
        dispersion=Dispersion(dispersion or settings.default_dispersion),
        bias=engine.bias,
        probabilities=engine.probabilities,
        magnitude_weighted=engine.magnitude_weighted_forecast(),
        asymmetric_trend=engine.asymmetric_trend_forecast(),
    )
    log.info(
        "forecast %s/%s over %d observations (tendency=%s, bias=%d): magnitude=%s asymmetric=%s",
        instrument or "-", parameter or "-", report.observations, report.tendency, int(report.bias),
        report.magnitude_weighted.central, report.asymmetric_trend.central,
    )
    return report


def forecast_series(
    source: SeriesSource,
    instrument: Optional[str] = None,
    parameter: Optional[str] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
    **options,
) -> ForecastReport:
    instrument = (instrument or settings.default_instrument).upper()
    parameter = (parameter or settings.default_parameter).lower()
    values = source.get_series(instrument, parameter, start, end)
    return run_forecast(values, instrument=instrument, parameter=parameter, **options)
