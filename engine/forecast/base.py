"""
Three-point price forecasts from a single series: move probabilities come from the
share of down and up deltas, move sizes from bounded distributions of those deltas,
and each forecast point is the anchor plus the probability-weighted move.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, localcontext
from typing import Iterator, Sequence, Tuple

from engine.decimals import EXACT, Number, divide_half_up, to_decimal, to_decimals
from engine.difference import DifferenceSet, SequenceDifferencer
from engine.distribution import BoundedDistribution, TendencyBounds
from engine.enums import Bias, Dispersion
from engine.errors import EmptySeriesError, NoMovementError
from engine.expectation import expectation
from engine.tendency import TendencyEstimator

_ZERO_BOUNDS = TendencyBounds(lower=Decimal(0), central=Decimal(0), upper=Decimal(0))


@dataclass(frozen=True)
class ProbabilityPair:
    negative: Decimal
    positive: Decimal

    def swapped(self) -> ProbabilityPair:
        return ProbabilityPair(negative=self.positive, positive=self.negative)


@dataclass(frozen=True)
class ForecastResult:
    lower: Decimal
    central: Decimal
    upper: Decimal

    def __iter__(self) -> Iterator[Decimal]:
        return iter((self.lower, self.central, self.upper))

    def as_tuple(self) -> Tuple[Decimal, Decimal, Decimal]:
        return (self.lower, self.central, self.upper)


def biased(baseline: ProbabilityPair, bias: Bias) -> ProbabilityPair:
    """Effective pair for ``bias``, always derived from the unbiased ``baseline``.

    ``Bias.down`` makes the down-move side the more likely one, ``Bias.up`` the
    up-move side; a tie counts as favouring up.
    """
    favours_down = baseline.negative > baseline.positive
    if (bias is Bias.down and not favours_down) or (bias is Bias.up and favours_down):
        return baseline.swapped()
    return baseline


class ForecastEngine:
    def __init__(
        self,
        estimator: TendencyEstimator,
        series: Sequence[Number],
        dispersion: Dispersion | str = Dispersion.mean_absolute_deviation,
    ):
        values = to_decimals(series)
        if len(values) < 2:
            raise EmptySeriesError(f"forecast needs at least 2 observations, got {len(values)}")

        self._estimator = estimator
        self._dispersion = Dispersion(dispersion)
        self._series = values
        self._anchor = values[-1]

        differencer = SequenceDifferencer(values)
        differencer.include_zero = False
        self._differences = differencer.decompose()
        if not self._differences.count:
            raise NoMovementError("series has no non-zero consecutive change")

        total = Decimal(self._differences.count)
        self._baseline = ProbabilityPair(
            negative=divide_half_up(Decimal(len(self._differences.negative)), total),
            positive=divide_half_up(Decimal(len(self._differences.positive)), total),
        )
        self._bias = Bias.neutral
        self._probabilities = self._baseline

    @property
    def estimator(self) -> TendencyEstimator:
        return self._estimator

    @property
    def series(self) -> Tuple[Decimal, ...]:
        return self._series

    @property
    def anchor(self) -> Decimal:
        return self._anchor

    def set_anchor(self, value: Number) -> None:
        self._anchor = to_decimal(value)

    @property
    def differences(self) -> DifferenceSet:
        return self._differences

    @property
    def bias(self) -> Bias:
        return self._bias

    @property
    def baseline_probabilities(self) -> ProbabilityPair:
        return self._baseline

    @property
    def probabilities(self) -> ProbabilityPair:
        return self._probabilities

    def set_probability_bias(self, bias: Bias | int) -> None:
        self._bias = Bias.parse(bias)
        self._probabilities = biased(self._baseline, self._bias)

    def _bounds(self, data: Tuple[Decimal, ...]) -> TendencyBounds:
        return BoundedDistribution(self._estimator, data, self._dispersion).bounds()

    def _project(self, negative: TendencyBounds, positive: TendencyBounds) -> ForecastResult:
        p = self._probabilities

        def point(neg: Decimal, pos: Decimal) -> Decimal:
            move = expectation(neg, pos, p.negative, p.positive)
            with localcontext(EXACT):
                return self._anchor + move

        return ForecastResult(
            lower=point(negative.lower, positive.lower),
            central=point(negative.central, positive.central),
            upper=point(negative.upper, positive.upper),
        )

    def magnitude_weighted_forecast(self) -> ForecastResult:
        magnitude = self._bounds(self._differences.absolute)
        mirrored = TendencyBounds(
            lower=magnitude.lower.copy_negate(),
            central=magnitude.central.copy_negate(),
            upper=magnitude.upper.copy_negate(),
        )
        return self._project(mirrored, magnitude)

    def asymmetric_trend_forecast(self) -> ForecastResult:
        positive = self._bounds(self._differences.positive) if self._differences.positive else _ZERO_BOUNDS
        negative = self._bounds(self._differences.negative) if self._differences.negative else _ZERO_BOUNDS
        return self._project(negative, positive)
