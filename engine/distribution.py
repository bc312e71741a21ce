"""
Bounded distributions: the central tendency of a dataset together with lower and upper
bounds one dispersion measure away from it.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, localcontext
from typing import Iterable, Tuple

from engine.decimals import EXACT, Number, divide, exact_sum, square_root, to_decimals
from engine.enums import Dispersion
from engine.errors import UndefinedTendencyError
from engine.tendency import TendencyEstimator, mean


@dataclass(frozen=True)
class TendencyBounds:
    lower: Decimal
    central: Decimal
    upper: Decimal


def mean_absolute_deviation(values: Tuple[Decimal, ...], centre: Decimal) -> Decimal:
    with localcontext(EXACT):
        deviations = [(v - centre).copy_abs() for v in values]
    return divide(exact_sum(deviations), Decimal(len(values)))


def standard_deviation(values: Tuple[Decimal, ...]) -> Decimal:
    centre = mean(values)
    with localcontext(EXACT):
        squares = [(v - centre) * (v - centre) for v in values]
    return square_root(divide(exact_sum(squares), Decimal(len(values))))


class BoundedDistribution:
    def __init__(
        self,
        estimator: TendencyEstimator,
        data: Iterable[Number],
        dispersion: Dispersion | str = Dispersion.mean_absolute_deviation,
    ):
        self.estimator = estimator
        self.data = to_decimals(data)
        self.dispersion = Dispersion(dispersion)

    def _require_data(self) -> None:
        if not self.data:
            raise UndefinedTendencyError("bounded distribution of an empty dataset is undefined")

    def distribution_tendency(self) -> Decimal:
        self._require_data()
        return self.estimator.tendency(self.data)

    def spread(self) -> Decimal:
        self._require_data()
        if self.dispersion is Dispersion.standard_deviation:
            return standard_deviation(self.data)
        if self.dispersion is Dispersion.none:
            return Decimal(0)
        return mean_absolute_deviation(self.data, self.distribution_tendency())

    def lower_bound_tendency(self) -> Decimal:
        central = self.distribution_tendency()
        with localcontext(EXACT):
            return central - self.spread()

    def upper_bound_tendency(self) -> Decimal:
        central = self.distribution_tendency()
        with localcontext(EXACT):
            return central + self.spread()

    def bounds(self) -> TendencyBounds:
        central = self.distribution_tendency()
        spread = self.spread()
        with localcontext(EXACT):
            return TendencyBounds(lower=central - spread, central=central, upper=central + spread)
