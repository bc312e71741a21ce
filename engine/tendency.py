"""
Central tendency estimators over decimal datasets. An estimator is an immutable strategy
chosen once and always invoked with the dataset it should summarise, so one instance
can serve any number of forecasts.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, localcontext
from typing import Callable, Dict, Iterable, Optional, Tuple

from engine.decimals import EXACT, Number, divide, exact_sum, to_decimal, to_decimals
from engine.enums import Tendency
from engine.errors import UndefinedTendencyError

TendencyFunction = Callable[[Tuple[Decimal, ...]], Number]

_TWO = Decimal(2)


def mean(values: Tuple[Decimal, ...]) -> Decimal:
    return divide(exact_sum(values), Decimal(len(values)))


def median(values: Tuple[Decimal, ...]) -> Decimal:
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2:
        return ordered[mid]
    return divide(exact_sum(ordered[mid - 1 : mid + 1]), _TWO)


def midrange(values: Tuple[Decimal, ...]) -> Decimal:
    return divide(exact_sum((min(values), max(values))), _TWO)


def mean_least_difference(values: Tuple[Decimal, ...]) -> Decimal:
    # observed value closest to the mean; ties go to the smaller value
    centre = mean(values)
    with localcontext(EXACT):
        return min(sorted(values), key=lambda v: ((v - centre).copy_abs(), v))


_ALGORITHMS: Dict[Tendency, Callable[[Tuple[Decimal, ...]], Decimal]] = {
    Tendency.mean: mean,
    Tendency.median: median,
    Tendency.midrange: midrange,
    Tendency.mean_least_difference: mean_least_difference,
}


@dataclass(frozen=True)
class TendencyEstimator:
    method: Tendency = Tendency.mean_least_difference
    custom: Optional[TendencyFunction] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.method, Tendency):
            object.__setattr__(self, "method", Tendency(self.method))

    @classmethod
    def from_callable(cls, func: TendencyFunction) -> TendencyEstimator:
        """Wrap an arbitrary ``func(values) -> number``.

        The callable receives a non-empty tuple of decimals and must be
        deterministic and independent of the tuple's order.
        """
        return cls(custom=func)

    @property
    def name(self) -> str:
        if self.custom is not None:
            return getattr(self.custom, "__name__", "custom")
        return self.method.value

    def tendency(self, data: Iterable[Number]) -> Decimal:
        values = to_decimals(data)
        if not values:
            raise UndefinedTendencyError(f"{self.name} tendency of an empty dataset is undefined")
        if self.custom is not None:
            return to_decimal(self.custom(values))
        return _ALGORITHMS[self.method](values)

    __call__ = tendency
