"""
Consecutive-period differencing of an ordered decimal series, with the sign partitions
and magnitudes the forecast strategies are built from.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, localcontext
from typing import Sequence, Tuple

from engine.decimals import EXACT, Number, to_decimals
from engine.errors import EmptySeriesError


@dataclass(frozen=True)
class DifferenceSet:
    all: Tuple[Decimal, ...]
    positive: Tuple[Decimal, ...]
    negative: Tuple[Decimal, ...]
    absolute: Tuple[Decimal, ...]

    @property
    def count(self) -> int:
        return len(self.all)


class SequenceDifferencer:
    def __init__(self, values: Sequence[Number], include_zero: bool = True):
        series = to_decimals(values)
        if len(series) < 2:
            raise EmptySeriesError(f"need at least 2 observations to difference, got {len(series)}")
        self._values = series
        self.include_zero = include_zero

    @property
    def values(self) -> Tuple[Decimal, ...]:
        return self._values

    def difference(self) -> Tuple[Decimal, ...]:
        out = []
        with localcontext(EXACT):
            for prev, cur in zip(self._values, self._values[1:]):
                delta = cur - prev
                if delta or self.include_zero:
                    out.append(delta)
        return tuple(out)

    def positive_difference(self) -> Tuple[Decimal, ...]:
        return tuple(d for d in self.difference() if d > 0)

    def negative_difference(self) -> Tuple[Decimal, ...]:
        return tuple(d for d in self.difference() if d < 0)

    def absolute_difference(self) -> Tuple[Decimal, ...]:
        return tuple(d.copy_abs() for d in self.difference())

    def decompose(self) -> DifferenceSet:
        deltas = self.difference()
        return DifferenceSet(
            all=deltas,
            positive=tuple(d for d in deltas if d > 0),
            negative=tuple(d for d in deltas if d < 0),
            absolute=tuple(d.copy_abs() for d in deltas),
        )
