"""
Enumerations for tendency algorithms, dispersion policies and probability bias.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from enum import Enum, IntEnum

from engine.errors import InvalidBiasError


class Tendency(str, Enum):
    mean = "mean"
    median = "median"
    midrange = "midrange"
    mean_least_difference = "mean_least_difference"


class Dispersion(str, Enum):
    mean_absolute_deviation = "mean_absolute_deviation"
    standard_deviation = "standard_deviation"
    none = "none"


class Bias(IntEnum):
    down = -1
    neutral = 0
    up = 1

    @classmethod
    def parse(cls, value: object) -> Bias:
        if isinstance(value, bool):
            raise InvalidBiasError(f"bias must be one of -1, 0, 1, got {value!r}")
        try:
            return cls(value)
        except ValueError as exc:
            raise InvalidBiasError(f"bias must be one of -1, 0, 1, got {value!r}") from exc
