"""
Base interface for price series sources.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple

from config import settings
from datasources.exceptions import SeriesNotFound


@dataclass(frozen=True)
class SeriesPoint:
    observed_on: date
    value: Decimal


class SeriesSource(ABC):
    @abstractmethod
    def points(
        self,
        instrument: str,
        parameter: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[SeriesPoint]:
        """Points ascending by date, ``start`` and ``end`` inclusive."""

    def get_series(
        self,
        instrument: str,
        parameter: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Tuple[Decimal, ...]:
        found = self.points(instrument, parameter, start, end)
        if len(found) < settings.min_series_length:
            raise SeriesNotFound(
                f"{instrument}/{parameter} has {len(found)} observation(s) in range, "
                f"need at least {settings.min_series_length}"
            )
        return tuple(p.value for p in found)

