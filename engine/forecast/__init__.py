"""
Forecasting strategies built on the difference decomposition of a price series: a
magnitude-weighted forecast and an asymmetric-trend forecast, each reported as a
lower, central and upper point.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.forecast.base import ForecastEngine, ForecastResult, ProbabilityPair, biased

__all__ = ["ForecastEngine", "ForecastResult", "ProbabilityPair", "biased"]
