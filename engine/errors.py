"""
Error taxonomy for the forecasting engine.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""


class ForecastError(Exception):
    pass


class EmptySeriesError(ForecastError):
    """Series has fewer observations than a difference needs."""


class NoMovementError(ForecastError):
    """Every consecutive delta is zero, so move probabilities are undefined."""


class InvalidBiasError(ForecastError, ValueError):
    pass


class UndefinedTendencyError(ForecastError):
    """A tendency or dispersion was requested for an empty dataset."""
