"""
Test cases for the engine enums: tendency algorithms, dispersion policies and bias.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest

from engine.enums import Bias, Dispersion, Tendency
from engine.errors import ForecastError, InvalidBiasError


def test_bias_parse():
    assert Bias.parse(-1) is Bias.down
    assert Bias.parse(0) is Bias.neutral
    assert Bias.parse(Bias.up) is Bias.up


def test_bias_parse_rejects_out_of_range():
    with pytest.raises(InvalidBiasError) as exc:
        Bias.parse(5)
    assert isinstance(exc.value, ForecastError)
    assert isinstance(exc.value, ValueError)


def test_tendency_and_dispersion_values():
    assert Tendency("mean_least_difference") is Tendency.mean_least_difference
    assert Dispersion.mean_absolute_deviation.value == "mean_absolute_deviation"
    assert [d.value for d in Dispersion] == ["mean_absolute_deviation", "standard_deviation", "none"]
