"""
Test cases for the probability-weighted expectation.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from decimal import Decimal
from fractions import Fraction

import pytest

from engine.expectation import expectation


def test_expectation_weights_outcomes():
    assert expectation(Decimal("1.1"), Decimal("2.2"), Decimal("0.3"), Decimal("0.7")) == Decimal("1.87")


@pytest.mark.parametrize(
    "a,b,p",
    [
        ("-0.45", "0.45", "0.2"),
        ("123456789.123456789", "-987654321.987654321", "0.3333333333"),
        ("0", "5", "1"),
        ("-7.25", "3.5", "0"),
    ],
)
def test_expectation_is_exact(a, b, p):
    a, b, p = Decimal(a), Decimal(b), Decimal(p)
    q = Decimal(1) - p
    result = expectation(a, b, p, q)
    assert Fraction(result) == Fraction(a) * Fraction(p) + Fraction(b) * Fraction(q)


def test_expectation_keeps_digits_beyond_default_context():
    long_value = Decimal("1." + "1" * 40)
    assert expectation(long_value, long_value, Decimal("0.5"), Decimal("0.5")) == long_value


def test_expectation_accepts_plain_numbers():
    assert expectation(-1, 1, "0.25", "0.75") == Decimal("0.5")
