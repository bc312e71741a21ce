"""
Probability-weighted expectation of a down-move and an up-move outcome.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from decimal import Decimal, localcontext

from engine.decimals import EXACT, Number, to_decimal


def expectation(
    negative_outcome: Number,
    positive_outcome: Number,
    negative_probability: Number,
    positive_probability: Number,
) -> Decimal:
    neg, pos = to_decimal(negative_outcome), to_decimal(positive_outcome)
    p_neg, p_pos = to_decimal(negative_probability), to_decimal(positive_probability)
    with localcontext(EXACT):
        return neg * p_neg + pos * p_pos
