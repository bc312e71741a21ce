"""
Decimal helpers shared by the forecasting engine: conversion of raw inputs, exact
arithmetic contexts and the rounded division used for move probabilities.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, ROUND_HALF_UP, Context, Decimal, InvalidOperation, localcontext
from typing import Iterable, Tuple, Union

from config import settings

Number = Union[Decimal, int, float, str]

# unbounded precision: add, subtract and multiply never round
EXACT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN)


def to_decimal(value: Number) -> Decimal:
    """Convert ``value`` to a :class:`Decimal` without binary float artefacts.

    Floats go through ``str`` so ``0.1`` becomes ``Decimal("0.1")`` rather than
    its exact binary expansion.
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise TypeError("booleans are not numeric observations")
    elif isinstance(value, float):
        result = Decimal(repr(value))
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise ValueError(f"not a decimal value: {value!r}") from exc
    if not result.is_finite():
        raise ValueError(f"not a finite decimal value: {value!r}")
    return result


def to_decimals(values: Iterable[Number]) -> Tuple[Decimal, ...]:
    return tuple(to_decimal(v) for v in values)


def exact_sum(values: Iterable[Decimal]) -> Decimal:
    total = Decimal(0)
    with localcontext(EXACT):
        for v in values:
            total += v
    return total


def divide(numerator: Decimal, denominator: Decimal) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = settings.decimal_precision
        return numerator / denominator


def divide_half_up(numerator: Decimal, denominator: Decimal, places: int | None = None) -> Decimal:
    if places is None:
        places = settings.probability_places
    quantum = Decimal(1).scaleb(-places)
    with localcontext() as ctx:
        ctx.prec = settings.decimal_precision + places
        ctx.rounding = ROUND_HALF_UP
        return (numerator / denominator).quantize(quantum, rounding=ROUND_HALF_UP)


def square_root(value: Decimal) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = settings.decimal_precision
        return value.sqrt()
