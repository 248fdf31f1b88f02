"""Evaluation of a resolved expression through adapter callables."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from nowish.parser.schema import ParseContext, ResolvedExpression, RoundingDirection

T = TypeVar("T")
TZ = TypeVar("TZ")


def evaluate(
        expr: ResolvedExpression[T, TZ],
        *,
        now: Callable[[ParseContext[TZ]], T],
        direction: RoundingDirection = RoundingDirection.round_down,
        ctx: ParseContext[TZ],
) -> T:
    """Compute the time an expression denotes.

    Order is fixed: read the clock, apply the now-rounding, add the offset, apply the final
    rounding. Both roundings use the same `direction`.
    """

    result = now(ctx)

    if expr.now_rounding is not None:
        result = expr.now_rounding.rounder(direction)(result, ctx)

    if expr.offset is not None:
        result = expr.offset.unit.add(result, expr.offset.amount, ctx)

        if expr.final_rounding is not None:
            result = expr.final_rounding.rounder(direction)(result, ctx)

    return result
