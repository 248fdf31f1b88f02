"""Semantic resolution of raw tokens against a parser configuration."""

from __future__ import annotations

from collections.abc import Collection, Mapping
from typing import Any

from nowish.parser.errors import ParseError
from nowish.parser.schema import (
    ErrorKind,
    ErrorPosition,
    RawTokens,
    ResolvedExpression,
    ResolvedOffset,
    UnitDefinition,
)


def _lookup(
        units: Mapping[str, UnitDefinition[Any, Any]],
        name: str,
        position: ErrorPosition,
) -> UnitDefinition[Any, Any]:
    unit = units.get(name)
    if unit is None:
        raise ParseError(ErrorKind.invalid_value, name, position)
    return unit


def resolve_expression(
        tokens: RawTokens,
        *,
        now_aliases: Collection[str],
        units: Mapping[str, UnitDefinition[Any, Any]],
) -> ResolvedExpression[Any, Any]:
    """Validate tokens and replace unit names with their definitions.

    Slots are checked left to right, so the error always points at the leftmost unknown token.

    Raises:
        ParseError: `invalid-value` with the position of the first unrecognized token.
    """

    if tokens.now not in now_aliases:
        raise ParseError(ErrorKind.invalid_value, tokens.now, ErrorPosition.now_keyword)

    now_rounding = None
    if tokens.now_rounding is not None:
        now_rounding = _lookup(units, tokens.now_rounding, ErrorPosition.now_rounding)

    if tokens.offset is None:
        return ResolvedExpression(now_rounding=now_rounding)

    offset = ResolvedOffset(
        amount=tokens.offset.amount,
        unit=_lookup(units, tokens.offset.unit, ErrorPosition.offset),
    )

    final_rounding = None
    if tokens.final_rounding is not None:
        final_rounding = _lookup(units, tokens.final_rounding, ErrorPosition.final_rounding)

    return ResolvedExpression(now_rounding=now_rounding, offset=offset, final_rounding=final_rounding)
