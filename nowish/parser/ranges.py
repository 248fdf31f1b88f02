"""Start/end range parsing on top of a single parser."""

from __future__ import annotations

from typing import TypeVar

from nowish.parser.factory import Parser
from nowish.parser.schema import RoundingDirection

T = TypeVar("T")
TZ = TypeVar("TZ")


def parse_range(
        parser: Parser[T, TZ],
        start: str,
        end: str,
        *,
        timezone: TZ | None = None,
) -> tuple[T, T]:
    """Parse a closed `[start, end]` range.

    The start is rounded down and the end rounded up, so `("now-7d/d", "now/d")` covers the whole
    first and last day.

    Raises:
        ParseError: If either expression is invalid.
        ValueError: If the start falls after the end.
    """

    start_time = parser(start, RoundingDirection.round_down, timezone=timezone)
    end_time = parser(end, RoundingDirection.round_up, timezone=timezone)
    if start_time > end_time:  # type: ignore[operator]
        raise ValueError(f"range start {start!r} is after range end {end!r}")
    return start_time, end_time
