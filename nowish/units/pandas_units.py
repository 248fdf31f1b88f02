"""Unit table for timezone-aware `pandas.Timestamp` values.

Same unit codes and calendar rules as `nowish.units.datetime_units`, at nanosecond resolution:
round-up ends one nanosecond before the next period starts. Wall-clock results that fall into a
DST gap are shifted forward to the first valid instant; ambiguous wall times keep the occurrence
of the value they were derived from.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import tzinfo

import pandas as pd

from nowish.parser.factory import ParserConfig, unit_table
from nowish.parser.schema import ParseContext, UnitDefinition

Timezone = str | tzinfo
Unit = UnitDefinition[pd.Timestamp, Timezone]

NOW_ALIASES: tuple[str, ...] = ("now",)

_TICK = pd.Timedelta(1, unit="ns")


def now(ctx: ParseContext[Timezone]) -> pd.Timestamp:
    """Current time in the context timezone."""

    return pd.Timestamp.now(tz=ctx.timezone)


def _on_wall_clock(value: pd.Timestamp, fn: Callable[[pd.Timestamp], pd.Timestamp]) -> pd.Timestamp:
    """Apply `fn` to the naive wall time of `value` and localize the result back."""

    if value.tz is None:
        return fn(value)

    wall = fn(value.tz_localize(None))
    # An ambiguous wall time keeps the occurrence (DST or standard) of the input.
    return wall.tz_localize(value.tz, ambiguous=bool(value.dst()), nonexistent="shift_forward")


def _end_before(boundary: pd.Timestamp) -> pd.Timestamp:
    return boundary - _TICK


def _fixed_unit(name: str, freq: str, step: pd.Timedelta) -> Unit:
    """Sub-day unit: periods are `freq` buckets of the wall clock, added as elapsed time."""

    def round_down(value: pd.Timestamp, ctx: ParseContext[Timezone]) -> pd.Timestamp:
        return _on_wall_clock(value, lambda wall: wall.floor(freq))

    def round_up(value: pd.Timestamp, ctx: ParseContext[Timezone]) -> pd.Timestamp:
        return _end_before(round_down(value, ctx) + step)

    return UnitDefinition(
        name=name,
        add=lambda value, amount, ctx: value + step * amount,
        round_up=round_up,
        round_down=round_down,
    )


def _calendar_add(offset: str) -> Callable[[pd.Timestamp, int, ParseContext[Timezone]], pd.Timestamp]:
    def add(value: pd.Timestamp, amount: int, ctx: ParseContext[Timezone]) -> pd.Timestamp:
        return _on_wall_clock(value, lambda wall: wall + pd.DateOffset(**{offset: amount}))

    return add


def _period_unit(
        name: str,
        offset: str,
        start: Callable[[pd.Timestamp], pd.Timestamp],
        length: pd.DateOffset,
) -> Unit:
    """Calendar unit: `start` maps a naive wall time to the first midnight of its period."""

    def round_down(value: pd.Timestamp, ctx: ParseContext[Timezone]) -> pd.Timestamp:
        return _on_wall_clock(value, start)

    def round_up(value: pd.Timestamp, ctx: ParseContext[Timezone]) -> pd.Timestamp:
        return _end_before(_on_wall_clock(value, lambda wall: start(wall) + length))

    return UnitDefinition(
        name=name,
        add=_calendar_add(offset),
        round_up=round_up,
        round_down=round_down,
    )


millisecond = _fixed_unit("millisecond", "ms", pd.Timedelta(milliseconds=1))
second = _fixed_unit("second", "s", pd.Timedelta(seconds=1))
minute = _fixed_unit("minute", "min", pd.Timedelta(minutes=1))
hour = _fixed_unit("hour", "h", pd.Timedelta(hours=1))

day = _period_unit(
    "day",
    "days",
    lambda wall: wall.normalize(),
    pd.DateOffset(days=1),
)
week = _period_unit(
    "week",
    "weeks",
    lambda wall: wall.normalize() - pd.Timedelta(days=wall.dayofweek),
    pd.DateOffset(weeks=1),
)
month = _period_unit(
    "month",
    "months",
    lambda wall: wall.normalize().replace(day=1),
    pd.DateOffset(months=1),
)
year = _period_unit(
    "year",
    "years",
    lambda wall: wall.normalize().replace(month=1, day=1),
    pd.DateOffset(years=1),
)

UNITS = unit_table(
    ("ms", millisecond),
    ("s", second),
    ("m", minute),
    ("h", hour),
    ("d", day),
    ("w", week),
    ("mo", month),
    ("y", year),
)


def default_config(timezone: Timezone = "UTC") -> ParserConfig[pd.Timestamp, Timezone]:
    """Reference configuration backed by `pandas.Timestamp`."""

    return ParserConfig(now=now, units=UNITS, timezone=timezone, now_aliases=NOW_ALIASES)
