"""Unit table for timezone-aware `datetime` values.

Timezones are IANA names (resolved with `zoneinfo`) or ready `tzinfo` objects. Every time value
carries its own `tzinfo`, so only `now` reads the timezone from the parse context.

Arithmetic rules:
    - `ms`, `s`, `m`, `h` add elapsed time: `now+1h` across a DST change is 3600 real seconds.
    - `d`, `w`, `mo`, `y` add calendar time on the wall clock. Month and year adds clamp to the
      last day of a shorter month (`2024-01-31 +1mo` -> `2024-02-29`, `2024-02-29 +1y` ->
      `2025-02-28`).
    - A wall-clock result inside a DST gap is moved forward by the gap length.
    - Round-up ends one microsecond (the `datetime` resolution) before the next period starts.
    - Weeks start on Monday.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, date, datetime, time, timedelta, tzinfo
from zoneinfo import ZoneInfo

from dateutil.relativedelta import relativedelta

from nowish.parser.factory import ParserConfig, unit_table
from nowish.parser.schema import ParseContext, UnitDefinition

Timezone = str | tzinfo
Unit = UnitDefinition[datetime, Timezone]

NOW_ALIASES: tuple[str, ...] = ("now",)

_RESOLUTION = timedelta.resolution


def to_tzinfo(timezone: Timezone) -> tzinfo:
    """Resolve an IANA name to a `ZoneInfo`; pass `tzinfo` objects through."""

    if isinstance(timezone, tzinfo):
        return timezone
    return ZoneInfo(timezone)


def now(ctx: ParseContext[Timezone]) -> datetime:
    """Current time in the context timezone."""

    return datetime.now(to_tzinfo(ctx.timezone))


def _normalize(value: datetime) -> datetime:
    # Round-trip through UTC: nonexistent wall times move past the gap.
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).astimezone(value.tzinfo)


def _elapsed(value: datetime, delta: timedelta) -> datetime:
    if value.tzinfo is None:
        return value + delta
    return (value.astimezone(UTC) + delta).astimezone(value.tzinfo)


def _end_before(boundary: datetime) -> datetime:
    return _elapsed(boundary, -_RESOLUTION)


def _start_of_day(day: date, tz: tzinfo | None) -> datetime:
    return _normalize(datetime.combine(day, time.min, tzinfo=tz))


def _calendar(value: datetime, delta: relativedelta) -> datetime:
    return _normalize(value + delta)


def _fixed_unit(name: str, step: timedelta, floor: Callable[[datetime], datetime]) -> Unit:
    """Sub-day unit: a period is `step` of elapsed time starting at `floor(value)`."""

    def round_down(value: datetime, ctx: ParseContext[Timezone]) -> datetime:
        return _normalize(floor(value))

    def round_up(value: datetime, ctx: ParseContext[Timezone]) -> datetime:
        return _end_before(_elapsed(round_down(value, ctx), step))

    return UnitDefinition(
        name=name,
        add=lambda value, amount, ctx: _elapsed(value, step * amount),
        round_up=round_up,
        round_down=round_down,
    )


def _day_down(value: datetime, ctx: ParseContext[Timezone]) -> datetime:
    return _start_of_day(value.date(), value.tzinfo)


def _day_up(value: datetime, ctx: ParseContext[Timezone]) -> datetime:
    # Next midnight minus one tick; hour-based rounding would be off on 23h and 25h days.
    return _end_before(_start_of_day(value.date() + timedelta(days=1), value.tzinfo))


def _monday(value: datetime) -> date:
    return value.date() - timedelta(days=value.weekday())


def _week_down(value: datetime, ctx: ParseContext[Timezone]) -> datetime:
    return _start_of_day(_monday(value), value.tzinfo)


def _week_up(value: datetime, ctx: ParseContext[Timezone]) -> datetime:
    return _end_before(_start_of_day(_monday(value) + timedelta(days=7), value.tzinfo))


def _month_down(value: datetime, ctx: ParseContext[Timezone]) -> datetime:
    return _start_of_day(value.date().replace(day=1), value.tzinfo)


def _month_up(value: datetime, ctx: ParseContext[Timezone]) -> datetime:
    first = value.date().replace(day=1)
    return _end_before(_start_of_day(first + relativedelta(months=1), value.tzinfo))


def _year_down(value: datetime, ctx: ParseContext[Timezone]) -> datetime:
    return _start_of_day(date(value.year, 1, 1), value.tzinfo)


def _year_up(value: datetime, ctx: ParseContext[Timezone]) -> datetime:
    return _end_before(_start_of_day(date(value.year + 1, 1, 1), value.tzinfo))


millisecond = _fixed_unit(
    "millisecond",
    timedelta(milliseconds=1),
    lambda value: value.replace(microsecond=value.microsecond // 1000 * 1000),
)
second = _fixed_unit(
    "second",
    timedelta(seconds=1),
    lambda value: value.replace(microsecond=0),
)
minute = _fixed_unit(
    "minute",
    timedelta(minutes=1),
    lambda value: value.replace(second=0, microsecond=0),
)
hour = _fixed_unit(
    "hour",
    timedelta(hours=1),
    lambda value: value.replace(minute=0, second=0, microsecond=0),
)

day: Unit = UnitDefinition(
    name="day",
    add=lambda value, amount, ctx: _calendar(value, relativedelta(days=amount)),
    round_up=_day_up,
    round_down=_day_down,
)

week: Unit = UnitDefinition(
    name="week",
    add=lambda value, amount, ctx: _calendar(value, relativedelta(weeks=amount)),
    round_up=_week_up,
    round_down=_week_down,
)

month: Unit = UnitDefinition(
    name="month",
    add=lambda value, amount, ctx: _calendar(value, relativedelta(months=amount)),
    round_up=_month_up,
    round_down=_month_down,
)

year: Unit = UnitDefinition(
    name="year",
    add=lambda value, amount, ctx: _calendar(value, relativedelta(years=amount)),
    round_up=_year_up,
    round_down=_year_down,
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


def default_config(timezone: Timezone = "UTC") -> ParserConfig[datetime, Timezone]:
    """Reference configuration: all units above, `now` as the only keyword."""

    return ParserConfig(now=now, units=UNITS, timezone=timezone, now_aliases=NOW_ALIASES)
