"""Parser construction.

`create_parser` validates an adapter configuration once and returns a reusable `Parser` that runs
tokenize → resolve → evaluate for every call. The configuration is frozen at construction, so one
parser can be shared freely between threads.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any, Generic, TypeVar

from nowish.parser.errors import ParserConfigError
from nowish.parser.evaluate import evaluate
from nowish.parser.resolve import resolve_expression
from nowish.parser.schema import ParseContext, RoundingDirection, UnitDefinition
from nowish.parser.structure import parse_structure

T = TypeVar("T")
TZ = TypeVar("TZ")


@dataclass(frozen=True)
class ParserConfig(Generic[T, TZ]):
    """Adapter-provided configuration: clock, unit table, default timezone and now-keywords."""

    now: Callable[[ParseContext[TZ]], T]
    units: Mapping[str, UnitDefinition[T, TZ]]
    timezone: TZ
    now_aliases: Sequence[str] = ("now",)


@dataclass(frozen=True)
class Parser(Generic[T, TZ]):
    """Callable parser bound to one configuration."""

    config: ParserConfig[T, TZ]

    def __call__(
            self,
            text: str,
            direction: RoundingDirection | str = RoundingDirection.round_down,
            *,
            timezone: TZ | None = None,
    ) -> T:
        """Parse `text` into the adapter's time type.

        Args:
            text: Expression such as `now-7d/d`.
            direction: Boundary used by both roundings in the expression.
            timezone: Overrides the configured timezone for this call only.

        Raises:
            ParseError: If the expression is malformed or uses unknown tokens.
            ValueError: If `direction` is not a known rounding direction.
        """

        direction = RoundingDirection(direction)
        tokens = parse_structure(text)
        resolved = resolve_expression(
            tokens,
            now_aliases=self.config.now_aliases,
            units=self.config.units,
        )

        ctx = ParseContext(timezone=self.config.timezone if timezone is None else timezone)
        return evaluate(resolved, now=self.config.now, direction=direction, ctx=ctx)


def create_parser(config: ParserConfig[T, TZ]) -> Parser[T, TZ]:
    """Build a parser from adapter configuration.

    Raises:
        ParserConfigError: If `now_aliases` or `units` is empty.
    """

    if len(config.now_aliases) == 0:
        raise ParserConfigError("now_aliases must not be empty")

    if len(config.units) == 0:
        raise ParserConfigError("units must not be empty")

    frozen: ParserConfig[T, TZ] = replace(
        config,
        units=MappingProxyType(dict(config.units)),
        now_aliases=tuple(config.now_aliases),
    )
    return Parser(config=frozen)


def unit_table(*entries: tuple[str, UnitDefinition[Any, Any]]) -> Mapping[str, UnitDefinition[Any, Any]]:
    """Build a read-only unit table, rejecting duplicate codes."""

    table: dict[str, UnitDefinition[Any, Any]] = {}
    for code, unit in entries:
        if code in table:
            raise ParserConfigError(f"duplicate unit code: {code!r}")
        table[code] = unit
    return MappingProxyType(table)
