"""Expression token models and the adapter-facing records.

`RawTokens` is the untyped output of the tokenizer. `ResolvedExpression` is the same shape with
unit names replaced by `UnitDefinition` references taken from the parser's unit table.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, model_validator

T = TypeVar("T")
TZ = TypeVar("TZ")


class RoundingDirection(StrEnum):
    """Which boundary of a period a rounding snaps to."""

    round_up = "round-up"
    round_down = "round-down"


class ErrorKind(StrEnum):
    """Parse failure families."""

    invalid_structure = "invalid-structure"
    invalid_value = "invalid-value"


class ErrorPosition(StrEnum):
    """Grammar slot in `now[/round][±Nunit[/round]]` that failed value resolution."""

    now_keyword = "now-keyword"
    now_rounding = "now-rounding"
    offset = "offset"
    final_rounding = "final-rounding"


class OffsetTokens(BaseModel):
    """Signed amount plus the unit name it is expressed in."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    amount: int
    unit: str


class RawTokens(BaseModel):
    """Tokens extracted from an expression string, not yet checked against any configuration."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    now: str
    now_rounding: str | None = None
    offset: OffsetTokens | None = None
    final_rounding: str | None = None

    @model_validator(mode="after")
    def validate_final_rounding(self) -> RawTokens:
        """A final rounding only exists after an offset."""

        if self.final_rounding is not None and self.offset is None:
            raise ValueError("final_rounding requires an offset")
        return self


@dataclass(frozen=True)
class ParseContext(Generic[TZ]):
    """Runtime context threaded through every adapter call."""

    timezone: TZ


@dataclass(frozen=True)
class UnitDefinition(Generic[T, TZ]):
    """Time arithmetic for a single unit (day, week, month, ...).

    `round_down` snaps to the first instant of the period containing a time; `round_up` snaps to
    the last representable instant before the next period starts.
    """

    name: str
    add: Callable[[T, int, ParseContext[TZ]], T]
    round_up: Callable[[T, ParseContext[TZ]], T]
    round_down: Callable[[T, ParseContext[TZ]], T]

    def rounder(self, direction: RoundingDirection) -> Callable[[T, ParseContext[TZ]], T]:
        """Return the rounding callable for `direction`."""

        if direction == RoundingDirection.round_up:
            return self.round_up
        return self.round_down


@dataclass(frozen=True)
class ResolvedOffset(Generic[T, TZ]):
    amount: int
    unit: UnitDefinition[T, TZ]


@dataclass(frozen=True)
class ResolvedExpression(Generic[T, TZ]):
    """Tokens with every unit name replaced by its definition."""

    now_rounding: UnitDefinition[T, TZ] | None = None
    offset: ResolvedOffset[T, TZ] | None = None
    final_rounding: UnitDefinition[T, TZ] | None = None

