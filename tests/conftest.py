"""Pytest configuration.

The repository uses a flat layout with the `nowish` package at the root. This conftest ensures tests
can import `nowish.*` when running `pytest` without installing the package, and provides a parser
whose clock is pinned to a fixed instant.
"""

from __future__ import annotations

import sys
from datetime import UTC, datetime
from pathlib import Path

import pytest

# Ensure `import nowish...` works when running pytest without installing the package.
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from nowish.parser.factory import Parser, ParserConfig, create_parser  # noqa: E402
from nowish.parser.schema import ParseContext  # noqa: E402
from nowish.units import datetime_units  # noqa: E402

# Friday.
FIXED_NOW = datetime(2024, 3, 15, 10, 30, 45, 123000, tzinfo=UTC)


def fixed_now(ctx: ParseContext[datetime_units.Timezone]) -> datetime:
    """Clock pinned to `FIXED_NOW`, expressed in the context timezone."""

    return FIXED_NOW.astimezone(datetime_units.to_tzinfo(ctx.timezone))


@pytest.fixture
def fixed_config() -> ParserConfig[datetime, datetime_units.Timezone]:
    return ParserConfig(
        now=fixed_now,
        units=datetime_units.UNITS,
        timezone="UTC",
        now_aliases=datetime_units.NOW_ALIASES,
    )


@pytest.fixture
def parse(fixed_config: ParserConfig[datetime, datetime_units.Timezone]) -> Parser[datetime, datetime_units.Timezone]:
    return create_parser(fixed_config)
