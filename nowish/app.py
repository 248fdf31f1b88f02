"""Application composition root.

This module wires settings, the selected time adapter and locale tables into a parser.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from nowish.config.settings import Settings
from nowish.parser.factory import Parser, ParserConfig, create_parser
from nowish.units import datetime_units
from nowish.units.locales import with_locales

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class App:
    """Shared dependencies for the CLI."""

    settings: Settings
    parser: Parser[Any, Any]


def adapter_config(adapter: str, timezone: str) -> ParserConfig[Any, Any]:
    """Default configuration of the named time adapter."""

    if adapter == "datetime":
        return datetime_units.default_config(timezone)
    if adapter == "pandas":
        from nowish.units import pandas_units

        return pandas_units.default_config(timezone)
    raise ValueError(f"unknown adapter: {adapter!r}")


def create_app(settings: Settings) -> App:
    """Create the application container from validated settings."""

    config = with_locales(adapter_config(settings.adapter, settings.timezone), settings.locale_codes)
    parser = create_parser(config)
    logger.debug(
        "parser ready adapter=%s timezone=%s locales=%s units=%d",
        settings.adapter,
        settings.timezone,
        ",".join(settings.locale_codes) or "-",
        len(parser.config.units),
    )
    return App(settings=settings, parser=parser)
