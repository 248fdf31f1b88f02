"""Relative time expressions (`now-7d/d`, `now/w-1d/mo`) evaluated through pluggable time adapters.

Typical use:

    from nowish import create_parser
    from nowish.units.datetime_units import default_config

    parse = create_parser(default_config("Europe/Berlin"))
    start = parse("now-7d/d")
    end = parse("now/d", "round-up")
"""

from nowish.parser.errors import ParseError, ParserConfigError
from nowish.parser.factory import Parser, ParserConfig, create_parser, unit_table
from nowish.parser.ranges import parse_range
from nowish.parser.schema import (
    ErrorKind,
    ErrorPosition,
    OffsetTokens,
    ParseContext,
    RawTokens,
    RoundingDirection,
    UnitDefinition,
)
from nowish.parser.structure import parse_structure

__all__ = [
    "ErrorKind",
    "ErrorPosition",
    "OffsetTokens",
    "ParseContext",
    "ParseError",
    "Parser",
    "ParserConfig",
    "ParserConfigError",
    "RawTokens",
    "RoundingDirection",
    "UnitDefinition",
    "create_parser",
    "parse_range",
    "parse_structure",
    "unit_table",
]
