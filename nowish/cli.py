"""Evaluate relative time expressions from the command line.

Examples:
    nowish now-7d/d
    nowish --round-up now/w
    nowish --range now-7d/d now/d --tz Europe/Berlin
    NOWISH_LOCALES=de nowish jetzt/Woche-2Tage/Monat
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from zoneinfo import ZoneInfoNotFoundError

from nowish.app import create_app
from nowish.config.logging import configure_logging
from nowish.config.settings import load_settings
from nowish.parser.errors import ParseError, ParserConfigError
from nowish.parser.ranges import parse_range
from nowish.parser.schema import RoundingDirection
from nowish.units.datetime_units import to_tzinfo
from nowish.units.locales import SUPPORTED_LOCALES

logger = logging.getLogger(__name__)

EXIT_INVALID = 2


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nowish",
        description="Evaluate relative time expressions such as now-7d/d.",
    )
    parser.add_argument("expressions", nargs="+", metavar="EXPR", help="Expression(s) to evaluate.")
    parser.add_argument(
        "--round-up",
        action="store_true",
        help="Round to the end of periods instead of the start.",
    )
    parser.add_argument(
        "--range",
        action="store_true",
        help="Treat exactly two expressions as a start/end range.",
    )
    parser.add_argument("--tz", default=None, help="Timezone override (IANA name).")
    parser.add_argument(
        "--locale",
        action="append",
        choices=sorted(SUPPORTED_LOCALES),
        default=None,
        help="Also accept the keywords and units of a locale (repeatable).",
    )
    parser.add_argument("--adapter", choices=["datetime", "pandas"], default=None)
    parser.add_argument("--log-level", default=None)
    return parser


def run(argv: Sequence[str] | None = None) -> int:
    """CLI body. Returns the process exit code."""

    args = _build_arg_parser().parse_args(argv)

    try:
        settings = load_settings()
    except RuntimeError as exc:
        configure_logging(args.log_level)
        logger.error("configuration failed: %s", exc)
        return EXIT_INVALID

    configure_logging(args.log_level or settings.log_level)

    try:
        if args.tz:
            to_tzinfo(args.tz)
        overrides: dict[str, str] = {}
        if args.adapter:
            overrides["adapter"] = args.adapter
        if args.locale:
            overrides["locales"] = ",".join(args.locale)
        if overrides:
            settings = settings.model_copy(update=overrides)
        app = create_app(settings)
    except (ParserConfigError, ZoneInfoNotFoundError, ValueError) as exc:
        logger.error("configuration failed: %s", exc)
        return EXIT_INVALID

    try:
        if args.range:
            if len(args.expressions) != 2:
                logger.error("--range takes exactly two expressions, got %d", len(args.expressions))
                return EXIT_INVALID
            start, end = parse_range(app.parser, *args.expressions, timezone=args.tz)
            print(f"{start.isoformat()}/{end.isoformat()}")
            return 0

        direction = RoundingDirection.round_up if args.round_up else RoundingDirection.round_down
        for expression in args.expressions:
            print(app.parser(expression, direction, timezone=args.tz).isoformat())
    except ParseError as exc:
        logger.info("rejected kind=%s position=%s value=%r", exc.kind, exc.position, exc.value)
        print(f"nowish: {exc}", file=sys.stderr)
        return EXIT_INVALID
    except (ValueError, OverflowError) as exc:
        logger.info("rejected reason=%s", exc)
        print(f"nowish: {exc}", file=sys.stderr)
        return EXIT_INVALID

    return 0


def main() -> None:
    """CLI entry point."""

    sys.exit(run())


if __name__ == "__main__":
    main()
