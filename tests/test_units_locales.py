"""Tests for locale keyword/unit spellings layered on top of a unit table."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from nowish.parser.errors import ParseError, ParserConfigError
from nowish.parser.factory import ParserConfig, create_parser
from nowish.parser.schema import ErrorPosition
from nowish.parser.structure import parse_structure
from nowish.units import datetime_units
from nowish.units.locales import (
    LOCALE_NOW_ALIASES,
    LOCALE_UNIT_SYNONYMS,
    SUPPORTED_LOCALES,
    extend_units,
    unit_aliases,
    with_locales,
)


def test_every_locale_has_keywords_and_units() -> None:
    assert set(LOCALE_UNIT_SYNONYMS) == SUPPORTED_LOCALES
    for locale in SUPPORTED_LOCALES:
        assert LOCALE_NOW_ALIASES[locale]
        assert set(LOCALE_UNIT_SYNONYMS[locale]) <= set(datetime_units.UNITS)


@pytest.mark.parametrize("locale", sorted(SUPPORTED_LOCALES))
def test_locale_spellings_tokenize(locale: str) -> None:
    for keyword in LOCALE_NOW_ALIASES[locale]:
        for alias in unit_aliases(locale):
            tokens = parse_structure(f"{keyword}/{alias}-1{alias}/{alias}")
            assert tokens.now == keyword
            assert tokens.now_rounding == alias


def test_unit_aliases_maps_to_codes() -> None:
    aliases = unit_aliases("de")
    assert aliases["Woche"] == "w"
    assert aliases["Tage"] == "d"
    assert aliases["Monat"] == "mo"


def test_unknown_locale_is_rejected() -> None:
    with pytest.raises(ParserConfigError, match="unknown locale"):
        unit_aliases("xx")


def test_extend_units_points_aliases_at_shared_definitions() -> None:
    units = extend_units(datetime_units.UNITS, {"Tag": "d", "Stunde": "h"})

    assert units["Tag"] is datetime_units.day
    assert units["Stunde"] is datetime_units.hour
    assert units["d"] is datetime_units.day
    assert "Tag" not in datetime_units.UNITS


def test_extend_units_skips_missing_targets() -> None:
    units = extend_units({"d": datetime_units.day}, {"Tag": "d", "Woche": "w"})
    assert set(units) == {"d", "Tag"}


def test_extend_units_rejects_conflicting_alias() -> None:
    with pytest.raises(ParserConfigError, match="conflicts"):
        extend_units(datetime_units.UNITS, {"d": "w"})


def test_with_locales_builds_a_german_parser(fixed_config: ParserConfig[datetime, str]) -> None:
    config = with_locales(fixed_config, ["de"])
    parse = create_parser(config)

    assert config.now_aliases == ("now", "jetzt")
    assert fixed_config.units is datetime_units.UNITS
    assert parse("jetzt/Woche-2Tage/Monat") == datetime(2024, 3, 1, tzinfo=UTC)
    assert parse("jetzt/Woche-2Tage/Monat") == parse("now/w-2d/mo")
    assert parse("now-7Tage/Tag") == datetime(2024, 3, 8, tzinfo=UTC)


def test_with_locales_keeps_matching_case_sensitive(fixed_config: ParserConfig[datetime, str]) -> None:
    parse = create_parser(with_locales(fixed_config, ["de"]))

    with pytest.raises(ParseError) as excinfo:
        parse("jetzt/woche")
    assert excinfo.value.position == ErrorPosition.now_rounding


def test_with_locales_combines_locales(fixed_config: ParserConfig[datetime, str]) -> None:
    parse = create_parser(with_locales(fixed_config, ["ru", "es", "ru"]))

    assert parse.config.now_aliases == ("now", "сейчас", "ahora")
    assert parse("сейчас-1мес/мес") == datetime(2024, 2, 1, tzinfo=UTC)
    assert parse("ahora-1día/día") == datetime(2024, 3, 14, tzinfo=UTC)


def test_with_locales_rejects_unknown_locale(fixed_config: ParserConfig[datetime, str]) -> None:
    with pytest.raises(ParserConfigError, match="unknown locale"):
        with_locales(fixed_config, ["de", "tlh"])
