"""Locale keyword and unit spellings.

These tables only add spellings on top of an adapter's unit table; they never define arithmetic.
Keywords and unit names must stay letters and combining marks so the tokenizer accepts them.
Matching is exact and case-sensitive: `Woche` is a unit, `woche` is not.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import replace
from types import MappingProxyType
from typing import Any, TypeVar

from nowish.parser.errors import ParserConfigError
from nowish.parser.factory import ParserConfig
from nowish.parser.schema import UnitDefinition

T = TypeVar("T")
TZ = TypeVar("TZ")

LOCALE_NOW_ALIASES: dict[str, tuple[str, ...]] = {
    "de": ("jetzt",),
    "es": ("ahora",),
    "fr": ("maintenant",),
    "ru": ("сейчас",),
}

LOCALE_UNIT_SYNONYMS: dict[str, dict[str, tuple[str, ...]]] = {
    "de": {
        "ms": ("Millisekunde", "Millisekunden"),
        "s": ("Sekunde", "Sekunden"),
        "m": ("Minute", "Minuten"),
        "h": ("Stunde", "Stunden"),
        "d": ("Tag", "Tage", "Tagen"),
        "w": ("Woche", "Wochen"),
        "mo": ("Monat", "Monate", "Monaten"),
        "y": ("Jahr", "Jahre", "Jahren"),
    },
    "es": {
        "s": ("segundo", "segundos"),
        "m": ("minuto", "minutos"),
        "h": ("hora", "horas"),
        "d": ("día", "días"),
        "w": ("semana", "semanas"),
        "mo": ("mes", "meses"),
        "y": ("año", "años"),
    },
    "fr": {
        "s": ("seconde", "secondes"),
        "m": ("minute", "minutes"),
        "h": ("heure", "heures"),
        "d": ("jour", "jours"),
        "w": ("semaine", "semaines"),
        "mo": ("mois",),
        "y": ("an", "ans", "année", "années"),
    },
    "ru": {
        "ms": ("мс",),
        "s": ("с", "сек"),
        "m": ("мин",),
        "h": ("ч",),
        "d": ("д", "дн", "день", "дня", "дней"),
        "w": ("нед", "неделя", "недели", "недель"),
        "mo": ("мес", "месяц", "месяца", "месяцев"),
        "y": ("г", "год", "года", "лет"),
    },
}

SUPPORTED_LOCALES: frozenset[str] = frozenset(LOCALE_NOW_ALIASES)


def unit_aliases(locale: str) -> dict[str, str]:
    """Map each locale spelling to the unit code it stands for."""

    synonyms = LOCALE_UNIT_SYNONYMS.get(locale)
    if synonyms is None:
        raise ParserConfigError(f"unknown locale: {locale!r}")
    return {alias: code for code, aliases in synonyms.items() for alias in aliases}


def extend_units(
        units: Mapping[str, UnitDefinition[T, TZ]],
        aliases: Mapping[str, str],
) -> Mapping[str, UnitDefinition[T, TZ]]:
    """Return a new unit table where every alias points at the definition of its target code.

    Aliases whose target code is missing from `units` are skipped, so a locale can name units an
    adapter does not provide.

    Raises:
        ParserConfigError: If an alias would replace an existing entry with a different unit.
    """

    table: dict[str, UnitDefinition[T, TZ]] = dict(units)
    for alias, code in aliases.items():
        unit = units.get(code)
        if unit is None:
            continue
        existing = table.get(alias)
        if existing is not None and existing is not unit:
            raise ParserConfigError(f"unit alias {alias!r} conflicts with an existing unit")
        table[alias] = unit
    return MappingProxyType(table)


def with_locales(config: ParserConfig[T, TZ], locales: Iterable[str]) -> ParserConfig[T, TZ]:
    """Return a copy of `config` that also accepts the keywords and units of `locales`."""

    now_aliases: list[str] = list(config.now_aliases)
    units: Mapping[str, UnitDefinition[Any, Any]] = config.units

    for locale in locales:
        if locale not in SUPPORTED_LOCALES:
            raise ParserConfigError(f"unknown locale: {locale!r}")
        now_aliases.extend(a for a in LOCALE_NOW_ALIASES[locale] if a not in now_aliases)
        units = extend_units(units, unit_aliases(locale))

    return replace(config, units=units, now_aliases=tuple(now_aliases))
