"""Expression tokenizer.

Grammar: `KEYWORD ("/" UNIT)? (SIGN DIGITS UNIT ("/" UNIT)?)?`

Keywords and unit names are runs of Unicode letters and combining marks, so locale spellings such
as `jetzt/Woche-2Tage/Monat` tokenize, while `+`/`-` stay reserved for the offset sign and ASCII
digits for the amount.
"""

from __future__ import annotations

import regex as re

from nowish.parser.errors import ParseError
from nowish.parser.schema import ErrorKind, OffsetTokens, RawTokens

_STRUCTURE_RE = re.compile(
    r"(?P<now>[\p{L}\p{M}]+)"
    r"(?:/(?P<now_rounding>[\p{L}\p{M}]+))?"
    r"(?:(?P<sign>[+-])(?P<amount>[0-9]+)(?P<unit>[\p{L}\p{M}]+)"
    r"(?:/(?P<final_rounding>[\p{L}\p{M}]+))?)?"
)


def parse_structure(text: str) -> RawTokens:
    """Extract tokens from an expression. Validates the grammar, not the values.

    Raises:
        ParseError: `invalid-structure` if the whole string does not match the grammar.
    """

    match = _STRUCTURE_RE.fullmatch(text)
    if match is None:
        raise ParseError(ErrorKind.invalid_structure, text)

    offset = None
    if match.group("amount") is not None:
        amount = int(match.group("amount"))
        if match.group("sign") == "-":
            amount = -amount
        offset = OffsetTokens(amount=amount, unit=match.group("unit"))

    return RawTokens(
        now=match.group("now"),
        now_rounding=match.group("now_rounding"),
        offset=offset,
        final_rounding=match.group("final_rounding"),
    )
