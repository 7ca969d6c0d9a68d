"""A.8.7 Numbers.

Number tokens keep their source spelling, without the optional white space
Annex A allows between size, base and value.
"""

from __future__ import annotations

import re

from svast.nodes import Token

_SIZE = r"(?:[1-9][0-9_]*)?"
_UNSIGNED = r"[0-9][0-9_]*"


class DecimalNumber(Token):
    """decimal_number ::= unsigned_number | [ size ] decimal_base unsigned_number
    | [ size ] decimal_base x_digit { _ } | [ size ] decimal_base z_digit { _ }
    """

    pattern = re.compile(
        rf"{_UNSIGNED}|{_SIZE}'[sS]?[dD](?:{_UNSIGNED}|[xXzZ?]_*)",
    )


class BinaryNumber(Token):
    pattern = re.compile(rf"{_SIZE}'[sS]?[bB][01xXzZ?][01xXzZ?_]*")


class OctalNumber(Token):
    pattern = re.compile(rf"{_SIZE}'[sS]?[oO][0-7xXzZ?][0-7xXzZ?_]*")


class HexNumber(Token):
    pattern = re.compile(rf"{_SIZE}'[sS]?[hH][0-9a-fA-FxXzZ?][0-9a-fA-FxXzZ?_]*")


class RealNumber(Token):
    """real_number ::= fixed_point_number
    | unsigned_number [ . unsigned_number ] exp [ sign ] unsigned_number
    """

    pattern = re.compile(
        rf"{_UNSIGNED}\.{_UNSIGNED}|{_UNSIGNED}(?:\.{_UNSIGNED})?[eE][+-]?{_UNSIGNED}",
    )


class UnbasedUnsizedLiteral(Token):
    pattern = re.compile(r"'[01xXzZ]")


type IntegralNumber = DecimalNumber | BinaryNumber | OctalNumber | HexNumber
type Number = IntegralNumber | RealNumber
