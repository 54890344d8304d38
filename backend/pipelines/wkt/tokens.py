from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Union


class TokenKind(IntEnum):
    NONE = 1
    INTEGER = 2
    STRING = 3
    FLOAT = 5
    CLOSE_PARENTHESIS = 6
    OPEN_PARENTHESIS = 7
    COMMA = 8
    EQUALS = 11
    SEMICOLON = 50
    SRID = 500
    ZM = 501
    Z = 502
    M = 503
    E = 504

    # Geometry keywords
    TYPE = 600
    POINT = 601
    LINESTRING = 602
    POLYGON = 603
    MULTIPOINT = 604
    MULTILINESTRING = 605
    MULTIPOLYGON = 606
    GEOMETRYCOLLECTION = 607


TokenValue = Union[str, int, float, None]


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: TokenValue
    position: int


GEOMETRY_KINDS: frozenset[TokenKind] = frozenset({
    TokenKind.POINT,
    TokenKind.LINESTRING,
    TokenKind.POLYGON,
    TokenKind.MULTIPOINT,
    TokenKind.MULTILINESTRING,
    TokenKind.MULTIPOLYGON,
    TokenKind.GEOMETRYCOLLECTION,
})

DIMENSION_KINDS: frozenset[TokenKind] = frozenset({TokenKind.Z, TokenKind.M, TokenKind.ZM})

KEYWORDS: frozenset[TokenKind] = GEOMETRY_KINDS | DIMENSION_KINDS | {TokenKind.SRID, TokenKind.E}

_PUNCTUATION: dict[TokenKind, str] = {
    TokenKind.OPEN_PARENTHESIS: "(",
    TokenKind.CLOSE_PARENTHESIS: ")",
    TokenKind.COMMA: ",",
    TokenKind.SEMICOLON: ";",
    TokenKind.EQUALS: "=",
}

_DESCRIPTIONS: dict[TokenKind, str] = {
    TokenKind.NONE: "unknown token",
    TokenKind.INTEGER: "integer",
    TokenKind.FLOAT: "float",
    TokenKind.STRING: "string",
    TokenKind.TYPE: "geometry type",
}


def literal_for(kind: TokenKind) -> str:
    """Human readable name of a token kind, as used in error messages."""
    if kind in _PUNCTUATION:
        return _PUNCTUATION[kind]
    if kind in _DESCRIPTIONS:
        return _DESCRIPTIONS[kind]
    return kind.name

