"""
WKT/EWKT Parser
Recursive-descent parser turning a WKT/EWKT string into a nested geometry value tree

    ewkt       := [ srid ] geometry
    srid       := SRID EQUALS INTEGER SEMICOLON
    geometry   := TYPE [ Z | M | ZM ] OPEN body CLOSE
    point      := coordinate coordinate
    coordinate := (FLOAT | INTEGER) [ E INTEGER ]
    pointList  := point (COMMA point)*
    pointLists := OPEN pointList CLOSE (COMMA OPEN pointList CLOSE)*
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple, Union

from .errors import WKTSyntaxError
from .lexer import Lexer
from .tokens import DIMENSION_KINDS, GEOMETRY_KINDS, TokenKind

Number = Union[int, float]
Point = Tuple[Number, Number]


@dataclass(frozen=True)
class Geometry:
    """One node of the parsed tree. Only the outermost node carries an SRID."""
    type: str
    value: Any
    srid: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        if self.type == TokenKind.GEOMETRYCOLLECTION.name:
            value = [member.to_dict() for member in self.value]
        else:
            value = _as_lists(self.value)
        return {"type": self.type, "value": value, "srid": self.srid}


def _as_lists(value: Any) -> Any:
    if isinstance(value, tuple):
        return [_as_lists(item) for item in value]
    return value


class Parser:
    """
    Parser for WKT/EWKT spatial object strings.

    Each call to ``parse`` builds its own Lexer, so the only state kept
    between calls is the input string (reused when ``parse`` is called
    without one) and the SRID found by the last successful parse.
    """

    DEFAULT_MAX_DEPTH = 64

    def __init__(self, input_text: Optional[str] = None, max_depth: Optional[int] = None):
        self.input: Optional[str] = input_text
        self.srid: Optional[int] = None
        self.max_depth = max_depth if max_depth is not None else self.DEFAULT_MAX_DEPTH
        self._lexer: Optional[Lexer] = None
        self._depth = 0

        # Body rule per geometry keyword
        self._rules: Dict[TokenKind, Callable[[], Any]] = {
            TokenKind.POINT: self.point,
            TokenKind.LINESTRING: self.line_string,
            TokenKind.POLYGON: self.polygon,
            TokenKind.MULTIPOINT: self.multi_point,
            TokenKind.MULTILINESTRING: self.multi_line_string,
            TokenKind.MULTIPOLYGON: self.multi_polygon,
            TokenKind.GEOMETRYCOLLECTION: self.geometry_collection,
        }

    def parse(self, input_text: Optional[str] = None) -> Geometry:
        if input_text is not None:
            self.input = input_text

        self._lexer = Lexer(self.input or "")
        self._depth = 0
        self._lexer.move_next()

        srid = None
        if self._lexer.is_next_token(TokenKind.SRID):
            srid = self.srid_value()

        geometry = self.geometry()

        if self._lexer.lookahead is not None:
            raise self._syntax_error("end of string")

        self.srid = srid
        return Geometry(geometry.type, geometry.value, srid)

    def srid_value(self) -> int:
        """Match ``SRID=<integer>;``"""
        self.match(TokenKind.SRID)
        self.match(TokenKind.EQUALS)
        self.match(TokenKind.INTEGER)

        srid = self._lexer.value()
        if srid < 0:
            raise self._syntax_error("non-negative integer", self._lexer.token)

        self.match(TokenKind.SEMICOLON)

        return srid

    def type(self) -> TokenKind:
        """Match any geometry keyword"""
        self.match(TokenKind.TYPE)

        return self._lexer.token.kind

    def geometry(self) -> Geometry:
        if self._depth >= self.max_depth:
            raise self._syntax_error(f"at most {self.max_depth} nested geometries")

        self._depth += 1
        try:
            return self._geometry()
        finally:
            self._depth -= 1

    def _geometry(self) -> Geometry:
        kind = self.type()

        # Dimension markers are consumed but not kept
        if self._lexer.is_next_token_any(DIMENSION_KINDS):
            self.match(self._lexer.lookahead.kind)

        self.match(TokenKind.OPEN_PARENTHESIS)

        value = self._body(kind)

        self.match(TokenKind.CLOSE_PARENTHESIS)

        return Geometry(kind.name, value)

    def _body(self, kind: TokenKind) -> Any:
        rule = self._rules.get(kind)
        if rule is None:
            raise self._syntax_error(Lexer.get_literal(TokenKind.TYPE), self._lexer.token)
        return rule()

    def point(self) -> Point:
        x = self.coordinate()
        y = self.coordinate()

        return (x, y)

    def coordinate(self) -> Number:
        """Match a number and optional exponent"""
        self.match(TokenKind.FLOAT if self._lexer.is_next_token(TokenKind.FLOAT) else TokenKind.INTEGER)

        if not self._lexer.is_next_token(TokenKind.E):
            number = self._lexer.value()
            if isinstance(number, float) and not math.isfinite(number):
                raise self._syntax_error("finite number", self._lexer.token)
            return number

        number = self._lexer.value()

        self.match(TokenKind.E)
        self.match(TokenKind.INTEGER)

        exponent = self._lexer.value()
        if number == 0:
            return math.copysign(0.0, number)

        try:
            scale = math.pow(10, exponent)
        except OverflowError:
            scale = 0.0 if exponent < 0 else math.inf

        try:
            result = number * scale
        except OverflowError:
            # Integer mantissa too large for a float
            result = math.inf

        # Coordinates must fit a finite float
        if not math.isfinite(result):
            raise self._syntax_error("finite number", self._lexer.token)

        return result

    def point_list(self) -> Tuple[Point, ...]:
        points = [self.point()]

        while self._lexer.is_next_token(TokenKind.COMMA):
            self.match(TokenKind.COMMA)

            points.append(self.point())

        return tuple(points)

    def point_lists(self) -> Tuple[Tuple[Point, ...], ...]:
        self.match(TokenKind.OPEN_PARENTHESIS)

        point_lists = [self.point_list()]

        self.match(TokenKind.CLOSE_PARENTHESIS)

        while self._lexer.is_next_token(TokenKind.COMMA):
            self.match(TokenKind.COMMA)
            self.match(TokenKind.OPEN_PARENTHESIS)

            point_lists.append(self.point_list())

            self.match(TokenKind.CLOSE_PARENTHESIS)

        return tuple(point_lists)

    def line_string(self) -> Tuple[Point, ...]:
        return self.point_list()

    def polygon(self) -> Tuple[Tuple[Point, ...], ...]:
        return self.point_lists()

    def multi_point(self) -> Tuple[Point, ...]:
        return self.point_list()

    def multi_line_string(self) -> Tuple[Tuple[Point, ...], ...]:
        return self.point_lists()

    def multi_polygon(self) -> Tuple[Tuple[Tuple[Point, ...], ...], ...]:
        self.match(TokenKind.OPEN_PARENTHESIS)

        polygons = [self.polygon()]

        self.match(TokenKind.CLOSE_PARENTHESIS)

        while self._lexer.is_next_token(TokenKind.COMMA):
            self.match(TokenKind.COMMA)
            self.match(TokenKind.OPEN_PARENTHESIS)

            polygons.append(self.polygon())

            self.match(TokenKind.CLOSE_PARENTHESIS)

        return tuple(polygons)

    def geometry_collection(self) -> Tuple[Geometry, ...]:
        collection = [self.geometry()]

        while self._lexer.is_next_token(TokenKind.COMMA):
            self.match(TokenKind.COMMA)

            collection.append(self.geometry())

        return tuple(collection)

    def match(self, expected: TokenKind) -> None:
        """Consume the lookahead if it is ``expected``; TYPE accepts any geometry keyword."""
        lookahead = self._lexer.lookahead

        if expected == TokenKind.TYPE:
            matched = lookahead is not None and lookahead.kind in GEOMETRY_KINDS
        else:
            matched = lookahead is not None and lookahead.kind == expected

        if not matched:
            raise self._syntax_error(Lexer.get_literal(expected))

        self._lexer.move_next()

    def _syntax_error(self, expected: str, token=None) -> WKTSyntaxError:
        if token is None:
            token = self._lexer.lookahead
        return WKTSyntaxError(
            expected=expected,
            found=None if token is None else token.value,
            position=None if token is None else token.position,
            input_text=self.input,
        )


def parse_wkt(input_text: str) -> Geometry:
    """Parse a single WKT/EWKT string."""
    return Parser(input_text).parse()
