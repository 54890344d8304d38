"""
WKT Lexer
Splits a WKT/EWKT string into classified tokens with one token of lookahead
"""
from __future__ import annotations

import re
from typing import Iterable, List, Optional

from .tokens import (
    DIMENSION_KINDS,
    GEOMETRY_KINDS,
    KEYWORDS,
    Token,
    TokenKind,
    TokenValue,
    literal_for,
)

_TOKEN_RE = re.compile(
    r"""
    (?P<space>\s+)
    | (?P<float>[+-]?[0-9]+\.[0-9]+)
    | (?P<integer>[+-]?[0-9]+)
    | (?P<word>[A-Za-z]+)
    | (?P<punct>[(),;=])
    """,
    re.VERBOSE,
)

_PUNCTUATION_KINDS = {
    "(": TokenKind.OPEN_PARENTHESIS,
    ")": TokenKind.CLOSE_PARENTHESIS,
    ",": TokenKind.COMMA,
    ";": TokenKind.SEMICOLON,
    "=": TokenKind.EQUALS,
}

_KEYWORD_KINDS = {kind.name: kind for kind in KEYWORDS}

# Longest suffix first so POINTZM splits as POINT + ZM
_DIMENSION_SUFFIXES = sorted((kind.name for kind in DIMENSION_KINDS), key=len, reverse=True)


def tokenize(text: str) -> List[Token]:
    """Tokenize the whole input in one pass."""
    tokens: List[Token] = []
    pos = 0
    length = len(text)

    while pos < length:
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            # Anything no rule classifies becomes a NONE token of one character
            tokens.append(Token(TokenKind.NONE, text[pos], pos))
            pos += 1
            continue

        group = match.lastgroup
        literal = match.group()

        if group == "float":
            tokens.append(Token(TokenKind.FLOAT, float(literal), pos))
        elif group == "integer":
            tokens.append(Token(TokenKind.INTEGER, int(literal), pos))
        elif group == "word":
            tokens.extend(_word_tokens(literal.upper(), pos))
        elif group == "punct":
            tokens.append(Token(_PUNCTUATION_KINDS[literal], literal, pos))

        pos = match.end()

    return tokens


def _word_tokens(word: str, position: int) -> List[Token]:
    kind = _KEYWORD_KINDS.get(word)
    if kind is not None:
        return [Token(kind, word, position)]

    # Geometry keyword glued to its dimension marker, e.g. POINTZ, LINESTRINGZM
    for suffix in _DIMENSION_SUFFIXES:
        if not word.endswith(suffix):
            continue
        prefix = word[: -len(suffix)]
        prefix_kind = _KEYWORD_KINDS.get(prefix)
        if prefix_kind in GEOMETRY_KINDS:
            return [
                Token(prefix_kind, prefix, position),
                Token(_KEYWORD_KINDS[suffix], suffix, position + len(prefix)),
            ]

    return [Token(TokenKind.STRING, word, position)]


class Lexer:
    """
    Token stream over a single input string.

    ``lookahead`` is the next unconsumed token (None at end of input) and
    ``token`` is the one most recently consumed by ``move_next``.
    """

    def __init__(self, input_text: Optional[str] = None):
        self.input: str = ""
        self.tokens: List[Token] = []
        self.position = 0
        self.peek_offset = 0
        self.lookahead: Optional[Token] = None
        self.token: Optional[Token] = None

        if input_text is not None:
            self.set_input(input_text)

    def set_input(self, input_text: str) -> None:
        self.input = input_text
        self.tokens = tokenize(input_text)
        self.reset()

    def reset(self) -> None:
        self.position = 0
        self.peek_offset = 0
        self.lookahead = None
        self.token = None

    def move_next(self) -> bool:
        """Advance the lookahead; returns False once the input is exhausted."""
        self.peek_offset = 0
        self.token = self.lookahead
        if self.position < len(self.tokens):
            self.lookahead = self.tokens[self.position]
            self.position += 1
        else:
            self.lookahead = None
        return self.lookahead is not None

    def peek(self) -> Optional[Token]:
        """Look one token further ahead on each call without consuming anything."""
        index = self.position + self.peek_offset
        self.peek_offset += 1
        if index < len(self.tokens):
            return self.tokens[index]
        return None

    def is_next_token(self, kind: TokenKind) -> bool:
        return self.lookahead is not None and self.lookahead.kind == kind

    def is_next_token_any(self, kinds: Iterable[TokenKind]) -> bool:
        return self.lookahead is not None and self.lookahead.kind in set(kinds)

    def value(self) -> TokenValue:
        """Value of the token consumed by the last ``move_next``."""
        if self.token is None:
            return None
        return self.token.value

    @staticmethod
    def get_literal(kind: TokenKind) -> str:
        return literal_for(kind)
