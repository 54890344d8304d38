"""
WKT Pipeline Module
Tokenizer and recursive-descent parser for WKT/EWKT geometry strings
"""
from .errors import WKTSyntaxError
from .lexer import Lexer
from .parser import Geometry, Parser, parse_wkt
from .pipeline import WKTPipeline
from .tokens import Token, TokenKind

__all__ = ["WKTSyntaxError", "Lexer", "Geometry", "Parser", "parse_wkt", "WKTPipeline", "Token", "TokenKind"]
