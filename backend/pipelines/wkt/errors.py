"""
WKT Parsing Errors
Single error kind raised by the lexer/parser pair
"""
from typing import Optional, Union


class WKTSyntaxError(ValueError):
    """Raised when the lookahead token does not satisfy the rule being matched"""

    def __init__(
        self,
        expected: str,
        found: Union[str, int, float, None],
        position: Optional[int],
        input_text: Optional[str],
    ):
        self.expected = expected
        self.found = found
        self.position = -1 if position is None else position
        self.input = input_text if input_text is not None else ""

        found_text = "end of string." if found is None else f'"{found}"'
        message = (
            f"[Syntax Error] line 0, col {self.position}: "
            f"Error: Expected {expected}, got {found_text} in value \"{self.input}\""
        )
        super().__init__(message)

    @property
    def at_end_of_input(self) -> bool:
        return self.found is None

    def to_dict(self) -> dict:
        return {
            "error": str(self),
            "expected": self.expected,
            "found": self.found,
            "position": self.position,
        }
