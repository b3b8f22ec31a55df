"""Token definitions for the VASC language."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class TokenKind(Enum):
    LET = "var"
    IDENTIFIER = "<identifier>"
    ASSIGNMENT = "="
    SIZED_LITERAL = "<literal>"
    FREE = "free"
    BLOCK_START = "{"
    BLOCK_END = "}"
    EXPR_START = "("
    EXPR_END = ")"
    CONDITIONAL = "if"
    EQUALITY = "=="
    PREPROCESSOR_DIRECTIVE = "<directive>"
    NONE = "<none>"

    def __str__(self) -> str:
        return self.value


KEYWORDS = {
    "var": TokenKind.LET,
    "free": TokenKind.FREE,
    "if": TokenKind.CONDITIONAL,
    "": TokenKind.NONE,
}

OPENERS = {
    TokenKind.BLOCK_START: TokenKind.BLOCK_END,
    TokenKind.EXPR_START: TokenKind.EXPR_END,
}


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    # identifier name, literal value or raw directive text
    value: Optional[Union[str, int]] = None
    line: int = 0
    column: int = 0

    @property
    def name(self) -> str:
        assert self.kind is TokenKind.IDENTIFIER
        return str(self.value)

    @property
    def literal(self) -> int:
        assert self.kind is TokenKind.SIZED_LITERAL
        return int(self.value)  # type: ignore[arg-type]

    def describe(self) -> str:
        if self.kind is TokenKind.IDENTIFIER:
            return f"identifier '{self.value}'"
        if self.kind is TokenKind.SIZED_LITERAL:
            return f"literal {self.value}"
        if self.kind is TokenKind.PREPROCESSOR_DIRECTIVE:
            return f"directive '#{self.value}'"
        return f"'{self.kind}'"


def keyword_token(text: str, line: int, column: int) -> Token:
    kind = KEYWORDS.get(text, TokenKind.IDENTIFIER)
    if kind is TokenKind.IDENTIFIER:
        return Token(kind, text, line, column)
    return Token(kind, None, line, column)
