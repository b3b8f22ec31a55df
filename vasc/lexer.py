"""Character-level lexer for VASC source.

The lexer walks the text once.  Alphabetic characters collect in a pending
identifier buffer which is flushed through the keyword table whenever a
delimiter, operator, digit run or whitespace shows up.  Statement
terminators (`;`) and whitespace never become tokens.

    var x = 5;          -> LET IDENTIFIER(x) ASSIGNMENT SIZED_LITERAL(5)
    if (1 == 1) { }     -> CONDITIONAL EXPR_START SIZED_LITERAL(1) EQUALITY
                           SIZED_LITERAL(1) EXPR_END BLOCK_START BLOCK_END
    # anything          -> PREPROCESSOR_DIRECTIVE(" anything") + a warning
    \\ anything          -> (dropped, including the line break)
"""

from __future__ import annotations

from typing import List, Tuple

from vasc.errors import Diagnostic, LexError
from vasc.tokens import Token, TokenKind, keyword_token

DIGITS = "0123456789"
LINE_TERMINATORS = "\r\n"

DELIMITERS = {
    "{": TokenKind.BLOCK_START,
    "}": TokenKind.BLOCK_END,
    "(": TokenKind.EXPR_START,
    ")": TokenKind.EXPR_END,
}


class Lexer:
    def __init__(self, text: str, source_name: str = "<string>") -> None:
        self.text = text
        self.source_name = source_name
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []
        self.warnings: List[Diagnostic] = []
        self._buffer: List[str] = []
        self._buffer_start = (1, 1)

    # ------------------------------------------------------------------ utils
    def _at_end(self) -> bool:
        return self.pos >= len(self.text)

    def _peek(self) -> str:
        return self.text[self.pos]

    def _advance(self) -> str:
        ch = self.text[self.pos]
        self.pos += 1
        if ch == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return ch

    def _push(self, kind: TokenKind, value=None, line: int = 0, column: int = 0) -> None:
        self.tokens.append(Token(kind, value, line, column))

    def _flush(self) -> None:
        if not self._buffer:
            return
        text = "".join(self._buffer)
        self._buffer.clear()
        token = keyword_token(text, *self._buffer_start)
        if token.kind is not TokenKind.NONE:
            self.tokens.append(token)

    def _error(self, message: str, line: int, column: int) -> LexError:
        return LexError(message, self.source_name, line, column)

    # --------------------------------------------------------------- branches
    def _lex_equals(self) -> None:
        self._flush()
        line, column = self.line, self.column
        self._advance()
        if self._at_end():
            raise self._error("unexpected end of input after '='", line, column)
        if self._peek() == "=":
            self._advance()
            self._push(TokenKind.EQUALITY, None, line, column)
        else:
            # whatever follows is lexed as its own token, so `x=5` works
            self._push(TokenKind.ASSIGNMENT, None, line, column)

    def _lex_literal(self) -> None:
        self._flush()
        line, column = self.line, self.column
        digits: List[str] = []
        while not self._at_end() and self._peek() in DIGITS:
            digits.append(self._advance())
        self._push(TokenKind.SIZED_LITERAL, int("".join(digits)), line, column)

    def _lex_directive(self) -> None:
        self._flush()
        line, column = self.line, self.column
        self._advance()
        raw: List[str] = []
        while not self._at_end() and self._peek() not in LINE_TERMINATORS:
            raw.append(self._advance())
        text = "".join(raw)
        self._push(TokenKind.PREPROCESSOR_DIRECTIVE, text, line, column)
        self.warnings.append(Diagnostic(
            f"preprocessor directive '#{text.strip()}' is not evaluated",
            self.source_name, line, column,
        ))

    def _skip_line(self) -> None:
        while not self._at_end():
            if self._advance() == "\n":
                break

    # -------------------------------------------------------------- main pass
    def tokenize(self) -> List[Token]:
        while not self._at_end():
            ch = self._peek()
            if ch == "=":
                self._lex_equals()
            elif ch in DIGITS:
                self._lex_literal()
            elif ch == ";":
                self._flush()
                self._advance()
            elif ch in DELIMITERS:
                self._flush()
                line, column = self.line, self.column
                self._advance()
                self._push(DELIMITERS[ch], None, line, column)
            elif ch == "#":
                self._lex_directive()
            elif ch == "\\":
                self._skip_line()
            elif ch.isspace():
                self._flush()
                self._advance()
            elif ch.isalpha():
                if not self._buffer:
                    self._buffer_start = (self.line, self.column)
                self._buffer.append(self._advance())
            else:
                raise self._error(f"unrecognized character {ch!r}", self.line, self.column)
        self._flush()
        return self.tokens


def tokenize_source(text: str, source_name: str = "<string>") -> Tuple[List[Token], List[Diagnostic]]:
    """Lex `text` into tokens, returning them with any warnings raised on the way."""
    lexer = Lexer(text, source_name)
    tokens = lexer.tokenize()
    return tokens, lexer.warnings
