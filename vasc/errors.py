"""Error and diagnostic types shared by every compiler phase.

Every error is fatal: the first one raised aborts the compilation and no
partial output is produced.  Warnings are collected as `Diagnostic` records
and handed back to the caller, who decides how to show them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


class VascError(RuntimeError):
    """Raised for user-facing compilation errors."""

    kind = "error"

    def __init__(self, message: str, source_name: str = "<string>",
                 line: Optional[int] = None, column: Optional[int] = None) -> None:
        self.message = message
        self.source_name = source_name
        self.line = line
        self.column = column
        super().__init__(self._render())

    def _render(self) -> str:
        where = self.source_name
        if self.line is not None:
            where += f":{self.line}"
            if self.column is not None:
                where += f":{self.column}"
        return f"{where}: {self.kind}: {self.message}"


class LexError(VascError):
    """Unrecognized character or input that ends inside a construct."""

    kind = "lex error"


class ParseError(VascError):
    """Unmatched delimiters or a token of the wrong kind."""

    kind = "syntax error"


class SemanticError(VascError):
    """Redefinitions, undefined names and invalid frees."""

    kind = "semantic error"


@dataclass(frozen=True)
class Diagnostic:
    message: str
    source_name: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.source_name}:{self.line}:{self.column}: {self.message}"
