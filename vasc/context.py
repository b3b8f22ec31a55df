"""Per-compilation state threaded through code generation.

One `CompilerContext` exists per compilation.  It owns the resolved token
sequence and the cursor walking it, the symbol table, the slot table, the
block label stack and the lines emitted so far.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from vasc.errors import ParseError, SemanticError
from vasc.slots import SlotTable
from vasc.tokens import Token

# Register names used by the generated code.
PULL_REGISTER = "rax"
LEFT_REGISTER = "rbx"
RIGHT_REGISTER = "rcx"
RESULT_REGISTER = "rdx"


@dataclass
class CompilerContext:
    tokens: Sequence[Token]
    brackets: Dict[int, int]
    source_name: str = "<string>"
    comments: bool = True
    cursor: int = 0
    symbols: Dict[str, int] = field(default_factory=dict)
    slots: SlotTable = field(default_factory=SlotTable)
    scopes: List[int] = field(default_factory=list)
    # variable name -> output line number of the store that declares it
    declarations: Dict[str, int] = field(default_factory=dict)
    lines: List[str] = field(default_factory=list)

    # ---------------------------------------------------------------- cursor
    def at_end(self) -> bool:
        return self.cursor >= len(self.tokens)

    def current(self) -> Token:
        if self.at_end():
            raise self._eof_error("another token")
        return self.tokens[self.cursor]

    def advance(self, expected: str) -> Token:
        """Step onto the next token; `expected` names it in the error if input ran out."""
        self.cursor += 1
        if self.at_end():
            raise self._eof_error(expected)
        return self.tokens[self.cursor]

    def matching_end(self, index: Optional[int] = None) -> Optional[int]:
        return self.brackets.get(self.cursor if index is None else index)

    # -------------------------------------------------------------- emission
    def emit(self, instruction: str, comment: Optional[str] = None) -> str:
        line = instruction
        if comment and self.comments:
            line = f"{instruction} // {comment} //"
        self.lines.append(line)
        return line

    def text(self) -> str:
        return "".join(f"{line}\n" for line in self.lines)

    # ---------------------------------------------------------------- errors
    def parse_error(self, message: str, token: Token) -> ParseError:
        return ParseError(message, self.source_name, token.line, token.column)

    def semantic_error(self, message: str, token: Token) -> SemanticError:
        return SemanticError(message, self.source_name, token.line, token.column)

    def _eof_error(self, expected: str) -> ParseError:
        last = self.tokens[-1] if self.tokens else None
        line = last.line if last else None
        column = last.column if last else None
        return ParseError(f"unexpected end of input, expected {expected}",
                          self.source_name, line, column)
