"""Pair block and expression delimiters in a lexed token sequence."""

from __future__ import annotations

from typing import Dict, List, Sequence

from vasc.errors import ParseError
from vasc.tokens import OPENERS, Token, TokenKind

CLOSERS = {close: open_ for open_, close in OPENERS.items()}


def resolve_brackets(tokens: Sequence[Token], source_name: str = "<string>") -> Dict[int, int]:
    """Return a table mapping each opening token index to its closing index.

    Blocks and expressions are matched on separate stacks, so `{ ( } )` pairs
    up fine while `( }` fails on the unpaired brace.
    """
    pending: Dict[TokenKind, List[int]] = {kind: [] for kind in OPENERS}
    table: Dict[int, int] = {}

    for index, token in enumerate(tokens):
        if token.kind in OPENERS:
            pending[token.kind].append(index)
        elif token.kind in CLOSERS:
            stack = pending[CLOSERS[token.kind]]
            if not stack:
                raise ParseError(f"unpaired end bracket '{token.kind}'",
                                 source_name, token.line, token.column)
            table[stack.pop()] = index

    for kind, stack in pending.items():
        if stack:
            token = tokens[stack[-1]]
            raise ParseError(f"incomplete bracket pair: '{kind}' is never closed",
                             source_name, token.line, token.column)
    return table
