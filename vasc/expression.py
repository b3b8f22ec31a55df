"""Conditional expressions: `( <literal> == <literal> )`.

Recognition and emission are kept apart.  `parse_comparison` walks the
tokens and builds a `Comparison`; `emit_comparison` turns that tree into
code.  Widening the grammar (identifier operands, other operators) only
touches the parser side plus a new emitter case.

The generated code loads each operand through a scratch slot, compares the
two registers and inverts the result, since the branch that follows jumps
*over* the block when its register is greater than zero:

    memset 0 1 // CONDITION OPERAND //
    mov rbx 0 // LEFT OPERAND //
    memset 1 1 // CONDITION OPERAND //
    mov rcx 1 // RIGHT OPERAND //
    cmpeq rdx rbx rcx // EQUALITY //
    not rdx // INVERT FOR BRANCH //

Both operands are loaded before `cmpeq` runs, so the compare and invert
follow the right operand load rather than sitting between the two loads.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from vasc.context import (
    LEFT_REGISTER,
    RESULT_REGISTER,
    RIGHT_REGISTER,
    CompilerContext,
)
from vasc.tokens import Token, TokenKind


@dataclass(frozen=True)
class Literal:
    value: int
    token: Token


@dataclass(frozen=True)
class Comparison:
    op: TokenKind
    left: Literal
    right: Literal


def _operand(ctx: CompilerContext, side: str) -> Literal:
    token = ctx.advance(f"{side} operand")
    if token.kind is not TokenKind.SIZED_LITERAL:
        raise ctx.parse_error(
            f"expected a literal as {side} operand, found {token.describe()}", token)
    return Literal(token.literal, token)


def parse_comparison(ctx: CompilerContext) -> Comparison:
    """Recognize the condition following the `if` under the cursor.

    Leaves the cursor one past the closing `)`.
    """
    start = ctx.advance("'(' after 'if'")
    if start.kind is not TokenKind.EXPR_START:
        raise ctx.parse_error(f"expected '(' after 'if', found {start.describe()}", start)
    close = ctx.matching_end()

    left = _operand(ctx, "left")
    op = ctx.advance("comparison operator")
    if op.kind is not TokenKind.EQUALITY:
        raise ctx.parse_error(
            f"unsupported operator {op.describe()}, only '==' is supported", op)
    right = _operand(ctx, "right")

    end = ctx.advance("')' after comparison")
    if end.kind is not TokenKind.EXPR_END or ctx.cursor != close:
        raise ctx.parse_error(f"expected ')' after comparison, found {end.describe()}", end)
    ctx.cursor += 1
    return Comparison(op.kind, left, right)


def emit_comparison(ctx: CompilerContext, comparison: Comparison) -> List[str]:
    emitted: List[str] = []

    left_slot = ctx.slots.allocate()
    emitted.append(ctx.emit(f"memset {left_slot} {comparison.left.value}", "CONDITION OPERAND"))
    emitted.append(ctx.emit(f"mov {LEFT_REGISTER} {left_slot}", "LEFT OPERAND"))

    right_slot = ctx.slots.allocate()
    emitted.append(ctx.emit(f"memset {right_slot} {comparison.right.value}", "CONDITION OPERAND"))
    emitted.append(ctx.emit(f"mov {RIGHT_REGISTER} {right_slot}", "RIGHT OPERAND"))

    emitted.append(ctx.emit(
        f"cmpeq {RESULT_REGISTER} {LEFT_REGISTER} {RIGHT_REGISTER}", "EQUALITY"))
    emitted.append(ctx.emit(f"not {RESULT_REGISTER}", "INVERT FOR BRANCH"))

    # the registers hold the operands now
    ctx.slots.free(left_slot)
    ctx.slots.free(right_slot)
    return emitted


def compile_condition(ctx: CompilerContext) -> List[str]:
    """Parse and emit one condition, returning the lines it produced."""
    return emit_comparison(ctx, parse_comparison(ctx))
