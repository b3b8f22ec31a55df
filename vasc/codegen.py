"""Single-pass code generator over a bracket-resolved token sequence."""

from __future__ import annotations

from vasc.context import PULL_REGISTER, RESULT_REGISTER, CompilerContext
from vasc.expression import compile_condition
from vasc.tokens import Token, TokenKind


class CodeGenerator:
    def __init__(self, ctx: CompilerContext) -> None:
        self.ctx = ctx
        self.handlers = {
            TokenKind.LET: self._stmt_let,
            TokenKind.FREE: self._stmt_free,
            TokenKind.CONDITIONAL: self._stmt_if,
            TokenKind.PREPROCESSOR_DIRECTIVE: self._stmt_directive,
            TokenKind.BLOCK_START: self._block_start,
            TokenKind.BLOCK_END: self._block_end,
        }

    # ------------------------------------------------------------- statements
    def _stmt_let(self, token: Token) -> None:
        ctx = self.ctx
        slot = ctx.slots.allocate()

        name_token = ctx.advance("variable name after 'var'")
        if name_token.kind is not TokenKind.IDENTIFIER:
            raise ctx.parse_error(
                f"expected variable name after 'var', found {name_token.describe()}", name_token)
        name = name_token.name
        if name in ctx.symbols:
            raise ctx.semantic_error(f"redefinition of variable '{name}'", name_token)

        assign = ctx.advance(f"'=' after variable '{name}'")
        if assign.kind is not TokenKind.ASSIGNMENT:
            raise ctx.parse_error(
                f"expected '=' after variable '{name}', found {assign.describe()}", assign)

        value = ctx.advance(f"value for variable '{name}'")
        if value.kind is TokenKind.SIZED_LITERAL:
            ctx.emit(f"memset {slot} {value.literal}", f"VARIABLE : {name}")
        elif value.kind is TokenKind.IDENTIFIER:
            source = ctx.symbols.get(value.name)
            if source is None:
                raise ctx.semantic_error(f"undefined variable '{value.name}'", value)
            ctx.emit(f"mov {PULL_REGISTER} {source}", "MEMORY VALUE PULL")
            ctx.emit(f"memset {slot} {PULL_REGISTER}", f"ASSIGN MEMORY TO VARIABLE : {name}")
        else:
            raise ctx.parse_error(
                f"expected a literal or variable after '=', found {value.describe()}", value)

        ctx.symbols[name] = slot
        ctx.declarations[name] = len(ctx.lines)

    def _stmt_free(self, token: Token) -> None:
        ctx = self.ctx
        target = ctx.advance("variable name after 'free'")
        if target.kind is not TokenKind.IDENTIFIER:
            raise ctx.semantic_error(
                f"cannot free {target.describe()}, only variables can be freed", target)
        slot = ctx.symbols.get(target.name)
        if slot is None:
            raise ctx.semantic_error(f"freeing undefined variable '{target.name}'", target)
        ctx.slots.free(slot)
        del ctx.symbols[target.name]
        del ctx.declarations[target.name]

    def _stmt_if(self, token: Token) -> None:
        ctx = self.ctx
        compile_condition(ctx)

        end = None
        if not ctx.at_end() and ctx.current().kind is TokenKind.BLOCK_START:
            end = ctx.matching_end()
        if end is None:
            where = ctx.tokens[min(ctx.cursor, len(ctx.tokens) - 1)]
            raise ctx.parse_error("no block after conditional expression", where)

        ctx.emit(f"jg {RESULT_REGISTER} {end}", "SKIP BLOCK UNLESS CONDITION HOLDS")
        ctx.scopes.append(end)

    def _stmt_directive(self, token: Token) -> None:
        # Directives are not evaluated; the lexer already warned about them.
        pass

    def _block_start(self, token: Token) -> None:
        self.ctx.scopes.append(self.ctx.matching_end())

    def _block_end(self, token: Token) -> None:
        ctx = self.ctx
        end = ctx.scopes.pop()
        assert end == ctx.cursor, f"block stack out of sync at token {ctx.cursor}"
        ctx.emit(f"label {ctx.cursor}", "END OF BLOCK")

    # -------------------------------------------------------------- main pass
    def generate(self) -> str:
        ctx = self.ctx
        while not ctx.at_end():
            token = ctx.current()
            try:
                handler = self.handlers[token.kind]
            except KeyError as exc:
                raise ctx.parse_error(f"unrecognized token {token.describe()}", token) from exc
            handler(token)
            ctx.cursor += 1
        return ctx.text()
