"""Compile VASC source text into VASM pseudo-assembly.

The pipeline runs strictly forward and performs no I/O:

    source text -> tokens (lexer) -> bracket table (resolver)
                -> instruction text (code generator)

Any `VascError` raised along the way aborts the whole compilation.

Example:

    >>> print(compile_text("var x = 5; var y = x;"), end="")
    memset 0 5 // VARIABLE : x //
    mov rax 0 // MEMORY VALUE PULL //
    memset 1 rax // ASSIGN MEMORY TO VARIABLE : y //
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from vasc.brackets import resolve_brackets
from vasc.codegen import CodeGenerator
from vasc.context import CompilerContext
from vasc.errors import Diagnostic
from vasc.lexer import tokenize_source
from vasc.tokens import Token


@dataclass(frozen=True)
class CompileOptions:
    # keep the trailing `// ... //` comments on generated lines
    comments: bool = True


@dataclass(frozen=True)
class CompileResult:
    text: str
    tokens: Tuple[Token, ...]
    brackets: Dict[int, int]
    warnings: Tuple[Diagnostic, ...]
    symbols: Dict[str, int]
    declarations: Dict[str, int]
    slot_map: str


def compile_source(text: str, source_name: str = "<string>",
                   options: Optional[CompileOptions] = None) -> CompileResult:
    options = options or CompileOptions()
    tokens, warnings = tokenize_source(text, source_name)
    brackets = resolve_brackets(tokens, source_name)
    ctx = CompilerContext(tokens=tuple(tokens), brackets=brackets,
                          source_name=source_name, comments=options.comments)
    output = CodeGenerator(ctx).generate()
    return CompileResult(
        text=output,
        tokens=tuple(tokens),
        brackets=dict(brackets),
        warnings=tuple(warnings),
        symbols=dict(ctx.symbols),
        declarations=dict(ctx.declarations),
        slot_map=ctx.slots.render_map(),
    )


def compile_text(text: str, source_name: str = "<string>",
                 options: Optional[CompileOptions] = None) -> str:
    return compile_source(text, source_name, options).text
