from .compiler import CompileOptions, CompileResult, compile_source, compile_text
from .errors import LexError, ParseError, SemanticError, VascError

__all__ = [
    'CompileOptions',
    'CompileResult',
    'compile_source',
    'compile_text',
    'VascError',
    'LexError',
    'ParseError',
    'SemanticError',
]
