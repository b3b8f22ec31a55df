import dataclasses
import os
import sys

import pytest

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from vasc.errors import LexError
from vasc.lexer import tokenize_source
from vasc.tokens import TokenKind as K


def kinds(text):
    tokens, _ = tokenize_source(text)
    return [t.kind for t in tokens]


def test_declaration():
    tokens, warnings = tokenize_source("var x = 5;")
    assert [t.kind for t in tokens] == [K.LET, K.IDENTIFIER, K.ASSIGNMENT, K.SIZED_LITERAL]
    assert tokens[1].value == "x"
    assert tokens[3].value == 5
    assert warnings == []


def test_keywords():
    assert kinds("var free if iff frees") == [K.LET, K.FREE, K.CONDITIONAL, K.IDENTIFIER, K.IDENTIFIER]


def test_no_spaces_around_assignment():
    tokens, _ = tokenize_source("var x=5;var y=x;")
    assert [t.kind for t in tokens] == [
        K.LET, K.IDENTIFIER, K.ASSIGNMENT, K.SIZED_LITERAL,
        K.LET, K.IDENTIFIER, K.ASSIGNMENT, K.IDENTIFIER,
    ]
    assert tokens[7].value == "x"


def test_equality_operator():
    assert kinds("1==1") == [K.SIZED_LITERAL, K.EQUALITY, K.SIZED_LITERAL]
    assert kinds("1 == 1") == [K.SIZED_LITERAL, K.EQUALITY, K.SIZED_LITERAL]


def test_literal_then_identifier():
    tokens, _ = tokenize_source("007abc")
    assert [(t.kind, t.value) for t in tokens] == [(K.SIZED_LITERAL, 7), (K.IDENTIFIER, "abc")]


def test_delimiters():
    assert kinds("if (1 == 1) { }") == [
        K.CONDITIONAL, K.EXPR_START, K.SIZED_LITERAL, K.EQUALITY,
        K.SIZED_LITERAL, K.EXPR_END, K.BLOCK_START, K.BLOCK_END,
    ]


def test_semicolons_produce_no_tokens():
    assert kinds(";;;") == []
    assert kinds("") == []
    assert kinds("free x ; ;") == [K.FREE, K.IDENTIFIER]


def test_directive_is_kept_and_warned():
    tokens, warnings = tokenize_source("# define X\nvar x = 1;", "prog.vasc")
    assert tokens[0].kind is K.PREPROCESSOR_DIRECTIVE
    assert tokens[0].value == " define X"
    assert tokens[1].kind is K.LET
    assert tokens[1].line == 2
    assert len(warnings) == 1
    assert "not evaluated" in str(warnings[0])
    assert str(warnings[0]).startswith("prog.vasc:1:1:")


def test_directive_at_end_of_input():
    tokens, warnings = tokenize_source("var x = 1; #end")
    assert tokens[-1].kind is K.PREPROCESSOR_DIRECTIVE
    assert tokens[-1].value == "end"
    assert len(warnings) == 1


def test_backslash_discards_rest_of_line():
    assert kinds("\\ a comment with 123 and @ signs\nvar") == [K.LET]
    assert kinds("var x = 1; \\ trailing") == [K.LET, K.IDENTIFIER, K.ASSIGNMENT, K.SIZED_LITERAL]


def test_backslash_continues_identifier():
    tokens, _ = tokenize_source("fr\\ split keyword\nee x;")
    assert [t.kind for t in tokens] == [K.FREE, K.IDENTIFIER]


def test_unrecognized_character():
    with pytest.raises(LexError) as info:
        tokenize_source("var x = 5;\nvar y @ 3;")
    assert info.value.line == 2
    assert info.value.column == 7
    assert "unrecognized character '@'" in str(info.value)


def test_end_of_input_after_assignment():
    with pytest.raises(LexError, match="end of input after '='"):
        tokenize_source("var x =")


def test_tokens_are_immutable():
    tokens, _ = tokenize_source("{ }")
    with pytest.raises(dataclasses.FrozenInstanceError):
        tokens[0].value = 3


def test_positions():
    tokens, _ = tokenize_source("var x = 5;\n  free x;")
    assert [(t.line, t.column) for t in tokens] == [(1, 1), (1, 5), (1, 7), (1, 9), (2, 3), (2, 8)]
