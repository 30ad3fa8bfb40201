import re

import pytest
from hypothesis import given, strategies as st

from mallet.builtin.env_builtin import is_equal
from mallet.printer import pr_str
from mallet.reader.parser import lex, read_str, TokenStream
from mallet.types.collections import HashMap, List, Vector
from mallet.types.errors import MalletLexicalError, MalletSyntaxError
from mallet.types.nil import EndOfInput, Nil
from mallet.types.symbol import Keyword, Symbol


@pytest.mark.parametrize(
    "source,expected",
    [
        ("a", [("symbol", "a")]),
        ("'a", [("quote", "'"), ("symbol", "a")]),
        ("`a", [("quasiquote", "`"), ("symbol", "a")]),
        ("~a", [("unquote", "~"), ("symbol", "a")]),
        ("~@a", [("splice_unquote", "~@"), ("symbol", "a")]),
        ("@a", [("deref", "@"), ("symbol", "a")]),
        ("^m", [("meta", "^"), ("symbol", "m")]),
        ("(a b c)", [("lparen", "("), ("symbol", "a"), ("symbol", "b"), ("symbol", "c"), ("rparen", ")")]),
        ("[1, 2]", [("lbracket", "["), ("symbol", "1"), ("symbol", "2"), ("rbracket", "]")]),
        ('{:a "x"}', [("lbrace", "{"), ("symbol", ":a"), ("string", '"x"'), ("rbrace", "}")]),
        (" ; comment\n a b", [("symbol", "a"), ("symbol", "b")]),
        ("a ; trailing", [("symbol", "a")]),
        ("a~b", [("symbol", "a"), ("unquote", "~"), ("symbol", "b")]),
        ("def! let* <= -12", [("symbol", "def!"), ("symbol", "let*"), ("symbol", "<="), ("symbol", "-12")]),
        (" ,, \t\n", []),
        ("", []),
    ]
)
def test_lexer_basic(source, expected):
    tokens = [(tok.kind, tok.text) for tok in lex(source)]
    assert tokens == expected


@pytest.mark.parametrize(
    "source,value",
    [
        ('"hello"', "hello"),
        ('""', ""),
        ('"a\\nb"', "a\nb"),
        ('"a\\tb\\r"', "a\tb\r"),
        ('"say \\"hi\\""', 'say "hi"'),
        ('"back\\\\slash"', "back\\slash"),
        ('"a ; b (c)"', "a ; b (c)"),
    ]
)
def test_lexer_string_escapes(source, value):
    (tok,) = list(lex(source))
    assert tok.kind == "string"
    assert tok.text == source
    assert tok.value == value


def test_lexer_records_positions():
    assert [tok.pos for tok in lex('(ab  "c")')] == [0, 1, 5, 8]


@pytest.mark.parametrize(
    "source,message",
    [
        ('"abc', "unterminated string"),
        ('"abc\\"', "unterminated string"),
        ('"abc\\', "unterminated escape sequence at end of string"),
        ('"a\\qb"', "unknown escape sequence 'q' in string"),
    ]
)
def test_lexer_errors(source, message):
    with pytest.raises(MalletLexicalError, match=re.escape(message)):
        list(lex(source))


@pytest.mark.parametrize(
    "source, expected",
    [
        ("nil", Nil),
        ("123", 123),
        ("-45", -45),
        ("+7", 7),
        ("-", Symbol("-")),
        ("abc", Symbol("abc")),
        ("1a", Symbol("1a")),
        (":kw", Keyword("kw")),
        ('"hello"', "hello"),
        ("()", List([])),
        ("(1 2)", List([1, 2])),
        ("[1 (2)]", Vector([1, List([2])])),
        ("((a b) [c])", List([List([Symbol("a"), Symbol("b")]), Vector([Symbol("c")])])),
        ("'a", List([Symbol("quote"), Symbol("a")])),
        ("`(a ~b ~@c)", List([
            Symbol("quasiquote"),
            List([
                Symbol("a"),
                List([Symbol("unquote"), Symbol("b")]),
                List([Symbol("splice-unquote"), Symbol("c")]),
            ]),
        ])),
        ("@a", List([Symbol("deref"), Symbol("a")])),
        ("^{:a 1} [1]", List([Symbol("with-meta"), Vector([1]), HashMap([Keyword("a")], [1])])),
        ('{"a" 1 :b (2)}', HashMap(["a", Keyword("b")], [1, List([2])])),
        ("{}", HashMap()),
        ("1 2 3", 1),
    ]
)
def test_parser(source, expected):
    assert read_str(source) == expected


@pytest.mark.parametrize("source, expected", [("true", True), ("false", False)])
def test_parser_booleans(source, expected):
    assert read_str(source) is expected


def test_list_and_vector_are_distinct():
    assert read_str("(1 2)") != read_str("[1 2]")


def test_no_form_and_end_of_input():
    assert read_str("") is None
    assert read_str("   ; only a comment") is None
    assert read_str(None) is EndOfInput


def test_parse_all_reads_every_form():
    stream = TokenStream(lex("(def! a 1) :k [2]"))
    assert list(stream.parse_all()) == [
        List([Symbol("def!"), Symbol("a"), 1]),
        Keyword("k"),
        Vector([2]),
    ]


@pytest.mark.parametrize(
    "source,message",
    [
        ("(1 2", "unterminated list"),
        ("[1 2", "unterminated vector"),
        ("{:a 1", "unterminated hashmap"),
        ("{:a", "unterminated hashmap"),
        ("(1 ]", "expected ')', got ']'"),
        ("[1 )", "expected ']', got ')'"),
        ("{:a 1 )", "expected '}', got ')'"),
        ("{1 2}", "hashmap key must be a string or keyword, got 1"),
        ("{(a) 2}", "hashmap key must be a string or keyword, got (a)"),
        ("{:a}", "last keyword in hashmap lacks value"),
        (")", "unexpected ')'"),
        (":", "keyword terminated too early"),
        ("'", "expected a form after '''"),
        ("^{:a 1}", "expected a form after '^'"),
        ("((1 2)", "unterminated list"),
    ]
)
def test_parser_errors(source, message):
    with pytest.raises(MalletSyntaxError, match=re.escape(message)):
        read_str(source)


def test_lexical_error_anywhere_on_the_line():
    with pytest.raises(MalletLexicalError):
        read_str('(1) "abc')


def test_strings_do_not_alias_the_source():
    line = '"abc"'
    value = read_str(line)
    assert value == "abc"
    assert value is not line


# -------------------------------
# Strategies
# -------------------------------
symbol_strat = st.from_regex(r"[a-z*!?<>=_][a-z0-9*!?<>=_-]{0,8}", fullmatch=True).filter(
    lambda s: s not in ("nil", "true", "false")
).map(Symbol)

keyword_strat = st.from_regex(r"[a-z][a-z0-9-]{0,8}", fullmatch=True).map(Keyword)

atom_strat = st.one_of(
    st.integers(min_value=-(2**63), max_value=2**63 - 1),
    st.text(max_size=20),
    symbol_strat,
    keyword_strat,
    st.sampled_from([Nil, True, False]),
)

key_strat = st.one_of(st.text(max_size=10), keyword_strat)


def _hashmap(entries):
    return HashMap([k for k, _ in entries], [v for _, v in entries])


value_strat = st.recursive(
    atom_strat,
    lambda children: st.one_of(
        st.lists(children, max_size=5).map(List),
        st.lists(children, max_size=5).map(Vector),
        st.lists(st.tuples(key_strat, children), max_size=4).map(_hashmap),
    ),
    max_leaves=20,
)


# -------------------------------
# Hypothesis tests
# -------------------------------
@given(value_strat)
def test_print_then_read_round_trip(value):
    source = pr_str(value, readable=True)
    assert is_equal(read_str(source), value), source


@given(st.text(max_size=40))
def test_lexer_is_total(source):
    # Either tokenizes or reports a lexical error; nothing else escapes.
    try:
        list(lex(source))
    except MalletLexicalError:
        pass
