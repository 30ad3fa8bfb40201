"""
  Lisp Reader: Lexer and Parser

- The lexer turns one line of text into tokens; each token keeps its exact
  source text, and string tokens also carry their decoded contents.
- The parser is a recursive-descent reader with one token of lookahead that
  emits Mallet values:

    - nil / true / false -> Nil / True / False
    - integers -> int
    - symbols -> Symbol
    - :name -> Keyword("name")
    - strings -> str (escapes already resolved by the lexer)
    - ( ... ) -> List
    - [ ... ] -> Vector
    - { k v ... } -> HashMap (keys must be strings or keywords)
    - quote family and ^ metadata -> see reader_macros
"""

from __future__ import annotations

import re
from typing import Iterable, Iterator, NamedTuple, Optional

from mallet import SExpression
from mallet.types.collections import HashMap, List, Vector, is_valid_key
from mallet.types.errors import MalletLexicalError, MalletSyntaxError
from mallet.types.nil import EndOfInput, Nil
from mallet.types.symbol import Keyword, Symbol
from mallet.reader.reader_macros import reader_macros


SEPARATOR_RE = re.compile(r"[\s,]*")

TOKEN_RE = re.compile(
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<splice_unquote>~@)"  # ~@
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<lbracket>\[)"  # [
    r"|(?P<rbracket>\])"  # ]
    r"|(?P<lbrace>\{)"  # {
    r"|(?P<rbrace>\})"  # }
    r"|(?P<quote>')"  # '
    r"|(?P<quasiquote>`)"  # `
    r"|(?P<unquote>~)"  # ~
    r"|(?P<meta>\^)"  # ^
    r"|(?P<deref>@)"  # @
    r'|(?P<string>")'  # string start, scanned by _scan_string
    r"|(?P<symbol>[^\s\[\]{}()'\"`,;~^@]+)"  # symbols, numbers, keywords, literals
)

STRING_ESCAPES: dict[str, str] = {
    "\\": "\\",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    '"': '"',
}

INTEGER_RE = re.compile(r"[+-]?[0-9]+")

LITERALS: dict[str, SExpression] = {
    "nil": Nil,
    "true": True,
    "false": False,
}

CLOSERS: dict[str, str] = {
    "lparen": "rparen",
    "lbracket": "rbracket",
    "lbrace": "rbrace",
}

CLOSER_TEXT: dict[str, str] = {
    "rparen": ")",
    "rbracket": "]",
    "rbrace": "}",
}


class Token(NamedTuple):
    kind: str
    text: str
    value: str
    pos: int


def _scan_string(source: str, start: int) -> tuple[str, int]:
    """Decode the string literal opening at `start`; return (contents, end)."""
    pos = start + 1
    n = len(source)
    chars: list[str] = []
    while pos < n:
        ch = source[pos]
        if ch == '"':
            return "".join(chars), pos + 1
        if ch == "\\":
            pos += 1
            if pos >= n:
                raise MalletLexicalError("unterminated escape sequence at end of string", start)
            esc = source[pos]
            if esc not in STRING_ESCAPES:
                raise MalletLexicalError(f"unknown escape sequence '{esc}' in string", pos - 1)
            chars.append(STRING_ESCAPES[esc])
        else:
            chars.append(ch)
        pos += 1
    raise MalletLexicalError("unterminated string", start)


def lex(source: str) -> Iterator[Token]:
    """Token generator: yields Tokens in source order, skipping whitespace,
    commas and comments."""
    pos = 0
    n = len(source)

    while True:
        pos = SEPARATOR_RE.match(source, pos).end()
        if pos >= n:
            break
        # every non-separator character starts one of the token classes
        m = TOKEN_RE.match(source, pos)
        kind = m.lastgroup
        if kind == "comment":
            pos = m.end()
            continue
        if kind == "string":
            value, end = _scan_string(source, pos)
            yield Token(kind, source[pos:end], value, pos)
            pos = end
            continue
        text = m.group()
        yield Token(kind, text, text, pos)
        pos = m.end()


class TokenStream:
    def __init__(self, token_iter: Iterable[Token]):
        self.tokens = iter(token_iter)
        self.buffer: list[Token] = []

    def peek(self) -> Optional[Token]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None
        return self.buffer[0]

    def advance(self) -> Optional[Token]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, None)

    def parse_expr(self) -> Optional[SExpression]:
        """Read one form, or return None when no tokens remain."""
        tok = self.peek()
        if tok is None:
            return None

        # Reader macros first: ' ` ~ ~@ @ ^
        if reader_macros.is_macro(tok.text):
            self.advance()
            return reader_macros.dispatch(tok.text, self)

        if tok.kind == "lparen":
            self.advance()
            return List(self._parse_sequence("lparen", "list"))

        if tok.kind == "lbracket":
            self.advance()
            return Vector(self._parse_sequence("lbracket", "vector"))

        if tok.kind == "lbrace":
            self.advance()
            return self._parse_hashmap()

        if tok.kind in CLOSER_TEXT:
            raise MalletSyntaxError(f"unexpected '{tok.text}'", tok.pos)

        if tok.kind == "string":
            self.advance()
            return tok.value

        if tok.kind == "symbol":
            self.advance()
            return self._parse_atom(tok)

        raise MalletSyntaxError(f"token of unknown type: {tok.text!r}", tok.pos)

    def _parse_sequence(self, opener: str, what: str) -> list[SExpression]:
        closer = CLOSERS[opener]
        items: list[SExpression] = []
        while True:
            tok = self.peek()
            if tok is None:
                raise MalletSyntaxError(f"unterminated {what}")
            if tok.kind == closer:
                self.advance()
                return items
            if tok.kind in CLOSER_TEXT:
                raise MalletSyntaxError(
                    f"expected '{CLOSER_TEXT[closer]}', got '{tok.text}'", tok.pos
                )
            items.append(self.parse_expr())

    def _parse_hashmap(self) -> HashMap:
        from mallet.printer import pr_str

        result = HashMap()
        while True:
            tok = self.peek()
            if tok is None:
                raise MalletSyntaxError("unterminated hashmap")
            if tok.kind == "rbrace":
                self.advance()
                return result
            if tok.kind in CLOSER_TEXT:
                raise MalletSyntaxError(f"expected '}}', got '{tok.text}'", tok.pos)

            key = self.parse_expr()
            if not is_valid_key(key):
                raise MalletSyntaxError(
                    f"hashmap key must be a string or keyword, got {pr_str(key)}", tok.pos
                )

            tok = self.peek()
            if tok is None:
                raise MalletSyntaxError("unterminated hashmap")
            if tok.kind == "rbrace":
                raise MalletSyntaxError("last keyword in hashmap lacks value", tok.pos)
            if tok.kind in CLOSER_TEXT:
                raise MalletSyntaxError(f"expected '}}', got '{tok.text}'", tok.pos)
            result.assoc(key, self.parse_expr())

    @staticmethod
    def _parse_atom(tok: Token) -> SExpression:
        text = tok.text
        if text.startswith(":"):
            if len(text) == 1:
                raise MalletSyntaxError("keyword terminated too early", tok.pos)
            return Keyword(text[1:])
        if text in LITERALS:
            return LITERALS[text]
        if INTEGER_RE.fullmatch(text):
            return int(text)
        return Symbol(text)

    def parse_all(self) -> Iterator[SExpression]:
        while self.peek() is not None:
            yield self.parse_expr()


def read_str(text: Optional[str]) -> Optional[SExpression]:
    """Read the first form of a line.

    Returns EndOfInput when `text` is None (the line source is exhausted) and
    None when the line holds no form. The whole line is tokenized first, so a
    lexical error anywhere on the line is reported.
    """
    if text is None:
        return EndOfInput
    stream = TokenStream(list(lex(text)))
    return stream.parse_expr()
