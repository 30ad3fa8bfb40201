"""Reader macros: prefix tokens that rewrite the following form(s).

    'x       => (quote x)
    `x       => (quasiquote x)
    ~x       => (unquote x)
    ~@x      => (splice-unquote x)
    @x       => (deref x)
    ^meta x  => (with-meta x meta)
"""

from __future__ import annotations

from typing import Callable, TYPE_CHECKING

from mallet import SExpression
from mallet.types.collections import List
from mallet.types.errors import MalletSyntaxError
from mallet.types.symbol import Symbol

if TYPE_CHECKING:
    from mallet.reader.parser import TokenStream

ReaderMacroFn = Callable[["TokenStream", str], SExpression]


def _required_form(stream: TokenStream, char: str) -> SExpression:
    expr = stream.parse_expr()
    if expr is None:
        raise MalletSyntaxError(f"expected a form after '{char}'")
    return expr


class ReaderMacros:
    """Registry mapping a prefix token's text to the function that expands it."""

    def __init__(self):
        self.macros: dict[str, ReaderMacroFn] = {}

    def define(self, char: str, fn: ReaderMacroFn) -> None:
        """Register a reader macro for a given character or sequence."""
        self.macros[char] = fn

    def is_macro(self, char: str) -> bool:
        return char in self.macros

    def dispatch(self, char: str, stream: TokenStream) -> SExpression:
        """Expand the macro for `char`; the prefix token is already consumed."""
        if char not in self.macros:
            raise MalletSyntaxError(f"no reader macro defined for {char!r}")
        return self.macros[char](stream, char)


def _wrap_with(name: Symbol) -> ReaderMacroFn:
    def expand(stream: TokenStream, char: str) -> SExpression:
        return List([name, _required_form(stream, char)])
    return expand


def _with_meta(stream: TokenStream, char: str) -> SExpression:
    # metadata is written first but goes last in the expansion
    meta = _required_form(stream, char)
    target = _required_form(stream, char)
    return List([Symbol("with-meta"), target, meta])


# -------------------------
# Single global instance
# -------------------------
reader_macros: ReaderMacros = ReaderMacros()

QUOTE_FORMS: dict[str, Symbol] = {
    "'": Symbol("quote"),
    "`": Symbol("quasiquote"),
    "~": Symbol("unquote"),
    "~@": Symbol("splice-unquote"),
    "@": Symbol("deref"),
}

for key, name in QUOTE_FORMS.items():
    reader_macros.define(key, _wrap_with(name))

reader_macros.define("^", _with_meta)
