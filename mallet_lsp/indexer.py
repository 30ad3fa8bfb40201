from __future__ import annotations

"""
Indexer for Mallet documents; nothing is evaluated.

The document is tokenized and read with the interpreter's own reader, so the
diagnostics match exactly what the REPL would report. Alongside, a token scan
collects `(def! name ...)` sites to power document symbols and completion.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from mallet.reader.parser import lex, Token, TokenStream
from mallet.types.errors import MalletLexicalError, MalletSyntaxError


@dataclass
class SymbolDef:
    name: str
    kind: str  # "var"
    line: int
    col: int


@dataclass
class ReaderProblem:
    message: str
    kind: str  # "lexical" | "parse"
    line: int
    col: int


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    problems: List[ReaderProblem] = field(default_factory=list)
    form_count: int = 0


def position_from_offset(text: str, offset: int) -> Tuple[int, int]:
    # Return (line, col), 0-based
    line = text.count("\n", 0, offset)
    last_nl = text.rfind("\n", 0, offset)
    col = offset if last_nl == -1 else offset - last_nl - 1
    return line, col


def _problem(text: str, exc: MalletLexicalError | MalletSyntaxError) -> ReaderProblem:
    # errors found at end of input carry no offset
    offset = exc.pos if exc.pos is not None else len(text)
    line, col = position_from_offset(text, offset)
    return ReaderProblem(message=exc.message, kind=exc.kind, line=line, col=col)


def _collect_definitions(text: str, tokens: List[Token], idx: DocumentIndex) -> None:
    for i in range(len(tokens) - 2):
        opener, head, name = tokens[i], tokens[i + 1], tokens[i + 2]
        if opener.kind == "lparen" and head.kind == "symbol" and head.text == "def!" and name.kind == "symbol":
            line, col = position_from_offset(text, name.pos)
            # first definition wins for navigation
            idx.symbols.setdefault(name.text, SymbolDef(name=name.text, kind="var", line=line, col=col))


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    try:
        tokens = list(lex(text))
    except MalletLexicalError as exc:
        idx.problems.append(_problem(text, exc))
        return idx

    _collect_definitions(text, tokens, idx)

    stream = TokenStream(tokens)
    try:
        for _ in stream.parse_all():
            idx.form_count += 1
    except MalletSyntaxError as exc:
        # the reader stops at its first error
        idx.problems.append(_problem(text, exc))
    except RecursionError:
        idx.problems.append(ReaderProblem("maximum nesting depth exceeded", "parse", 0, 0))
    return idx


def lookup_signature(name: str) -> Optional[str]:
    return BUILTIN_SIGNATURES.get(name)


# Builtin signatures for quick hover/signature help without eval
BUILTIN_SIGNATURES: Dict[str, str] = {
    "def!": "(def! name value)",
    "let*": "(let* (name value ...) body)",
    "+": "(+ &rest ints)",
    "-": "(- x &rest ints)",
    "*": "(* &rest ints)",
    "/": "(/ x &rest ints)",
    "<": "(< x &rest ints)",
    "<=": "(<= x &rest ints)",
    ">": "(> x &rest ints)",
    ">=": "(>= x &rest ints)",
    "=": "(= x &rest values)",
}
