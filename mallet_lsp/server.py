from __future__ import annotations

"""
A minimal pygls-based Language Server for Mallet.

Features:
- Text synchronization (full document) and document store
- Diagnostics: lexical and parse errors reported by the Mallet reader
- Hover: builtin signatures and `def!` names defined in the document
- Completion: builtins and `def!` names
- Signature Help: for builtins and special forms
- Document Symbols: from indexer

Note: We never evaluate the buffer. We build a static index per document.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from pygls.server import LanguageServer
from lsprotocol.types import (
    TextDocumentSyncKind,
    DidOpenTextDocumentParams,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    Diagnostic,
    DiagnosticSeverity,
    Position,
    Range,
    Hover,
    MarkupContent,
    MarkupKind,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    HoverParams,
    DocumentSymbolParams,
    DocumentSymbol,
    SymbolKind,
    SignatureHelp,
    SignatureHelpOptions,
    SignatureInformation,
    ParameterInformation,
    SignatureHelpParams,
)

from mallet import __version__
from mallet_lsp.indexer import build_index, lookup_signature, BUILTIN_SIGNATURES, DocumentIndex

logger = logging.getLogger(__name__)

SOURCE = "mallet-ls"
WORD_BREAKS = " \t()[]{}'`~^@,\";\n\r"


@dataclass
class DocumentState:
    text: str
    index: DocumentIndex


class MalletLanguageServer(LanguageServer):
    CMD_NAME = "mallet-ls"

    def __init__(self):
        super().__init__(self.CMD_NAME, __version__, text_document_sync_kind=TextDocumentSyncKind.Full)
        self.documents: Dict[str, DocumentState] = {}


ls = MalletLanguageServer()


# --- Text sync ---
@ls.feature("textDocument/didOpen")
def did_open(params: DidOpenTextDocumentParams):
    uri = params.text_document.uri
    _update_document(uri, params.text_document.text or "")


@ls.feature("textDocument/didChange")
def did_change(params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    if params.content_changes:
        text = params.content_changes[-1].text
    else:
        text = ls.documents[uri].text if uri in ls.documents else ""
    _update_document(uri, text)


@ls.feature("textDocument/didClose")
def did_close(params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    if uri in ls.documents:
        del ls.documents[uri]
    ls.publish_diagnostics(uri, [])


def _update_document(uri: str, text: str) -> None:
    idx = build_index(text)
    logger.debug("indexed %s: %d forms, %d problems", uri, idx.form_count, len(idx.problems))
    ls.documents[uri] = DocumentState(text=text, index=idx)
    ls.publish_diagnostics(uri, build_diagnostics(idx))


# --- Diagnostics ---
def _mk_range(line: int, col: int, length: int = 1) -> Range:
    return Range(start=Position(line=line, character=col), end=Position(line=line, character=col + length))


def build_diagnostics(idx: DocumentIndex) -> List[Diagnostic]:
    return [
        Diagnostic(
            range=_mk_range(p.line, p.col),
            message=p.message,
            severity=DiagnosticSeverity.Error,
            source=SOURCE,
            code=p.kind,
        )
        for p in idx.problems
    ]


# --- Hover ---
@ls.feature("textDocument/hover")
def on_hover(params: HoverParams) -> Optional[Hover]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    contents = hover_text(state, extract_word_at(state.text, params.position))
    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


def hover_text(state: DocumentState, word: Optional[str]) -> Optional[str]:
    if not word:
        return None
    sig = lookup_signature(word)
    if sig is not None:
        return sig
    sdef = state.index.symbols.get(word)
    if sdef is not None:
        return f"{word}: {sdef.kind} (defined at {sdef.line+1}:{sdef.col+1})"
    return None


# --- Completion ---
@ls.feature("textDocument/completion", CompletionOptions(trigger_characters=["("]))
def on_completion(params: CompletionParams) -> CompletionList:
    state = ls.documents.get(params.text_document.uri)
    items: List[CompletionItem] = []
    for name, sig in BUILTIN_SIGNATURES.items():
        items.append(CompletionItem(label=name, kind=CompletionItemKind.Function, detail=sig))
    if state:
        for name in state.index.symbols:
            items.append(CompletionItem(label=name, kind=CompletionItemKind.Variable))
    return CompletionList(is_incomplete=False, items=items)


# --- Signature Help ---
@ls.feature("textDocument/signatureHelp", SignatureHelpOptions(trigger_characters=["(", " "]))
def on_signature_help(params: SignatureHelpParams) -> Optional[SignatureHelp]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None

    callee = extract_callee_name(get_line_prefix(state.text, params.position))
    sig = lookup_signature(callee) if callee else None
    if not sig:
        return None

    # parameters are the words after the callee name
    params_list = sig.strip("()").split()[1:]
    parameters = [ParameterInformation(label=p) for p in params_list]
    return SignatureHelp(
        signatures=[SignatureInformation(label=sig, parameters=parameters)],
        active_signature=0,
        active_parameter=0,
    )


# --- Document Symbols ---
@ls.feature("textDocument/documentSymbol")
def on_document_symbols(params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    symbols: List[DocumentSymbol] = []
    for name, sdef in state.index.symbols.items():
        rng = _mk_range(sdef.line, sdef.col, len(name))
        symbols.append(DocumentSymbol(name=name, kind=SymbolKind.Variable, range=rng, selection_range=rng))
    return symbols


# --- Helpers ---

def get_line_prefix(text: str, pos: Position) -> str:
    # Return the text from start of line up to pos
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return ""
    return lines[pos.line][: pos.character]


def extract_word_at(text: str, pos: Position) -> Optional[str]:
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return None
    line = lines[pos.line]
    start = end = min(pos.character, len(line))
    while start > 0 and line[start - 1] not in WORD_BREAKS:
        start -= 1
    while end < len(line) and line[end] not in WORD_BREAKS:
        end += 1
    return line[start:end] or None


def extract_callee_name(prefix: str) -> Optional[str]:
    # find last '(' and take following token
    lp = prefix.rfind("(")
    if lp == -1:
        return None
    tail = prefix[lp + 1:].split()
    return tail[0] if tail else None


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    # Run the language server over stdio
    ls.start_io()


if __name__ == "__main__":
    main()
