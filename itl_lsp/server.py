from __future__ import annotations

"""
A minimal pygls-based Language Server for ITL.

Features:
- Text synchronization and document store
- Diagnostics: lexer, parser and resolver errors
- Hover: native signatures, keywords and declared symbols
- Completion: keywords, natives, declared symbols
- Document Symbols: from indexer

Note: We avoid evaluating the buffer. We build a static index per document.
"""

import logging
from typing import Dict, Optional, List
from dataclasses import dataclass

from pygls.server import LanguageServer
from pygls.workspace import TextDocument
from lsprotocol.types import (
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
    CompletionParams,
    HoverParams,
    DocumentSymbolParams,
    DocumentSymbol,
    SymbolKind,
    TextDocumentSyncKind,
)

from itl.builtin.natives import NATIVE_SIGNATURES
from itl.reader.tokens import KEYWORDS
from itl_lsp.indexer import build_index, describe, DocumentIndex

logger = logging.getLogger(__name__)


@dataclass
class DocumentState:
    text: str
    index: DocumentIndex


class ItlLanguageServer(LanguageServer):
    CMD_NAME = "itl-ls"

    def __init__(self):
        super().__init__(self.CMD_NAME, "v0.1.0", text_document_sync_kind=TextDocumentSyncKind.Full)
        self.documents: Dict[str, DocumentState] = {}


ls = ItlLanguageServer()


# initialize, shutdown and exit are answered by pygls itself; capabilities
# are derived from the features registered below and the sync kind above.


# --- Text sync ---
@ls.feature("textDocument/didOpen")
def did_open(params: DidOpenTextDocumentParams):
    uri = params.text_document.uri
    text = params.text_document.text or ""
    update_document(uri, text)


@ls.feature("textDocument/didChange")
def did_change(params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    state = ls.documents.get(uri)
    # Ranged events are applied in order; a range-less event replaces the text
    document = TextDocument(uri, source=state.text if state else "")
    for change in params.content_changes:
        document.apply_change(change)
    text = document.source
    update_document(uri, text)


@ls.feature("textDocument/didClose")
def did_close(params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    if uri in ls.documents:
        del ls.documents[uri]
    ls.publish_diagnostics(uri, [])


def update_document(uri: str, text: str) -> None:
    idx = build_index(text)
    ls.documents[uri] = DocumentState(text=text, index=idx)
    logger.debug("indexed %s: %d errors, %d declarations", uri, len(idx.errors), len(idx.declarations))
    ls.publish_diagnostics(uri, build_diagnostics(text, idx))


# --- Diagnostics ---
def _line_range(text: str, line: int) -> Range:
    lines = text.splitlines()
    width = len(lines[line]) if 0 <= line < len(lines) else 0
    return Range(start=Position(line=line, character=0), end=Position(line=line, character=width))


def build_diagnostics(text: str, idx: DocumentIndex) -> List[Diagnostic]:
    diags: List[Diagnostic] = []
    for error in idx.errors:
        line = max(error.line - 1, 0)
        diags.append(
            Diagnostic(
                range=_line_range(text, line),
                message=f"Error{error.where}: {error.message}",
                severity=DiagnosticSeverity.Error,
                source="itl-ls",
            )
        )
    return diags


# --- Hover ---
@ls.feature("textDocument/hover")
def on_hover(params: HoverParams) -> Optional[Hover]:
    uri = params.text_document.uri
    state = ls.documents.get(uri)
    if not state:
        return None

    word, _ = _extract_word_at(state.text, params.position)
    if not word:
        return None

    contents = describe(word, state.index)
    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


# --- Completion ---
def completion_items(idx: Optional[DocumentIndex]) -> List[CompletionItem]:
    items: List[CompletionItem] = []
    for keyword in KEYWORDS:
        items.append(CompletionItem(label=keyword, kind=CompletionItemKind.Keyword))
    for name, sig in NATIVE_SIGNATURES.items():
        items.append(CompletionItem(label=name, kind=CompletionItemKind.Function, detail=sig))
    if idx is not None:
        for name, sdef in idx.symbols.items():
            kind = CompletionItemKind.Function if sdef.kind == "function" else CompletionItemKind.Variable
            items.append(CompletionItem(label=name, kind=kind, detail=sdef.detail or None))
    return items


@ls.feature("textDocument/completion")
def on_completion(params: CompletionParams) -> CompletionList:
    state = ls.documents.get(params.text_document.uri)
    return CompletionList(is_incomplete=False, items=completion_items(state.index if state else None))


# --- Document Symbols ---
def document_symbols(idx: DocumentIndex) -> List[DocumentSymbol]:
    symbols: List[DocumentSymbol] = []
    for sdef in idx.declarations:
        if sdef.kind == "parameter":
            continue
        rng = Range(
            start=Position(line=sdef.line, character=sdef.col),
            end=Position(line=sdef.line, character=sdef.col + len(sdef.name)),
        )
        symbols.append(
            DocumentSymbol(
                name=sdef.name,
                detail=sdef.detail or None,
                kind=SymbolKind.Function if sdef.kind == "function" else SymbolKind.Variable,
                range=rng,
                selection_range=rng,
            )
        )
    return symbols


@ls.feature("textDocument/documentSymbol")
def on_document_symbols(params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    return document_symbols(state.index)


# --- Helpers ---

def _extract_word_at(text: str, pos: Position) -> tuple[Optional[str], Position]:
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return None, pos
    line = lines[pos.line]
    i = pos.character
    # expand to identifier boundaries
    start = i
    while start > 0 and (line[start - 1].isalnum() or line[start - 1] == "_"):
        start -= 1
    end = i
    while end < len(line) and (line[end].isalnum() or line[end] == "_"):
        end += 1
    word = line[start:end]
    return (word if word else None), Position(line=pos.line, character=start)


def main() -> None:
    """Run the language server over stdio."""
    logging.basicConfig(level=logging.INFO)
    ls.start_io()


if __name__ == "__main__":
    main()
