import pytest
from lsprotocol.types import (
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    Range,
    SymbolKind,
    TextDocumentContentChangeEvent_Type1,
    TextDocumentContentChangeEvent_Type2,
    TextDocumentIdentifier,
    TextDocumentItem,
    TextDocumentSyncKind,
    VersionedTextDocumentIdentifier,
)

from itl.builtin.natives import NATIVE_SIGNATURES
from itl_lsp import server
from itl_lsp.indexer import build_index, describe
from itl_lsp.server import _extract_word_at, build_diagnostics, completion_items, document_symbols

SOURCE = """var count = 1;
function add(a, b) {
  var total = a + b;
  return total;
}
"""


@pytest.fixture
def index():
    return build_index(SOURCE)


def test_declarations_are_collected_in_order(index):
    assert [(d.name, d.kind) for d in index.declarations] == [
        ("count", "var"),
        ("add", "function"),
        ("a", "parameter"),
        ("b", "parameter"),
        ("total", "var"),
    ]
    assert index.errors == []


def test_positions_are_zero_based(index):
    count, add = index.symbols["count"], index.symbols["add"]
    assert (count.line, count.col) == (0, 4)
    assert (add.line, add.col) == (1, 9)
    assert add.detail == "add(a, b)"
    assert (index.symbols["total"].line, index.symbols["total"].col) == (2, 6)


def test_describe(index):
    assert describe("add", index) == "add(a, b) — function (defined at 2:10)"
    assert describe("count", index) == "count — var (defined at 1:5)"
    assert describe("clock", index) == NATIVE_SIGNATURES["clock"]
    assert describe("While", index) == "while (keyword)"
    assert describe("nothing", index) is None


def test_syntax_errors_become_diagnostics():
    text = "print ;\nvar x = ;\n"
    idx = build_index(text)
    assert [e.message for e in idx.errors] == ["Expect expression.", "Expect expression."]

    diags = build_diagnostics(text, idx)
    assert [d.range.start.line for d in diags] == [0, 1]
    assert diags[0].message == "Error at ';': Expect expression."
    assert diags[0].severity == DiagnosticSeverity.Error
    assert diags[0].range.end.character == len("print ;")


def test_resolution_errors_are_reported():
    idx = build_index("return 1;\n{ var a = 1; var a = 2; }\n")
    assert [e.message for e in idx.errors] == [
        "Can't return from top-level code.",
        "Already a variable with this name in this scope.",
    ]
    assert [e.line for e in idx.errors] == [1, 2]


def test_resolution_skipped_when_parse_fails():
    idx = build_index("return 1;\nprint ;\n")
    assert [e.message for e in idx.errors] == ["Expect expression."]


def test_declarations_survive_errors():
    idx = build_index("var ok = 1;\nprint ;\nfunction f() {}\n")
    assert [d.name for d in idx.declarations] == ["ok", "f"]


def test_completion_items(index):
    labels = {item.label for item in completion_items(index)}
    assert {"var", "while", "clock", "count", "add", "total"} <= labels
    assert {item.label for item in completion_items(None)} >= {"print", "clock"}


def test_document_symbols_skip_parameters(index):
    symbols = document_symbols(index)
    assert [s.name for s in symbols] == ["count", "add", "total"]
    assert symbols[1].kind == SymbolKind.Function
    assert symbols[1].detail == "add(a, b)"
    assert symbols[0].kind == SymbolKind.Variable


@pytest.mark.parametrize(
    "line, character, expected",
    [(1, 10, "add"), (2, 8, "total"), (0, 0, "var"), (4, 1, None)],
)
def test_extract_word_at(line, character, expected):
    word, _ = _extract_word_at(SOURCE, Position(line=line, character=character))
    assert word == expected


@pytest.fixture
def published(monkeypatch):
    sent = {}
    monkeypatch.setattr(server.ls, "publish_diagnostics", lambda uri, diags: sent.__setitem__(uri, diags))
    return sent


def open_document(uri, text):
    server.did_open(DidOpenTextDocumentParams(
        text_document=TextDocumentItem(uri=uri, language_id="itl", version=1, text=text)
    ))


def change_document(uri, version, *changes):
    server.did_change(DidChangeTextDocumentParams(
        text_document=VersionedTextDocumentIdentifier(uri=uri, version=version),
        content_changes=list(changes),
    ))


def test_server_asks_for_full_document_sync():
    assert server.ls._text_document_sync_kind == TextDocumentSyncKind.Full


def test_ranged_change_edits_the_stored_text(published):
    uri = "file:///tmp/ranged.itl"
    open_document(uri, "var a = 1;\nprint a;\n")
    edit = Range(start=Position(line=0, character=4), end=Position(line=0, character=5))
    change_document(uri, 2, TextDocumentContentChangeEvent_Type1(range=edit, text="b"))
    state = server.ls.documents[uri]
    assert state.text == "var b = 1;\nprint a;\n"
    assert [d.name for d in state.index.declarations] == ["b"]
    assert published[uri] == []


def test_full_change_replaces_the_text(published):
    uri = "file:///tmp/full.itl"
    open_document(uri, "var a = 1;\n")
    change_document(uri, 2, TextDocumentContentChangeEvent_Type2(text="print ;\n"))
    assert server.ls.documents[uri].text == "print ;\n"
    assert [d.message for d in published[uri]] == ["Error at ';': Expect expression."]


def test_changes_apply_in_order(published):
    uri = "file:///tmp/ordered.itl"
    open_document(uri, "")
    change_document(
        uri, 2,
        TextDocumentContentChangeEvent_Type2(text="var x = 1;\n"),
        TextDocumentContentChangeEvent_Type1(
            range=Range(start=Position(line=1, character=0), end=Position(line=1, character=0)),
            text="var y = x;\n",
        ),
    )
    assert server.ls.documents[uri].text == "var x = 1;\nvar y = x;\n"
    server.did_close(DidCloseTextDocumentParams(text_document=TextDocumentIdentifier(uri=uri)))
    assert uri not in server.ls.documents
    assert published[uri] == []
