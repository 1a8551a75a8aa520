from __future__ import annotations

"""
Static indexer for ITL documents. Never evaluates code.

Runs the lexer, parser and resolver with a collecting diagnostic sink and
walks the resulting AST for declarations. The result powers the language
server: diagnostics, document symbols, hover and completion.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from itl.builtin.natives import NATIVE_SIGNATURES
from itl.diagnostics import CollectingDiagnostics
from itl.errors import ItlSyntaxError
from itl.evaluation.resolver import Resolver
from itl.reader.lexer import lex
from itl.reader.parser import parse
from itl.reader.tokens import KEYWORDS, Token
from itl.types import nodes
from itl.types.nodes import Stmt


@dataclass
class SymbolDef:
    name: str
    kind: str  # "var" | "function" | "parameter"
    line: int  # 0-based
    col: int   # 0-based
    detail: str = ""


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    declarations: List[SymbolDef] = field(default_factory=list)
    errors: List[ItlSyntaxError] = field(default_factory=list)


def _column_of(lines: List[str], token: Token) -> int:
    # Tokens carry only a line; find the lexeme on that line for a column
    idx = token.line - 1
    if 0 <= idx < len(lines):
        col = lines[idx].find(token.lexeme)
        if col >= 0:
            return col
    return 0


def _def_for(lines: List[str], token: Token, kind: str, detail: str = "") -> SymbolDef:
    return SymbolDef(
        name=token.lexeme,
        kind=kind,
        line=max(token.line - 1, 0),
        col=_column_of(lines, token),
        detail=detail,
    )


def _collect(statements: Iterable[Stmt], lines: List[str], out: List[SymbolDef]) -> None:
    for stmt in statements:
        match stmt:
            case nodes.Var(name):
                out.append(_def_for(lines, name, "var"))
            case nodes.Function(name, params, body):
                signature = f"{name.lexeme}({', '.join(p.lexeme for p in params)})"
                out.append(_def_for(lines, name, "function", signature))
                for param in params:
                    out.append(_def_for(lines, param, "parameter"))
                _collect(body, lines, out)
            case nodes.Block(statements):
                _collect(statements, lines, out)
            case nodes.If(_, then_branch, else_branch):
                _collect([then_branch], lines, out)
                if else_branch is not None:
                    _collect([else_branch], lines, out)
            case nodes.While(_, body):
                _collect([body], lines, out)


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    diagnostics = CollectingDiagnostics()

    tokens = lex(text, diagnostics)
    statements = parse(tokens, diagnostics)
    if not diagnostics.had_error:
        # Resolution errors only make sense on a tree that parsed cleanly
        Resolver({}, diagnostics).resolve(statements)

    idx.errors = list(diagnostics.errors)

    lines = text.splitlines()
    _collect(statements, lines, idx.declarations)
    for sdef in idx.declarations:
        # First declaration wins for hover; later shadows stay in `declarations`
        idx.symbols.setdefault(sdef.name, sdef)
    return idx


def describe(word: str, idx: DocumentIndex) -> Optional[str]:
    """Hover text for `word`, or None when nothing is known about it."""
    if word in NATIVE_SIGNATURES:
        return NATIVE_SIGNATURES[word]
    if word.lower() in KEYWORDS:
        return f"{word.lower()} (keyword)"
    sdef = idx.symbols.get(word)
    if sdef is not None:
        label = sdef.detail or sdef.name
        return f"{label} — {sdef.kind} (defined at {sdef.line + 1}:{sdef.col + 1})"
    return None
