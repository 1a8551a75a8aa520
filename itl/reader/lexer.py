"""
  ITL Lexer

- Single pass over the source text, regex driven
- Never raises: bad characters and unterminated strings go to the diagnostic
  sink and scanning carries on, so one pass can surface several errors
- Keywords are matched case-insensitively, identifiers stay case-sensitive
- Numbers become floats, strings keep their text without the quotes
"""

from __future__ import annotations

import re
from typing import Iterator, Optional

from itl.diagnostics import Diagnostics, CollectingDiagnostics
from itl.reader.tokens import KEYWORDS, Token, TokenType


TOKEN_RE = re.compile(
    r"(?P<newline>\n)"
    r"|(?P<space>[ \r\t]+)"
    r"|(?P<comment>#[^\n]*)"  # single-line comment
    r'|(?P<string>"[^"]*")'  # no escapes, may span lines
    r'|(?P<unterminated>"[^"]*\Z)'  # opening quote with no closing one
    r"|(?P<number>[0-9]+(?:\.[0-9]+)?)"  # no trailing-dot form
    r"|(?P<identifier>[A-Za-z_][A-Za-z0-9_]*)"
    r"|(?P<operator>!=|==|>=|<=|[(){},.\-+;/*!=<>])"
)

OPERATORS: dict[str, TokenType] = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    ";": TokenType.SEMICOLON,
    "/": TokenType.SLASH,
    "*": TokenType.STAR,
    "!": TokenType.BANG,
    "!=": TokenType.BANG_EQUAL,
    "=": TokenType.EQUAL,
    "==": TokenType.EQUAL_EQUAL,
    ">": TokenType.GREATER,
    ">=": TokenType.GREATER_EQUAL,
    "<": TokenType.LESS,
    "<=": TokenType.LESS_EQUAL,
}


class Lexer:
    def __init__(self, source: str, diagnostics: Optional[Diagnostics] = None):
        self.source = source
        self.diagnostics = diagnostics if diagnostics is not None else CollectingDiagnostics()
        self.line = 1

    def scan_tokens(self) -> list[Token]:
        tokens = list(self.iter_tokens())
        tokens.append(Token(TokenType.EOF, "", None, self.line))
        return tokens

    def iter_tokens(self) -> Iterator[Token]:
        """Token generator: yields every token except the EOF marker."""
        source = self.source
        pos = 0
        n = len(source)

        while pos < n:
            m = TOKEN_RE.match(source, pos)
            if m is None:
                self.diagnostics.error(self.line, "Unexpected character.")
                pos += 1
                continue

            pos = m.end()
            kind = m.lastgroup
            text = m.group()

            if kind == "newline":
                self.line += 1
            elif kind in ("space", "comment"):
                continue
            elif kind == "string":
                self.line += text.count("\n")
                yield Token(TokenType.STRING, text, text[1:-1], self.line)
            elif kind == "unterminated":
                self.line += text.count("\n")
                self.diagnostics.error(self.line, "Unterminated string.")
            elif kind == "number":
                yield Token(TokenType.NUMBER, text, float(text), self.line)
            elif kind == "identifier":
                token_type = KEYWORDS.get(text.lower(), TokenType.IDENTIFIER)
                yield Token(token_type, text, None, self.line)
            else:
                yield Token(OPERATORS[text], text, None, self.line)


def lex(source: str, diagnostics: Optional[Diagnostics] = None) -> list[Token]:
    """Scan `source` into a token list terminated by EOF."""
    return Lexer(source, diagnostics).scan_tokens()
