"""Diagnostic sinks for the ITL core.

The lexer, parser and resolver report static errors here and keep going; the
interpreter reports the single runtime error that aborted a pass. Hosts pick a
sink: the console one for the CLI, the collecting one for the language server
and for tests.
"""

from __future__ import annotations

import sys
from typing import TextIO

from termcolor import colored

from itl.config import use_color
from itl.errors import ItlRuntimeError, ItlSyntaxError
from itl.reader.tokens import Token, TokenType


class Diagnostics:
    """Base sink: tracks the error flags and formats static errors."""

    def __init__(self) -> None:
        self.had_error = False
        self.had_runtime_error = False

    def reset(self) -> None:
        self.had_error = False

    def error(self, line: int, message: str) -> None:
        self.report(ItlSyntaxError(line, message))

    def error_at(self, token: Token, message: str) -> None:
        if token.type is TokenType.EOF:
            where = " at end"
        else:
            where = f" at '{token.lexeme}'"
        self.report(ItlSyntaxError(token.line, message, where))

    def report(self, error: ItlSyntaxError) -> None:
        self.had_error = True
        self.on_static_error(error)

    def runtime_error(self, error: ItlRuntimeError) -> None:
        self.had_runtime_error = True
        self.on_runtime_error(error)

    # Hooks for subclasses
    def on_static_error(self, error: ItlSyntaxError) -> None:
        pass

    def on_runtime_error(self, error: ItlRuntimeError) -> None:
        pass


class CollectingDiagnostics(Diagnostics):
    """Keeps every reported error in memory."""

    def __init__(self) -> None:
        super().__init__()
        self.errors: list[ItlSyntaxError] = []
        self.runtime_errors: list[ItlRuntimeError] = []

    def on_static_error(self, error: ItlSyntaxError) -> None:
        self.errors.append(error)

    def on_runtime_error(self, error: ItlRuntimeError) -> None:
        self.runtime_errors.append(error)

    @property
    def messages(self) -> list[str]:
        return [e.message for e in self.errors]


class ConsoleDiagnostics(Diagnostics):
    """Writes errors to a stream (stderr by default), colored when enabled."""
    ERROR = "red"

    def __init__(self, stream: TextIO | None = None, color: bool | None = None):
        super().__init__()
        self.stream = stream if stream is not None else sys.stderr
        self.color = use_color() if color is None else color

    def _paint(self, text: str, *attrs: str) -> str:
        if not self.color:
            return text
        return colored(text, ConsoleDiagnostics.ERROR, attrs=list(attrs))

    def on_static_error(self, error: ItlSyntaxError) -> None:
        head = self._paint(f"[line {error.line}] Error{error.where}:", "bold")
        print(f"{head} {error.message}", file=self.stream)

    def on_runtime_error(self, error: ItlRuntimeError) -> None:
        print(self._paint(error.message, "bold"), file=self.stream)
        print(f"[line {error.token.line}]", file=self.stream)
