from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from itl.reader.tokens import Token


class ItlError(Exception):
    """ Base class for all ITL errors"""
    pass


class ItlSyntaxError(ItlError):
    """ A static (lexical, syntactic or resolution) error reported at a line"""

    def __init__(self, line: int, message: str, where: str = ""):
        super().__init__(f"[line {line}] Error{where}: {message}")
        self.line = line
        self.message = message
        self.where = where


class ItlRuntimeError(ItlError):
    """ Raised when evaluation fails; carries the offending token"""

    def __init__(self, token: Token, message: str):
        super().__init__(message)
        self.token = token
        self.message = message
