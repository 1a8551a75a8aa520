"""Native functions installed into the global scope.

Each entry is a NativeFunction; hosts can pass their own mapping to
Interpreter(natives=...) to extend or replace the default set.
"""
from __future__ import annotations

import time
from typing import Mapping

from itl import ItlValue
from itl.types.callable import NativeFunction
from itl.types.environment import Environment


def clock(interpreter, args: list[ItlValue]) -> float:
    """(clock) -> seconds since the epoch, as a float"""
    return time.time()


NATIVES: dict[str, NativeFunction] = {
    "clock": NativeFunction("clock", 0, clock),
}

# Signatures shown by the language server for hover/completion
NATIVE_SIGNATURES: dict[str, str] = {
    "clock": "clock() -> number of seconds since the epoch",
}


def register(env: Environment, natives: Mapping[str, NativeFunction] | None = None) -> None:
    """Define every native in `env` under its registry name."""
    for name, fn in (NATIVES if natives is None else natives).items():
        env.define(name, fn)
