"""Runtime environment for ITL.

The Environment stores bindings of names to evaluated values and supports
nested scopes via an `enclosing` link. One global environment lives as long as
its Interpreter; every block and every call gets a fresh child.
"""

from __future__ import annotations

from typing import Optional

from itl import ItlValue
from itl.errors import ItlRuntimeError
from itl.evaluation.operators import stringify
from itl.reader.tokens import Token


class Environment:
    """Hierarchical mapping from names to ITL values."""

    __slots__ = ("values", "enclosing")

    def __init__(self, enclosing: Optional[Environment] = None):
        self.values: dict[str, ItlValue] = {}
        self.enclosing: Environment | None = enclosing

    def define(self, name: str, value: ItlValue) -> None:
        """Bind `name` to `value` in this frame, overwriting any binding."""
        self.values[name] = value

    def get(self, name: Token) -> ItlValue:
        """Look up `name` in this frame, then outward through the chain.

        Raises ItlRuntimeError if no frame binds it.
        """
        env: Optional[Environment] = self
        while env is not None:
            if name.lexeme in env.values:
                return env.values[name.lexeme]
            env = env.enclosing
        raise ItlRuntimeError(name, f"Undefined variable '{name.lexeme}'.")

    def assign(self, name: Token, value: ItlValue) -> None:
        """Update the nearest existing binding for `name`.

        Raises ItlRuntimeError if the name is not bound anywhere in the chain;
        assignment never declares.
        """
        env: Optional[Environment] = self
        while env is not None:
            if name.lexeme in env.values:
                env.values[name.lexeme] = value
                return
            env = env.enclosing
        raise ItlRuntimeError(name, f"Undefined variable '{name.lexeme}'.")

    def ancestor(self, distance: int) -> Environment:
        env = self
        for _ in range(distance):
            env = env.enclosing
        return env

    def get_at(self, distance: int, name: str) -> ItlValue:
        return self.ancestor(distance).values[name]

    def assign_at(self, distance: int, name: Token, value: ItlValue) -> None:
        self.ancestor(distance).values[name.lexeme] = value

    def _frame_text(self) -> str:
        # Values shown the way `print` shows them
        return "{" + ", ".join(f"{k}: {stringify(v)}" for k, v in self.values.items()) + "}"

    def __str__(self) -> str:
        """This frame only, with a marker when it has a parent."""
        text = self._frame_text()
        return text if self.enclosing is None else text + " -> ..."

    def __repr__(self) -> str:
        frames = []
        env: Optional[Environment] = self
        while env is not None:
            frames.append(env._frame_text())
            env = env.enclosing
        return f"<Environment chain: {' -> '.join(frames)}>"
