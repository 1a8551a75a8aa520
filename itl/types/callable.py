"""Callable values: user-defined functions and host-provided natives."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Protocol, runtime_checkable

from itl import ItlValue
from itl.types import nodes
from itl.types.environment import Environment
from itl.types.nil import Nil

if TYPE_CHECKING:
    from itl.interpreter import Interpreter


@runtime_checkable
class ItlCallable(Protocol):
    """Anything a call expression may invoke."""

    def arity(self) -> int: ...

    def call(self, interpreter: Interpreter, arguments: list[ItlValue]) -> ItlValue: ...


class Function:
    """A first-class function: its declaration plus the environment it closed over."""

    __slots__ = ("declaration", "closure")

    def __init__(self, declaration: nodes.Function, closure: Environment):
        self.declaration = declaration
        self.closure = closure

    @property
    def name(self) -> str:
        return self.declaration.name.lexeme

    def arity(self) -> int:
        return len(self.declaration.params)

    def call(self, interpreter: Interpreter, arguments: list[ItlValue]) -> ItlValue:
        # Parameters live in a child of the closure, not of the caller's scope
        env = Environment(self.closure)
        for param, arg in zip(self.declaration.params, arguments):
            env.define(param.lexeme, arg)
        signal = interpreter.execute_block(self.declaration.body, env)
        if signal is None:
            return Nil
        return signal.value

    def __str__(self) -> str:
        return f"<fn {self.name}>"

    __repr__ = __str__


class NativeFunction:
    """A host function exposed to ITL code under a fixed arity. A Python None
    result becomes nil."""

    __slots__ = ("name", "_arity", "fn")

    def __init__(
        self,
        name: str,
        arity: int,
        fn: Callable[[Interpreter, list[ItlValue]], ItlValue],
    ):
        self.name = name
        self._arity = arity
        self.fn = fn

    def arity(self) -> int:
        return self._arity

    def call(self, interpreter: Interpreter, arguments: list[ItlValue]) -> ItlValue:
        result = self.fn(interpreter, arguments)
        return Nil if result is None else result

    def __str__(self) -> str:
        return "<native fn>"

    def __repr__(self) -> str:
        return f"<native fn {self.name}>"
