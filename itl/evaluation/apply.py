"""Application engine for ITL.

One place decides whether a value can be called and whether the argument
count fits, so user functions and natives go through identical checks.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from itl import ItlValue
from itl.errors import ItlRuntimeError
from itl.reader.tokens import Token
from itl.types.callable import ItlCallable

if TYPE_CHECKING:
    from itl.interpreter import Interpreter


def apply(
    callee: ItlValue,
    arguments: list[ItlValue],
    paren: Token,
    interpreter: Interpreter,
) -> ItlValue:
    """Invoke `callee` with already-evaluated arguments.

    Raises ItlRuntimeError (located at the call's closing paren) when the
    callee is not callable or the argument count differs from its arity.
    Nothing is invoked in either case.
    """
    if not isinstance(callee, ItlCallable):
        raise ItlRuntimeError(paren, "Can only call functions.")

    arity = callee.arity()
    if len(arguments) != arity:
        raise ItlRuntimeError(paren, f"Expected {arity} arguments but got {len(arguments)}.")

    try:
        return callee.call(interpreter, arguments)
    except RecursionError:
        raise ItlRuntimeError(paren, "Stack overflow.") from None
