from __future__ import annotations

from dataclasses import dataclass

from itl import ItlValue


@dataclass(frozen=True)
class ReturnValue:
    """Outcome of a statement that hit `return`.

    Statement execution yields either None (normal completion) or one of
    these; blocks pass it up unchanged and the function call that owns the
    body unwraps it.
    """
    value: ItlValue
