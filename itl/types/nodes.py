"""AST node definitions for ITL.

Two tagged unions, `Expr` and `Stmt`, built from frozen dataclasses. Nodes are
never mutated after the parser builds them. Child sequences are tuples.

`Variable` and `Assign` get a process-unique `node_id` when constructed; the
resolver keys scope distances by it. The id is excluded from equality so two
structurally identical trees still compare equal.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass
from itertools import count
from typing import Optional, Union

from itl import ItlValue
from itl.reader.tokens import Token

_node_ids = count()


def _next_id() -> int:
    return next(_node_ids)


# --- Expressions ---

@dataclass(frozen=True)
class Literal:
    value: ItlValue


@dataclass(frozen=True)
class Grouping:
    expression: Expr


@dataclass(frozen=True)
class Unary:
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Binary:
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Logical:
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Variable:
    name: Token
    node_id: int = field(default_factory=_next_id, compare=False)


@dataclass(frozen=True)
class Assign:
    name: Token
    value: Expr
    node_id: int = field(default_factory=_next_id, compare=False)


@dataclass(frozen=True)
class Call:
    callee: Expr
    paren: Token  # closing paren, used to locate runtime errors
    arguments: tuple[Expr, ...]


Expr = Union[Literal, Grouping, Unary, Binary, Logical, Variable, Assign, Call]


# --- Statements ---

@dataclass(frozen=True)
class Expression:
    expression: Expr


@dataclass(frozen=True)
class Print:
    expression: Expr


@dataclass(frozen=True)
class Var:
    name: Token
    initializer: Optional[Expr] = None


@dataclass(frozen=True)
class Block:
    statements: tuple[Stmt, ...]


@dataclass(frozen=True)
class If:
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt] = None


@dataclass(frozen=True)
class While:
    condition: Expr
    body: Stmt


@dataclass(frozen=True)
class Function:
    name: Token
    params: tuple[Token, ...]
    body: tuple[Stmt, ...]


@dataclass(frozen=True)
class Return:
    keyword: Token
    value: Optional[Expr] = None


Stmt = Union[Expression, Print, Var, Block, If, While, Function, Return]


def first_line(node: Expr | Stmt) -> int:
    """Line of the leftmost token under `node`, or 0 if it holds none.

    Walks with an explicit stack so it works on trees too deep to recurse into.
    """
    pending: list = [node]
    while pending:
        item = pending.pop()
        if isinstance(item, Token):
            return item.line
        if isinstance(item, tuple):
            pending.extend(reversed(item))
        elif is_dataclass(item):
            pending.extend(reversed([getattr(item, f.name) for f in fields(item)]))
    return 0
