"""Static variable resolution.

Runs once over the whole program, before anything executes, and records for
each local variable reference or assignment how many scopes separate it from
its declaration. Globals get no entry and are looked up by name at run time.

Rules:
- A block opens a scope; a function opens one for its parameters and body.
- A function's name is defined before its body is resolved, so it can recurse.
- `var x = x;` in a local scope is an error (the initializer would read the
  variable it is declaring). At global scope it reads the older global.
- Declaring a name twice in one local scope is an error. Globals may be
  redeclared freely.
- `return` outside a function body is an error.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Iterable, Optional

from itl.diagnostics import Diagnostics, CollectingDiagnostics
from itl.reader.tokens import Token
from itl.types import nodes
from itl.types.nodes import Expr, Stmt


class FunctionType(Enum):
    NONE = auto()
    FUNCTION = auto()


class Resolver:
    def __init__(self, locals: dict[int, int], diagnostics: Optional[Diagnostics] = None):
        self.locals = locals
        self.diagnostics = diagnostics if diagnostics is not None else CollectingDiagnostics()
        # Each scope maps name -> "initializer finished" flag
        self.scopes: list[dict[str, bool]] = []
        self.current_function = FunctionType.NONE

    def resolve(self, statements: Iterable[Stmt]) -> None:
        """Resolve a whole program. A statement nested too deeply to walk is
        reported as a static error and skipped."""
        for stmt in statements:
            try:
                self.resolve_stmt(stmt)
            except RecursionError:
                self.scopes.clear()
                self.current_function = FunctionType.NONE
                self.diagnostics.error(nodes.first_line(stmt), "Expression nests too deeply.")

    def resolve_statements(self, statements: Iterable[Stmt]) -> None:
        for stmt in statements:
            self.resolve_stmt(stmt)

    def resolve_stmt(self, stmt: Stmt) -> None:
        match stmt:
            case nodes.Block(statements):
                self.begin_scope()
                self.resolve_statements(statements)
                self.end_scope()
            case nodes.Var(name, initializer):
                self.declare(name)
                if initializer is not None:
                    self.resolve_expr(initializer)
                self.define(name)
            case nodes.Function(name):
                self.declare(name)
                self.define(name)
                self.resolve_function(stmt, FunctionType.FUNCTION)
            case nodes.Expression(expression) | nodes.Print(expression):
                self.resolve_expr(expression)
            case nodes.If(condition, then_branch, else_branch):
                self.resolve_expr(condition)
                self.resolve_stmt(then_branch)
                if else_branch is not None:
                    self.resolve_stmt(else_branch)
            case nodes.While(condition, body):
                self.resolve_expr(condition)
                self.resolve_stmt(body)
            case nodes.Return(keyword, value):
                if self.current_function is FunctionType.NONE:
                    self.diagnostics.error_at(keyword, "Can't return from top-level code.")
                if value is not None:
                    self.resolve_expr(value)
            case _:
                raise TypeError(f"Unknown statement node: {stmt!r}")

    def resolve_expr(self, expr: Expr) -> None:
        match expr:
            case nodes.Variable(name):
                if self.scopes and self.scopes[-1].get(name.lexeme) is False:
                    self.diagnostics.error_at(
                        name, "Can't read local variable in its own initializer."
                    )
                self.resolve_local(expr, name)
            case nodes.Assign(name, value):
                self.resolve_expr(value)
                self.resolve_local(expr, name)
            case nodes.Binary(left, _, right) | nodes.Logical(left, _, right):
                self.resolve_expr(left)
                self.resolve_expr(right)
            case nodes.Unary(_, right):
                self.resolve_expr(right)
            case nodes.Grouping(inner):
                self.resolve_expr(inner)
            case nodes.Call(callee, _, arguments):
                self.resolve_expr(callee)
                for argument in arguments:
                    self.resolve_expr(argument)
            case nodes.Literal():
                pass
            case _:
                raise TypeError(f"Unknown expression node: {expr!r}")

    def resolve_function(self, function: nodes.Function, kind: FunctionType) -> None:
        enclosing_function = self.current_function
        self.current_function = kind
        self.begin_scope()
        for param in function.params:
            self.declare(param)
            self.define(param)
        self.resolve_statements(function.body)
        self.end_scope()
        self.current_function = enclosing_function

    def resolve_local(self, expr: nodes.Variable | nodes.Assign, name: Token) -> None:
        for i in range(len(self.scopes) - 1, -1, -1):
            if name.lexeme in self.scopes[i]:
                self.locals[expr.node_id] = len(self.scopes) - 1 - i
                return
        # Not found in any local scope: global, no entry

    def begin_scope(self) -> None:
        self.scopes.append({})

    def end_scope(self) -> None:
        self.scopes.pop()

    def declare(self, name: Token) -> None:
        if not self.scopes:
            return
        scope = self.scopes[-1]
        if name.lexeme in scope:
            self.diagnostics.error_at(name, "Already a variable with this name in this scope.")
        scope[name.lexeme] = False

    def define(self, name: Token) -> None:
        if not self.scopes:
            return
        self.scopes[-1][name.lexeme] = True
