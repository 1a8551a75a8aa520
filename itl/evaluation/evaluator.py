"""Core tree-walking evaluator for ITL.

`evaluate` computes expression values and `execute` runs statements; both
dispatch on the node type with `match`. The current environment is always an
explicit argument, so leaving a block or call needs no restoring: the caller
simply keeps using its own environment.

Statement execution returns None on normal completion or a ReturnValue when
a `return` was hit. Blocks stop at the first ReturnValue and hand it up; the
function call that owns the body unwraps it (see Function.call).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Optional

from itl import ItlValue
from itl.evaluation import operators
from itl.evaluation.apply import apply
from itl.reader.tokens import TokenType
from itl.types import nodes
from itl.types.callable import Function
from itl.types.environment import Environment
from itl.types.nil import Nil
from itl.types.nodes import Expr, Stmt
from itl.types.signal import ReturnValue

if TYPE_CHECKING:
    from itl.interpreter import Interpreter


def evaluate(expr: Expr, env: Environment, interpreter: Interpreter) -> ItlValue:
    match expr:
        case nodes.Literal(value):
            return value

        case nodes.Grouping(inner):
            return evaluate(inner, env, interpreter)

        case nodes.Unary(operator, right):
            return operators.unary(operator, evaluate(right, env, interpreter))

        case nodes.Binary(left, operator, right):
            lhs = evaluate(left, env, interpreter)
            rhs = evaluate(right, env, interpreter)
            return operators.binary(operator, lhs, rhs)

        case nodes.Logical(left, operator, right):
            lhs = evaluate(left, env, interpreter)
            if operator.type is TokenType.OR:
                if operators.is_truthy(lhs):
                    return lhs
            elif not operators.is_truthy(lhs):
                return lhs
            return evaluate(right, env, interpreter)

        case nodes.Variable(name):
            distance = interpreter.locals.get(expr.node_id)
            if distance is not None:
                return env.get_at(distance, name.lexeme)
            return interpreter.globals.get(name)

        case nodes.Assign(name, value_expr):
            value = evaluate(value_expr, env, interpreter)
            distance = interpreter.locals.get(expr.node_id)
            if distance is not None:
                env.assign_at(distance, name, value)
            else:
                interpreter.globals.assign(name, value)
            return value

        case nodes.Call(callee_expr, paren, argument_exprs):
            callee = evaluate(callee_expr, env, interpreter)
            arguments = [evaluate(arg, env, interpreter) for arg in argument_exprs]
            return apply(callee, arguments, paren, interpreter)

    raise TypeError(f"Unknown expression node: {expr!r}")


def execute(stmt: Stmt, env: Environment, interpreter: Interpreter) -> Optional[ReturnValue]:
    match stmt:
        case nodes.Expression(expression):
            evaluate(expression, env, interpreter)
            return None

        case nodes.Print(expression):
            value = evaluate(expression, env, interpreter)
            interpreter.output(operators.stringify(value))
            return None

        case nodes.Var(name, initializer):
            value = Nil
            if initializer is not None:
                value = evaluate(initializer, env, interpreter)
            env.define(name.lexeme, value)
            return None

        case nodes.Block(statements):
            return execute_block(statements, Environment(env), interpreter)

        case nodes.If(condition, then_branch, else_branch):
            if operators.is_truthy(evaluate(condition, env, interpreter)):
                return execute(then_branch, env, interpreter)
            if else_branch is not None:
                return execute(else_branch, env, interpreter)
            return None

        case nodes.While(condition, body):
            while operators.is_truthy(evaluate(condition, env, interpreter)):
                signal = execute(body, env, interpreter)
                if signal is not None:
                    return signal
            return None

        case nodes.Function(name):
            env.define(name.lexeme, Function(stmt, env))
            return None

        case nodes.Return(_, value_expr):
            value = Nil
            if value_expr is not None:
                value = evaluate(value_expr, env, interpreter)
            return ReturnValue(value)

    raise TypeError(f"Unknown statement node: {stmt!r}")


def execute_block(
    statements: Iterable[Stmt], env: Environment, interpreter: Interpreter
) -> Optional[ReturnValue]:
    """Run `statements` in `env`, stopping at the first `return`."""
    for stmt in statements:
        signal = execute(stmt, env, interpreter)
        if signal is not None:
            return signal
    return None
