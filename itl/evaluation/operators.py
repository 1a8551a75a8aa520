"""Value-level rules shared by the evaluator: truthiness, equality, arithmetic
and the display form used by `print`."""

from __future__ import annotations

import math

from itl import ItlValue
from itl.errors import ItlRuntimeError
from itl.reader.tokens import Token, TokenType
from itl.types.nil import Nil


def is_number(value: ItlValue) -> bool:
    # bool is an int subclass in Python; ITL keeps them apart
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_truthy(value: ItlValue) -> bool:
    """Only nil and false are falsey."""
    if value is Nil or value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(a: ItlValue, b: ItlValue) -> bool:
    """Value equality without coercion between kinds."""
    if a is Nil and b is Nil:
        return True
    if a is Nil or b is Nil:
        return False
    if is_number(a) and is_number(b):
        return a == b
    if type(a) != type(b):
        return False
    return a == b


def stringify(value: ItlValue) -> str:
    """Convert a value to the text `print` writes."""
    if value is Nil or value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_number(value):
        number = float(value)
        if number.is_integer():
            # Fixed-point keeps the sign of -0
            return f"{number:.0f}"
        return repr(number)
    return str(value)


def check_number_operand(operator: Token, operand: ItlValue) -> None:
    if is_number(operand):
        return
    raise ItlRuntimeError(operator, "Operand must be a number.")


def check_number_operands(operator: Token, left: ItlValue, right: ItlValue) -> None:
    if is_number(left) and is_number(right):
        return
    raise ItlRuntimeError(operator, "Operands must be numbers.")


def _divide(left: float, right: float) -> float:
    # IEEE semantics instead of Python's ZeroDivisionError
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def unary(operator: Token, right: ItlValue) -> ItlValue:
    if operator.type is TokenType.MINUS:
        check_number_operand(operator, right)
        return -float(right)
    if operator.type is TokenType.BANG:
        return not is_truthy(right)
    raise ItlRuntimeError(operator, f"Unknown unary operator '{operator.lexeme}'.")


def binary(operator: Token, left: ItlValue, right: ItlValue) -> ItlValue:
    match operator.type:
        case TokenType.EQUAL_EQUAL:
            return is_equal(left, right)
        case TokenType.BANG_EQUAL:
            return not is_equal(left, right)
        case TokenType.PLUS:
            if is_number(left) and is_number(right):
                return float(left) + float(right)
            if isinstance(left, str) and isinstance(right, str):
                return left + right
            raise ItlRuntimeError(operator, "Operands must be two numbers or two strings.")

    check_number_operands(operator, left, right)
    left, right = float(left), float(right)
    match operator.type:
        case TokenType.MINUS:
            return left - right
        case TokenType.STAR:
            return left * right
        case TokenType.SLASH:
            return _divide(left, right)
        case TokenType.GREATER:
            return left > right
        case TokenType.GREATER_EQUAL:
            return left >= right
        case TokenType.LESS:
            return left < right
        case TokenType.LESS_EQUAL:
            return left <= right
    raise ItlRuntimeError(operator, f"Unknown binary operator '{operator.lexeme}'.")
