from __future__ import annotations

import ast
import math
import operator
import re
from typing import Callable, Dict, Type, Union

Number = Union[int, float]

BINARY_OPERATORS: Dict[Type[ast.operator], Callable[[Number, Number], Number]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.Mod: math.fmod,
    ast.Pow: math.pow,
}

UNARY_OPERATORS: Dict[Type[ast.unaryop], Callable[[Number], Number]] = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}

ERROR_TEXT = "Error"

LEADING_ZEROS = re.compile(r"(?<![\w.])0+(?=\d)")


def _evaluate(node: ast.AST) -> Number:
    if isinstance(node, ast.Expression):
        return _evaluate(node.body)
    if isinstance(node, ast.Constant) and type(node.value) in (int, float):
        return node.value
    if isinstance(node, ast.BinOp) and type(node.op) in BINARY_OPERATORS:
        return BINARY_OPERATORS[type(node.op)](_evaluate(node.left), _evaluate(node.right))
    if isinstance(node, ast.UnaryOp) and type(node.op) in UNARY_OPERATORS:
        return UNARY_OPERATORS[type(node.op)](_evaluate(node.operand))
    raise ValueError(f"Unsupported expression element: {type(node).__name__}")


def evaluate_expression(expression: str) -> Number:
    """Evaluates a plain arithmetic expression without handing it to ``eval``."""
    # Number literals are decimal; "05" reads as 5.
    source = LEADING_ZEROS.sub("", expression.strip())
    tree = ast.parse(source, mode="eval")
    result = _evaluate(tree)
    if isinstance(result, complex) or (isinstance(result, float) and not math.isfinite(result)):
        raise ValueError("Result is not a finite real number.")
    return result


def format_number(value: Number) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return repr(value)


class Calculator:
    def __init__(self) -> None:
        self.expression = ""
        self.display = "0"

    def append(self, token: str) -> str:
        self.expression += str(token)
        self.display = self.expression
        return self.display

    def clear(self) -> None:
        self.expression = ""
        self.display = "0"

    def calculate(self) -> str:
        try:
            result = evaluate_expression(self.expression)
        except (SyntaxError, ValueError, TypeError, ZeroDivisionError, OverflowError):
            self.expression = ""
            self.display = ERROR_TEXT
            return self.display
        self.expression = format_number(result)
        self.display = self.expression
        return self.display
