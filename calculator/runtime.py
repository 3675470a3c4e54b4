import logging
import math
from typing import Callable

from calculator.parser import (
    BinaryOperation,
    BinaryOperator,
    Expression,
    NumberLiteral,
    UnaryOperation,
    UnaryOperator,
    parse,
)
from calculator.tokenizer import tokenize

logger = logging.getLogger(__name__)


def _ieee_div(a: float, b: float) -> float:
    if b == 0.0:
        # python raises ZeroDivisionError here, IEEE 754 does not
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


BINARY_OPERATION_IMPLS: dict[BinaryOperator, Callable[[float, float], float]] = {
    BinaryOperator.ADD: lambda a, b: a + b,
    BinaryOperator.SUB: lambda a, b: a - b,
    BinaryOperator.MUL: lambda a, b: a * b,
    BinaryOperator.DIV: _ieee_div,
}


def evaluate(expression: Expression) -> float:
    """Post-order walk with an explicit stack, so "1+1+...+1" is not limited by the recursion depth"""
    values: list[float] = []
    stack: list[tuple[Expression, bool]] = [(expression, False)]
    while stack:
        node, operands_ready = stack.pop()
        if isinstance(node, NumberLiteral):
            values.append(node.value)
        elif isinstance(node, BinaryOperation):
            if not operands_ready:
                stack.append((node, True))
                stack.append((node.right, False))
                stack.append((node.left, False))
                continue
            impl = BINARY_OPERATION_IMPLS.get(node.operator)
            if impl is None:
                raise RuntimeError(f"Unexpected binary operator: {node.operator}")
            right = values.pop()
            left = values.pop()
            values.append(impl(left, right))
        elif isinstance(node, UnaryOperation):
            if not operands_ready:
                stack.append((node, True))
                stack.append((node.operand, False))
                continue
            if node.operator is UnaryOperator.NEG:
                values.append(-values.pop())
            else:
                raise RuntimeError(f"Unexpected unary operator: {node.operator}")
        else:
            raise RuntimeError(f"Unexpected expression type: {node}")
    return values.pop()


def format_number(value: float) -> str:
    """Shortest decimal that reads back as the same float, without a trailing ".0": 7.0 -> "7", -0.0 -> "-0"."""
    text = repr(value)
    if text.endswith(".0"):
        text = text[:-2]
    return text


def calculate(code: str) -> float:
    tokens = tokenize(code)
    logger.debug("tokens: %s", " ".join(str(t) for t in tokens))
    ast = parse(tokens)
    logger.debug("parsed %d tokens into %s", len(tokens), type(ast).__name__)
    result = evaluate(ast)
    logger.debug("result: %r", result)
    return result
