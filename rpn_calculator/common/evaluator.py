"""Evaluate RPN expressions against an operand stack."""
import math
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from rpn_calculator.common.errors import (
    DivisionByZeroError,
    EmptyOperandsError,
    LeftoverOperandsError,
    NegativeSquareRootError,
    StackUnderflowError,
)
from rpn_calculator.common.stack import OperandStack
from rpn_calculator.common.tokenizer import ExpressionTokenizer
from rpn_calculator.common.tokens import NumberLiteral, Operator, OperatorKind, Token


def _truncating_div(left: int, right: int) -> int:
    """Integer division rounding toward zero (Python's // rounds toward -inf)."""
    if right == 0:
        raise DivisionByZeroError(f"Division by zero: {left} / {right}")
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


def _pop_operands(stack: OperandStack, op: Operator) -> List[int]:
    """
    Pop the operands of a fixed-arity operator.

    :return: Operands in push order (left operand first)
    :rtype: List[int]
    :raises StackUnderflowError: If the stack holds fewer values than the operator needs
    """
    if len(stack) < op.arity:
        raise StackUnderflowError(
            f"Operator {op.symbol!r} needs {op.arity} operand(s), stack holds {len(stack)}"
        )
    operands = [stack.pop() for _ in range(op.arity)]
    operands.reverse()
    return operands


def apply_operator(stack: OperandStack, op: Operator) -> None:
    """
    Apply one operator to the stack, replacing its operands with the result.

    Binary operators pop the right operand first, then the left one.
    MAX is the only operator without a fixed arity: it drains every value
    pushed since the previous MAX result and pushes their maximum.

    :param OperandStack stack: Stack of the current evaluation run
    :param Operator op: Operator token
    """
    kind = op.kind

    if kind is OperatorKind.MAX:
        values = stack.drain_segment()
        if not values:
            raise EmptyOperandsError("Operator 'MAX' needs at least one operand")
        stack.push_floor(max(values))
        return

    if kind is OperatorKind.SQRT:
        (value,) = _pop_operands(stack, op)
        if value < 0:
            raise NegativeSquareRootError(f"Square root of negative number: {value}")
        stack.push(math.isqrt(value))
        return

    left, right = _pop_operands(stack, op)
    if kind is OperatorKind.ADD:
        stack.push(left + right)
    elif kind is OperatorKind.SUB:
        stack.push(left - right)
    elif kind is OperatorKind.MUL:
        stack.push(left * right)
    elif kind is OperatorKind.DIV:
        stack.push(_truncating_div(left, right))
    else:
        raise AssertionError(f"Unhandled operator: {kind!r}")


def apply_token(stack: OperandStack, token: Token) -> None:
    if isinstance(token, NumberLiteral):
        stack.push(token.value)
    else:
        apply_operator(stack, token)


class Calculator(BaseModel):
    """
    Evaluate RPN expressions to a single integer.

    Each call to `calculate` owns a fresh operand stack, so one instance can be
    shared between callers.

    Leftover handling:
        - strict (default): the stack must hold exactly one value at the end
        - lenient: the top value is returned, extra operands are ignored
    """

    model_config = ConfigDict(frozen=True)

    strict: bool = Field(default=True, description="Reject expressions leaving more than one operand")

    def calculate(self, expr: str) -> int:
        """
        Evaluate an RPN expression.

        :param str expr: Space-separated RPN expression, e.g. "4 2 +"

        :return: Integer result
        :rtype: int
        :raises MalformedTokenError: If a symbol is neither an operator nor an integer
        :raises StackUnderflowError: If an operator lacks operands
        :raises EmptyOperandsError: If MAX runs on an empty stack
        :raises LeftoverOperandsError: In strict mode, if operands remain unused
        :raises ArithmeticError: On division by zero or square root of a negative number
        """
        stack = OperandStack()
        for token in ExpressionTokenizer.tokenize(expr):
            apply_token(stack, token)

        if self.strict and len(stack) > 1:
            raise LeftoverOperandsError(len(stack))
        return stack.pop()


DEFAULT_CALCULATOR: Calculator = Calculator()


def calculate(expr: str) -> int:
    """Evaluate an RPN expression with strict leftover handling."""
    return DEFAULT_CALCULATOR.calculate(expr)
