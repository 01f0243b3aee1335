"""Exceptions raised while tokenizing and evaluating RPN expressions."""


class CalculatorError(Exception):
    """Base class for every error raised by the calculator core."""


class MalformedTokenError(CalculatorError, ValueError):
    """A symbol is neither a known operator nor a base-10 integer literal."""

    def __init__(self, symbol: str, position: int):
        self.symbol = symbol
        self.position = position
        super().__init__(f"Malformed token {symbol!r} at position {position}")


class StackUnderflowError(CalculatorError, IndexError):
    """An operator needs more operands than the stack currently holds."""


class EmptyOperandsError(StackUnderflowError):
    """MAX was evaluated against an empty stack."""


class LeftoverOperandsError(CalculatorError, ValueError):
    """More than one value remains on the stack once every token is applied."""

    def __init__(self, remaining: int):
        self.remaining = remaining
        super().__init__(f"Invalid expression ({remaining} operands remaining, expected 1)")


class DivisionByZeroError(CalculatorError, ZeroDivisionError):
    pass


class NegativeSquareRootError(CalculatorError, ArithmeticError):
    pass
