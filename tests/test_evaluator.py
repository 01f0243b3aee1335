"""Test class Calculator and the calculate function."""
import pytest

from rpn_calculator.common.errors import (
    CalculatorError,
    DivisionByZeroError,
    EmptyOperandsError,
    LeftoverOperandsError,
    MalformedTokenError,
    NegativeSquareRootError,
    StackUnderflowError,
)
from rpn_calculator.common.evaluator import Calculator, calculate


@pytest.mark.parametrize("expr,expected", [
    ("7", 7),
    ("-42", -42),
    ("20 5 /", 4),
    ("4 2 +", 6),
    ("4 2 + 3 -", 3),
    ("3 5 8 * 7 + *", 141),
    ("9 SQRT", 3),
    ("5 3 4 2 9 1 MAX", 9),
    ("4 5 MAX 1 2 MAX *", 10),
])
def test_calculate_valid(expr, expected):
    """calculate returns the expected integer for well-formed expressions."""
    assert calculate(expr) == expected


@pytest.mark.parametrize("expr,expected", [
    ("7 3 -", 4),        # Right operand is popped first
    ("3 7 -", -4),
    ("7 2 /", 3),        # Truncating division
    ("-7 2 /", -3),      # Truncates toward zero, not toward -inf
    ("7 -2 /", -3),
    ("-7 -2 /", 3),
    ("2 SQRT", 1),
    ("0 SQRT", 0),
    ("99 SQRT", 9),
    ("-3 MAX", -3),      # Single value on the stack
    ("-5 -2 -9 MAX", -2),
    ("1 2 + 10 MAX", 10),
    ("3 MAX MAX", 3),          # MAX straight after MAX keeps the result
    ("4 5 MAX 3 +", 8),        # A MAX result is an ordinary operand
    ("2 9 MAX 3 + 1 MAX", 12), # Consuming a MAX result lowers the floor
])
def test_calculate_edge_cases(expr, expected):
    """Operand order, truncation and MAX draining behave as documented."""
    assert calculate(expr) == expected


@pytest.mark.parametrize("n", [0, 1, -1, 123456789, 10 ** 30])
def test_single_literal_is_identity(n):
    """A lone literal evaluates to itself."""
    assert calculate(str(n)) == n


@pytest.mark.parametrize("expr,exc_type", [
    ("5 0 /", DivisionByZeroError),
    ("-4 SQRT", NegativeSquareRootError),
    ("+", StackUnderflowError),
    ("1 +", StackUnderflowError),
    ("SQRT", StackUnderflowError),
    ("MAX", EmptyOperandsError),
    ("1 2 x", MalformedTokenError),
    ("", MalformedTokenError),
    ("3 4 + 5", LeftoverOperandsError),
])
def test_calculate_errors(expr, exc_type):
    """Each failure raises its dedicated CalculatorError subclass."""
    with pytest.raises(exc_type):
        calculate(expr)


@pytest.mark.parametrize("expr", ["5 0 /", "-4 SQRT"])
def test_arithmetic_failures_are_arithmetic_errors(expr):
    """Division by zero and negative square roots are ArithmeticErrors."""
    with pytest.raises(ArithmeticError):
        calculate(expr)


def test_every_error_is_calculator_error():
    """Callers can catch every failure with CalculatorError."""
    for expr in ("5 0 /", "+", "MAX", "x", "1 2"):
        with pytest.raises(CalculatorError):
            calculate(expr)


def test_lenient_returns_top_of_stack():
    """Lenient mode ignores leftover operands and returns the top value."""
    calculator = Calculator(strict=False)
    assert calculator.calculate("3 4 + 5") == 5
    assert calculator.calculate("1 2 3") == 3


def test_leftover_error_reports_count():
    """LeftoverOperandsError records how many operands remained."""
    with pytest.raises(LeftoverOperandsError) as exc_info:
        calculate("1 2 3")
    assert exc_info.value.remaining == 3


def test_underflow_message_names_operator():
    """The underflow message mentions the operator and its arity."""
    with pytest.raises(StackUnderflowError, match=r"'\*' needs 2"):
        calculate("3 *")


def test_calculate_has_no_hidden_state():
    """Evaluating the same expression twice yields the same result."""
    expr = "4 5 MAX 1 2 MAX *"
    assert calculate(expr) == calculate(expr) == 10
    with pytest.raises(StackUnderflowError):
        calculate("+")
    assert calculate(expr) == 10


@pytest.mark.parametrize("strict", [True, False])
def test_max_only_drains_values_pushed_since_previous_max(strict):
    """A second MAX leaves the first MAX result on the stack."""
    calculator = Calculator(strict=strict)
    assert calculator.calculate("4 5 MAX 1 2 MAX *") == 10
    assert calculator.calculate("1 8 MAX 3 6 MAX 2 4 MAX + +") == 18


def test_max_segments_are_left_over_in_strict_mode():
    """Two MAX segments with no operator joining them leave two operands."""
    with pytest.raises(LeftoverOperandsError):
        calculate("4 5 MAX 1 2 MAX")
    assert Calculator(strict=False).calculate("4 5 MAX 1 2 MAX") == 2
