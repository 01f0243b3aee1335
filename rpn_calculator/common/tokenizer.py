"""Turn an RPN expression string into typed tokens."""
import re
from typing import List

from rpn_calculator.common.errors import MalformedTokenError
from rpn_calculator.common.registry import lookup
from rpn_calculator.common.tokens import NumberLiteral, Operator, Token

# Base-10 signed integer, ASCII digits only
INTEGER_PATTERN: re.Pattern = re.compile(r"[+-]?[0-9]+")

SEPARATOR: str = " "


class ExpressionTokenizer:
    """
    Split an RPN expression and classify each symbol.

    Symbols are separated by exactly one space (e.g. "3 5 8 * 7 + *").
    Each symbol is first looked up in the operator registry; anything that is
    not an operator must be an integer literal.
    """

    @staticmethod
    def split(expr: str) -> List[str]:
        """
        Split an expression into raw symbols, preserving order.

        :param str expr: RPN expression

        :return: List of raw symbols
        :rtype: List[str]
        """
        return expr.split(SEPARATOR)

    @staticmethod
    def _is_integer(symbol: str) -> bool:
        return INTEGER_PATTERN.fullmatch(symbol) is not None

    @staticmethod
    def classify(symbol: str, position: int) -> Token:
        """
        Convert one raw symbol into a token.

        :param str symbol: Raw symbol
        :param int position: 0-based position of the symbol in the expression

        :return: Operator or NumberLiteral token
        :rtype: Token
        :raises MalformedTokenError: If the symbol is neither an operator nor an integer
        """
        kind = lookup(symbol)
        if kind is not None:
            return Operator(kind=kind)
        if not ExpressionTokenizer._is_integer(symbol):
            raise MalformedTokenError(symbol, position)
        return NumberLiteral(value=int(symbol))

    @staticmethod
    def tokenize(expr: str) -> List[Token]:
        """
        Tokenize a whole expression.

        :param str expr: RPN expression

        :return: One token per symbol, in input order
        :rtype: List[Token]
        :raises MalformedTokenError: On the first symbol that cannot be classified
        """
        return [
            ExpressionTokenizer.classify(symbol, position)
            for position, symbol in enumerate(ExpressionTokenizer.split(expr))
        ]


def tokenize(expr: str) -> List[Token]:
    return ExpressionTokenizer.tokenize(expr)
