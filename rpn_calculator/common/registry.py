"""Read-only table of operator symbols."""
from types import MappingProxyType
from typing import Mapping, Optional

from rpn_calculator.common.tokens import OperatorKind

# Built once at import time; lookups are exact and case-sensitive
OPERATIONS: Mapping[str, OperatorKind] = MappingProxyType(
    {kind.value: kind for kind in OperatorKind}
)


def lookup(symbol: str) -> Optional[OperatorKind]:
    """
    Find the operator registered under a symbol.

    :param str symbol: Raw symbol from the expression (e.g. "+", "SQRT")

    :return: The operator kind, or None if the symbol is not an operator
    :rtype: Optional[OperatorKind]
    """
    return OPERATIONS.get(symbol)
