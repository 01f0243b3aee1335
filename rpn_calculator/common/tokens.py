"""Typed tokens produced by the tokenizer."""
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class OperatorKind(str, Enum):
    """Closed set of operators understood by the evaluator, keyed by their symbol."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    SQRT = "SQRT"
    MAX = "MAX"


# Number of operands popped by each fixed-arity operator.
# Operators missing from this table drain everything above the last MAX result.
FIXED_ARITY: dict[OperatorKind, int] = {
    OperatorKind.ADD: 2,
    OperatorKind.SUB: 2,
    OperatorKind.MUL: 2,
    OperatorKind.DIV: 2,
    OperatorKind.SQRT: 1,
}


class NumberLiteral(BaseModel):
    """An integer operand, pushed as-is onto the stack."""

    model_config = ConfigDict(frozen=True)

    value: int = Field(..., description="Integer value of the literal")


class Operator(BaseModel):
    """An operator applied to the operand stack."""

    model_config = ConfigDict(frozen=True)

    kind: OperatorKind = Field(..., description="Which operation to apply")

    @property
    def symbol(self) -> str:
        return self.kind.value

    @property
    def arity(self) -> Optional[int]:
        """
        Number of operands this operator pops.

        :return: Fixed operand count, or None when the operator drains the current MAX segment
        :rtype: Optional[int]
        """
        return FIXED_ARITY.get(self.kind)


Token = Union[NumberLiteral, Operator]
