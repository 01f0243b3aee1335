"""Pydantic models for RPN evaluation requests and results."""
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class OperationRequest(BaseModel):
    """Represents a single RPN expression sent to the server."""

    expression: str = Field(..., description="RPN expression as a string")
    line_number: int = Field(default=1, ge=1, description="Line number in the input file")


class OperationResult(BaseModel):
    """Represents the outcome of evaluating one RPN expression."""

    expression: str = Field(..., description="Original RPN expression")
    line_number: int = Field(default=1, ge=1, description="Line number in the input file")
    result: Optional[int] = Field(default=None, description="Integer result of the expression")
    error: Optional[str] = Field(default=None, description="Error message if evaluation failed")

    @model_validator(mode="after")
    def exactly_one_outcome(self) -> "OperationResult":
        """Ensure that either a result or an error is set, never both."""
        if (self.result is None) == (self.error is None):
            raise ValueError("Exactly one of 'result' or 'error' must be set")
        return self

    @property
    def ok(self) -> bool:
        return self.error is None

    def format_line(self) -> str:
        """
        Render the outcome as one line of the results file.

        :return: "<expr> = <result>" or "<expr> -> ERROR: <message>"
        :rtype: str
        """
        if self.ok:
            return f"{self.expression} = {self.result}"
        return f"{self.expression} -> ERROR: {self.error}"
