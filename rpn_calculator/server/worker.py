"""Worker process for evaluating RPN expressions."""
from multiprocessing.connection import Connection
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from rpn_calculator.common.errors import CalculatorError
from rpn_calculator.common.evaluator import Calculator
from rpn_calculator.common.logger import logger
from rpn_calculator.common.models import OperationResult


class WorkerProcess(BaseModel):
    """
    Worker process responsible for evaluating a single RPN expression.

    Lifecycle:
        - Spawned by the parent server process
        - Receives one expression only
        - Sends an OperationResult (as a dict) through a Pipe
        - Terminates immediately after computation
    """

    # Immutable, and allows multiprocessing.Connection as a field type
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    conn: Connection = Field(..., description="Connection object for sending results back to server")
    expression: str = Field(..., description="Single RPN expression to evaluate")
    line_number: int = Field(..., ge=1, description="Line number in the input file")
    strict: bool = Field(default=True, description="Reject expressions leaving more than one operand")

    @field_validator("expression")
    def expression_must_not_be_empty(cls, v: str) -> str:
        """Ensure that the expression is not empty."""
        if not v.strip():
            raise ValueError("Expression cannot be empty")
        return v

    def evaluate(self) -> OperationResult:
        """
        Evaluate the expression without touching the connection.

        :return: Result or error for this line
        :rtype: OperationResult
        """
        try:
            value: int = Calculator(strict=self.strict).calculate(self.expression)
        except CalculatorError as exc:
            logger.error(
                f"👷❌ Worker failed on line {self.line_number}: {exc}\n"
                f"Invalid RPN expression, could not evaluate: {self.expression!r}"
            )
            return OperationResult(
                expression=self.expression, line_number=self.line_number, error=str(exc)
            )
        return OperationResult(expression=self.expression, line_number=self.line_number, result=value)

    def run(self) -> None:
        """
        Evaluate the expression and send the outcome through the pipe.

        :return: None
        """
        logger.info(f"👷🏁 Worker started on line {self.line_number}: {self.expression}")

        outcome: Optional[OperationResult] = None
        try:
            outcome = self.evaluate()
            self.conn.send(outcome.model_dump())
        finally:
            # Always close the connection
            self.conn.close()

            if outcome is not None and outcome.ok:
                logger.info(f"👷✅ Worker finished on line {self.line_number}: {outcome.result}")
