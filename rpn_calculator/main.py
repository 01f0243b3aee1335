"""
Command-line entrypoint.

Two modes:
- Inline: evaluate each expression given as an argument and print the results
- File: start the server process, launch a client against it and evaluate
  every line of the given file (or archive)

Examples
--------
rpn-calculator "4 2 +" "3 5 8 * 7 + *"
rpn-calculator --file resources/operations.txt
"""

from multiprocessing import Process
from pathlib import Path
import argparse
import sys
import time
from typing import List, Optional

from pydantic import BaseModel, Field, FilePath, ValidationError, model_validator

from rpn_calculator.client.client import ArithmeticClient
from rpn_calculator.common.errors import CalculatorError
from rpn_calculator.common.evaluator import Calculator
from rpn_calculator.common.logger import logger
from rpn_calculator.common.models import OperationResult
from rpn_calculator.server.server import ArithmeticServer


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    expressions : List[str]
        Expressions to evaluate inline.
    file_path : Optional[FilePath]
        Path to the file containing RPN expressions, one per line.
    lenient : bool
        Return the top of the stack instead of rejecting leftover operands.
    """

    expressions: List[str] = Field(default_factory=list)
    file_path: Optional[FilePath] = None
    lenient: bool = False

    @model_validator(mode="after")
    def exactly_one_source(self) -> "CliArgs":
        if bool(self.expressions) == (self.file_path is not None):
            raise ValueError("Provide either expressions or --file, not both")
        return self


def run_server(output_file: Path, strict: bool = True) -> None:
    """
    Start the RPN server.

    The server runs in its own process and listens
    for a single incoming socket connection.
    """
    server = ArithmeticServer(output_file=output_file, strict=strict)
    server.start()


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :param argv: Arguments to parse, defaults to sys.argv[1:]
    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = argparse.ArgumentParser(
        prog="rpn-calculator",
        description="Evaluate Reverse Polish Notation integer expressions",
    )
    parser.add_argument("expressions", nargs="*", help='RPN expressions, e.g. "4 2 +"')
    parser.add_argument(
        "-f", "--file", dest="file_path", help="Path to a file (or archive) of RPN expressions"
    )
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="Return the top of the stack when operands are left over",
    )

    args = parser.parse_args(argv)

    try:
        return CliArgs(expressions=args.expressions, file_path=args.file_path, lenient=args.lenient)
    except ValidationError as exc:
        parser.error(str(exc))


def build_output_path(input_path: Path) -> Path:
    """
    Construct the results file path for an input file.

    Examples
    --------
    input: resources/operations_short.7z
    output: resources/operations_short_7z_results.txt

    :param input_path: Path to the input file
    :return: Path to the output file
    """
    suffix_safe = "".join(input_path.suffixes).replace(".", "_")
    stem = input_path.name[: len(input_path.name) - len("".join(input_path.suffixes))]
    return input_path.with_name(f"{stem}{suffix_safe}_results.txt")


def evaluate_inline(expressions: List[str], calculator: Calculator) -> int:
    """
    Evaluate expressions in-process and print one result line each.

    :return: Exit code, 1 if any expression failed
    :rtype: int
    """
    exit_code = 0
    for expr in expressions:
        try:
            outcome = OperationResult(expression=expr, result=calculator.calculate(expr))
        except CalculatorError as exc:
            logger.debug(f"❌ {expr!r}: {exc}")
            outcome = OperationResult(expression=expr, error=str(exc))
            exit_code = 1
        print(outcome.format_line())
    return exit_code


def evaluate_file(input_path: Path, strict: bool) -> Path:
    """
    Evaluate a file through the client/server pair.

    :return: Path of the results file
    :rtype: Path
    """
    output_path: Path = build_output_path(input_path)

    server_process = Process(target=run_server, args=(output_path, strict))
    server_process.start()

    # Give the server time to start listening
    time.sleep(1)

    try:
        client = ArithmeticClient()
        client.send_file(input_path, output_path)
    finally:
        # Ensure the server is always stopped
        server_process.terminate()
        server_process.join()

    logger.info(f"📄✅ Results written to {output_path}")
    return output_path


def main(argv: Optional[List[str]] = None) -> int:
    cli_args = parse_args(argv)
    if cli_args.file_path is not None:
        evaluate_file(Path(cli_args.file_path), strict=not cli_args.lenient)
        return 0
    return evaluate_inline(cli_args.expressions, Calculator(strict=not cli_args.lenient))


if __name__ == "__main__":
    sys.exit(main())
