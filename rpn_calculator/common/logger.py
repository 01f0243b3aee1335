"""Package-wide logger used by the server, the workers and the CLI."""
import logging
import os
import sys

LOG_FORMAT: str = "%(asctime)s [%(levelname)s] %(processName)s: %(message)s"

logger: logging.Logger = logging.getLogger("rpn_calculator")

if not logger.handlers:
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(_handler)
    logger.setLevel(os.environ.get("RPN_CALCULATOR_LOG_LEVEL", "INFO").upper())
    logger.propagate = False
