"""Centralized configuration for rpncalc.

This module defines:
- Input validation limits
- Output formatting precision
- Worker pool size for batch evaluation
- Operator symbols and the precedence table
- Regex patterns for numeric literals

Configuration can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with RPNCALC_)
"""

import os
import re

try:
    import importlib.metadata

    VERSION = importlib.metadata.version("rpncalc")
except Exception:
    # Fallback if package not installed
    VERSION = "1.0.0"

# Input validation limits
MAX_INPUT_LENGTH = int(os.getenv("RPNCALC_MAX_INPUT_LENGTH", "10000"))  # characters

# Output formatting
OUTPUT_PRECISION = int(
    os.getenv("RPNCALC_OUTPUT_PRECISION", "6")
)  # significant digits, same as C++ iostream default

# Batch evaluation
WORKER_POOL_SIZE = int(
    os.getenv("RPNCALC_WORKER_POOL_SIZE", "4")
)  # Number of threads used by evaluate_many

# Operators
OPERATORS = frozenset("+-*/%^")
SIGN_OPERATORS = frozenset("+-")
LEFT_PAREN = "("
RIGHT_PAREN = ")"
DECIMAL_POINT = "."
DIGITS = frozenset("0123456789")

PRECEDENCE = {
    "+": 1,
    "-": 1,
    "*": 2,
    "/": 2,
    "%": 2,
    "^": 3,
}
UNARY_PRECEDENCE = 4

# Longest leading numeric literal, e.g. "1.2" out of "1.2.3"
NUMBER_PREFIX_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)")

# REPL
QUIT_COMMANDS = {"q", "quit", "exit"}
