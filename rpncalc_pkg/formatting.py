"""Result formatting helpers."""

from __future__ import annotations

from typing import Any

from . import config
from .types import Token


def format_number(val: Any, precision: int | None = None) -> str:
    """Format a numeric value with specified precision.

    Args:
        val: Numeric value to format
        precision: Number of significant digits (default: config.OUTPUT_PRECISION)

    Returns:
        Formatted string representation of the number
    """
    if precision is None:
        precision = config.OUTPUT_PRECISION
    try:
        fmt = "{:." + str(int(precision)) + "g}"
        return fmt.format(float(val))
    except (ValueError, TypeError, OverflowError):
        # Fallback for non-numeric values
        return str(val)


def format_rpn(tokens: list[Token]) -> str:
    """Render postfix tokens space-separated; unary signs are shown as ``u+``/``u-``."""
    return " ".join(f"u{t.text}" if t.unary else t.text for t in tokens)
