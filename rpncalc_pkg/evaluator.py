"""Postfix (RPN) evaluation over a value stack."""

from __future__ import annotations

import math

from .config import NUMBER_PREFIX_RE
from .logging_config import get_logger
from .types import StageResult, Token, eval_error

logger = get_logger("evaluator")


def parse_number(text: str) -> float | None:
    """Parse the longest leading numeric literal of text.

    Trailing characters are ignored, so "1.2.3" parses as 1.2.

    Returns:
        The parsed float, or None if text does not start with a number
    """
    match = NUMBER_PREFIX_RE.match(text)
    if match is None:
        return None
    return float(match.group(0))


def _apply_unary(symbol: str, value: float) -> float:
    return -value if symbol == "-" else value


def _apply_binary(symbol: str, lhs: float, rhs: float) -> StageResult[float]:
    if symbol in ("/", "%") and rhs == 0:
        if symbol == "/":
            return StageResult.failure(eval_error("division by zero", "DIVISION_BY_ZERO"))
        return StageResult.failure(eval_error("modulo by zero", "MODULO_BY_ZERO"))

    if symbol == "+":
        return StageResult.success(lhs + rhs)
    if symbol == "-":
        return StageResult.success(lhs - rhs)
    if symbol == "*":
        return StageResult.success(lhs * rhs)
    if symbol == "/":
        return StageResult.success(lhs / rhs)
    if symbol == "%":
        if not (math.isfinite(lhs) and math.isfinite(rhs)):
            return StageResult.failure(
                eval_error(f"math domain error in '{symbol}'", "DOMAIN_ERROR")
            )
        divisor = int(rhs)
        if divisor == 0:
            return StageResult.failure(eval_error("modulo by zero", "MODULO_BY_ZERO"))
        # Remainder takes the sign of the dividend, as in C.
        return StageResult.success(math.fmod(int(lhs), divisor))
    # "^"
    try:
        return StageResult.success(math.pow(lhs, rhs))
    except OverflowError:
        return StageResult.failure(
            eval_error(f"numeric overflow in '{symbol}'", "OVERFLOW")
        )
    except ValueError:
        return StageResult.failure(
            eval_error(f"math domain error in '{symbol}'", "DOMAIN_ERROR")
        )


def evaluate_rpn(rpn: list[Token]) -> StageResult[float]:
    """Compute the value of a postfix token sequence.

    Args:
        rpn: Postfix tokens as produced by converter.to_postfix

    Returns:
        StageResult holding the value, or an EvalError
    """
    stack: list[float] = []

    for token in rpn:
        if token.is_operator:
            symbol = token.text
            if token.unary or len(stack) < 2:
                if symbol not in ("+", "-") and not token.unary:
                    return StageResult.failure(
                        eval_error(
                            f"insufficient operands for binary operator '{symbol}'",
                            "INSUFFICIENT_OPERANDS",
                        )
                    )
                if not stack:
                    return StageResult.failure(
                        eval_error(
                            f"missing operand for unary operator '{symbol}'",
                            "MISSING_UNARY_OPERAND",
                        )
                    )
                stack.append(_apply_unary(symbol, stack.pop()))
                continue

            rhs = stack.pop()
            lhs = stack.pop()
            outcome = _apply_binary(symbol, lhs, rhs)
            if not outcome.ok:
                return outcome
            stack.append(outcome.value)
        else:
            value = parse_number(token.text)
            if value is None:
                return StageResult.failure(
                    eval_error(f"invalid numeric token '{token.text}'", "INVALID_NUMBER")
                )
            stack.append(value)

    if len(stack) != 1:
        return StageResult.failure(
            eval_error(
                "evaluation left an unexpected number of values on the stack "
                f"({len(stack)})",
                "STACK_SIZE",
            )
        )

    logger.debug("Evaluated %s to %r", " ".join(t.text for t in rpn), stack[0])
    return StageResult.success(stack[0])
