"""Public API for rpncalc - returns structured objects without side effects."""

from __future__ import annotations

from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor

from . import config
from .converter import to_postfix
from .evaluator import evaluate_rpn
from .formatting import format_number, format_rpn
from .lexer import tokenize
from .logging_config import get_logger
from .types import EvalResult, StageResult, Token, lex_error, syntax_error

logger = get_logger("api")


def to_rpn(expression: str) -> StageResult[list[Token]]:
    """Tokenize an expression and convert it to postfix order.

    Args:
        expression: Infix expression (e.g. "3 + 4 * 2")

    Returns:
        StageResult with the postfix tokens, or the first LexError/SyntaxError

    Example:
        >>> from rpncalc_pkg.api import to_rpn
        >>> [t.text for t in to_rpn("3 + 4 * 2").value]
        ['3', '4', '2', '*', '+']
    """
    if len(expression) > config.MAX_INPUT_LENGTH:
        return StageResult.failure(
            lex_error(
                f"input too long ({len(expression)} characters, "
                f"limit {config.MAX_INPUT_LENGTH})",
                "TOO_LONG",
            )
        )

    lexed = tokenize(expression)
    if not lexed.ok:
        return lexed
    if not lexed.value:
        return StageResult.failure(
            lex_error("no valid tokens found in expression", "EMPTY_EXPRESSION")
        )

    converted = to_postfix(lexed.value)
    if not converted.ok:
        return converted
    if not converted.value:
        return StageResult.failure(
            syntax_error("could not convert infix to postfix notation", "EMPTY_RPN")
        )
    return converted


def evaluate_expression(expression: str) -> StageResult[float]:
    """Run the full pipeline: tokenize, convert to postfix, evaluate.

    Args:
        expression: Infix expression

    Returns:
        StageResult with the unrounded float value, or the first error

    Example:
        >>> from rpncalc_pkg.api import evaluate_expression
        >>> evaluate_expression("2 ^ 3 ^ 2").value
        64.0
        >>> str(evaluate_expression("4 / 0").error)
        'EvalError: division by zero'
    """
    converted = to_rpn(expression)
    if not converted.ok:
        return StageResult.failure(converted.error)
    return evaluate_rpn(converted.value)


def evaluate(expression: str) -> EvalResult:
    """Evaluate an expression into an EvalResult.

    Args:
        expression: Infix expression (e.g. "8 - (5 - 2)")

    Returns:
        EvalResult with the value, its formatted text and the postfix form
    """
    converted = to_rpn(expression)
    if converted.ok:
        rpn_text = format_rpn(converted.value)
        outcome = evaluate_rpn(converted.value)
    else:
        rpn_text = None
        outcome = StageResult.failure(converted.error)

    if not outcome.ok:
        error = outcome.error
        logger.info("Evaluation of %r failed: %s", expression, error)
        return EvalResult(
            ok=False,
            rpn=rpn_text,
            error=str(error),
            error_kind=error.kind.value,
            error_code=error.code,
        )
    return EvalResult(
        ok=True,
        value=outcome.value,
        result=format_number(outcome.value),
        rpn=rpn_text,
    )


def evaluate_many(
    expressions: Iterable[str], workers: int | None = None
) -> list[EvalResult]:
    """Evaluate independent expressions concurrently.

    Each expression runs its own pipeline; nothing is shared between them.

    Args:
        expressions: Expressions to evaluate
        workers: Thread count (default: config.WORKER_POOL_SIZE)

    Returns:
        One EvalResult per expression, in input order
    """
    items = list(expressions)
    if not items:
        return []
    max_workers = max(1, workers or config.WORKER_POOL_SIZE)
    if max_workers == 1 or len(items) == 1:
        return [evaluate(expr) for expr in items]
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        return list(pool.map(evaluate, items))


def validate_expression(expression: str) -> tuple[bool, str | None]:
    """Check that an expression tokenizes and converts, without evaluating it.

    Returns:
        Tuple of (is_valid, error_message)

    Example:
        >>> from rpncalc_pkg.api import validate_expression
        >>> validate_expression("2 * (3 + 1)")
        (True, None)
        >>> validate_expression("7 & 3")
        (False, "LexError: invalid character '&' at position 2")
    """
    converted = to_rpn(expression)
    if not converted.ok:
        return False, str(converted.error)
    return True, None
