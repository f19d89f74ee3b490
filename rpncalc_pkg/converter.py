"""Infix to postfix (RPN) conversion with the shunting-yard algorithm."""

from __future__ import annotations

from dataclasses import replace

from .config import PRECEDENCE, UNARY_PRECEDENCE
from .lexer import is_unary
from .logging_config import get_logger
from .types import StageResult, Token, TokenKind, syntax_error

logger = get_logger("converter")


def precedence(symbol: str, unary: bool = False) -> int:
    """Return the binding rank of an operator; unary signs outrank everything."""
    if unary:
        return UNARY_PRECEDENCE
    return PRECEDENCE.get(symbol, 0)


def to_postfix(tokens: list[Token]) -> StageResult[list[Token]]:
    """Reorder infix tokens into postfix order.

    Operators of equal rank are grouped left to right, ``^`` included, so
    ``2 ^ 3 ^ 2`` is ``(2 ^ 3) ^ 2``. Operators on the stack are ranked by
    symbol only. Operators in the output carry their resolved unary flag.

    Args:
        tokens: Tokens as produced by lexer.tokenize

    Returns:
        StageResult holding the postfix tokens, or a SyntaxError for a sign
        without an operand or mismatched parentheses
    """
    output: list[Token] = []
    stack: list[Token] = []
    previous: Token | None = None

    for index, token in enumerate(tokens):
        if token.kind is TokenKind.OPERATOR:
            unary = is_unary(token.text, previous.text if previous else None)
            if unary:
                following = tokens[index + 1] if index + 1 < len(tokens) else None
                if following is None or following.kind in (
                    TokenKind.OPERATOR,
                    TokenKind.RIGHT_PAREN,
                ):
                    return StageResult.failure(
                        syntax_error(
                            f"missing operand after unary operator '{token.text}'",
                            "MISSING_UNARY_OPERAND",
                        )
                    )
            rank = precedence(token.text, unary)
            while stack and stack[-1].is_operator and precedence(stack[-1].text) >= rank:
                output.append(stack.pop())
            stack.append(replace(token, unary=unary))
        elif token.kind is TokenKind.LEFT_PAREN:
            stack.append(token)
        elif token.kind is TokenKind.RIGHT_PAREN:
            while stack and stack[-1].kind is not TokenKind.LEFT_PAREN:
                output.append(stack.pop())
            # A ")" with no "(" left is tolerated; the drain below reports leftovers.
            if stack:
                stack.pop()
        else:
            output.append(token)
        previous = token

    while stack:
        top = stack.pop()
        if top.kind in (TokenKind.LEFT_PAREN, TokenKind.RIGHT_PAREN):
            return StageResult.failure(
                syntax_error("mismatched parentheses", "MISMATCHED_PARENTHESES")
            )
        output.append(top)

    logger.debug("Postfix: %s", " ".join(t.text for t in output))
    return StageResult.success(output)
