"""Lexical analysis of arithmetic expressions.

The tokenizer scans the input once, left to right. Digits and decimal
points accumulate in a numeric buffer; a unary sign seen where an operand
is expected starts that buffer, so ``-5`` becomes a single number token.
"""

from __future__ import annotations

from .config import (
    DECIMAL_POINT,
    DIGITS,
    LEFT_PAREN,
    OPERATORS,
    RIGHT_PAREN,
    SIGN_OPERATORS,
)
from .logging_config import get_logger
from .types import StageResult, Token, TokenKind, lex_error

logger = get_logger("lexer")


def is_operator_symbol(text: str | None) -> bool:
    """Return True if text is a single operator character."""
    return text is not None and len(text) == 1 and text in OPERATORS


def is_unary(symbol: str, previous: str | None) -> bool:
    """Decide whether a ``+``/``-`` is a sign rather than a binary operator.

    Args:
        symbol: Operator text
        previous: Text of the previous token, or None at the start of input

    Returns:
        True when symbol is ``+``/``-`` and previous is absent, ``(`` or an operator
    """
    if symbol not in SIGN_OPERATORS:
        return False
    return not previous or previous == LEFT_PAREN or is_operator_symbol(previous)


def _classify(text: str) -> TokenKind:
    if text == LEFT_PAREN:
        return TokenKind.LEFT_PAREN
    if text == RIGHT_PAREN:
        return TokenKind.RIGHT_PAREN
    if is_operator_symbol(text):
        return TokenKind.OPERATOR
    return TokenKind.NUMBER


def tokenize(expression: str) -> StageResult[list[Token]]:
    """Split an expression into number, operator and parenthesis tokens.

    Args:
        expression: Raw expression text (e.g. "8 - (5 - 2)")

    Returns:
        StageResult holding the token list, or a LexError for an invalid
        character or a sign with no operand after it
    """
    tokens: list[Token] = []
    buffer = ""
    previous: str | None = None

    for position, char in enumerate(expression):
        if char.isspace():
            continue

        if char in OPERATORS or char in (LEFT_PAREN, RIGHT_PAREN):
            if not buffer and is_unary(char, previous):
                buffer = char
            else:
                if buffer:
                    if buffer in SIGN_OPERATORS and char != LEFT_PAREN:
                        return StageResult.failure(
                            lex_error(
                                f"missing operand after operator '{buffer}'",
                                "MISSING_OPERAND",
                            )
                        )
                    tokens.append(Token(_classify(buffer), buffer))
                    buffer = ""
                tokens.append(Token(_classify(char), char))
            previous = char
        elif char in DIGITS or char == DECIMAL_POINT:
            buffer += char
            previous = buffer
        else:
            return StageResult.failure(
                lex_error(
                    f"invalid character '{char}' at position {position}",
                    "INVALID_CHARACTER",
                )
            )

    if buffer:
        tokens.append(Token(_classify(buffer), buffer))

    logger.debug("Tokenized %r into %s", expression, [t.text for t in tokens])
    return StageResult.success(tokens)
