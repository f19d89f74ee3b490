"""Type definitions: tokens, stage results and the public result dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class TokenKind(Enum):
    NUMBER = "number"
    OPERATOR = "operator"
    LEFT_PAREN = "left_paren"
    RIGHT_PAREN = "right_paren"


@dataclass(frozen=True)
class Token:
    """A lexical token.

    ``unary`` is only ever set on operator tokens, and only by the
    infix-to-postfix converter.
    """

    kind: TokenKind
    text: str
    unary: bool = False

    @property
    def is_operator(self) -> bool:
        return self.kind is TokenKind.OPERATOR

    def __str__(self) -> str:
        return self.text


class ErrorKind(Enum):
    """Pipeline stage an error originates from."""

    LEX = "lex"
    SYNTAX = "syntax"
    EVAL = "eval"

    @property
    def label(self) -> str:
        return {
            ErrorKind.LEX: "LexError",
            ErrorKind.SYNTAX: "SyntaxError",
            ErrorKind.EVAL: "EvalError",
        }[self]


@dataclass(frozen=True)
class ExpressionError:
    """A failure in one pipeline stage, carried as a value."""

    kind: ErrorKind
    code: str
    message: str

    def __str__(self) -> str:
        return f"{self.kind.label}: {self.message}"


def lex_error(message: str, code: str) -> ExpressionError:
    return ExpressionError(ErrorKind.LEX, code, message)


def syntax_error(message: str, code: str) -> ExpressionError:
    return ExpressionError(ErrorKind.SYNTAX, code, message)


def eval_error(message: str, code: str) -> ExpressionError:
    return ExpressionError(ErrorKind.EVAL, code, message)


@dataclass(frozen=True)
class StageResult(Generic[T]):
    """Outcome of a pipeline stage: either a value or an ExpressionError."""

    value: T | None = None
    error: ExpressionError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> StageResult[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: ExpressionError) -> StageResult[T]:
        return cls(error=error)

    def __repr__(self) -> str:
        if self.error is not None:
            return f"StageResult(error={self.error!r})"
        return f"StageResult(value={self.value!r})"


@dataclass
class EvalResult:
    """Result of evaluating an arithmetic expression."""

    ok: bool
    value: float | None = None
    result: str | None = None
    rpn: str | None = None
    error: str | None = None
    error_kind: str | None = None
    error_code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.value is not None:
            result_dict["value"] = self.value
        if self.result is not None:
            result_dict["result"] = self.result
        if self.rpn is not None:
            result_dict["rpn"] = self.rpn
        if self.error is not None:
            result_dict["error"] = self.error
        if self.error_kind is not None:
            result_dict["error_kind"] = self.error_kind
        if self.error_code is not None:
            result_dict["error_code"] = self.error_code
        return result_dict

    def __repr__(self) -> str:
        """Return string representation of the result."""
        if not self.ok:
            return (
                f"EvalResult(ok=False, error_code={self.error_code!r}, "
                f"error={self.error!r})"
            )
        parts = [f"ok={self.ok}", f"value={self.value!r}"]
        if self.rpn is not None:
            parts.append(f"rpn={self.rpn!r}")
        return f"EvalResult({', '.join(parts)})"
