"""Batch test harness: evaluate a file of expressions and check expectations.

Each non-blank, non-comment line holds one case::

    3 + 4            => 7
    2 ^ 3 ^ 2        => 64
    4 / 0            => !eval
    1 + 1

The expectation after ``=>`` is either a number or ``!lex``, ``!syntax`` or
``!eval`` for an expected failure of that kind. A case without an
expectation passes as long as it evaluates.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from .api import evaluate_many
from .formatting import format_number
from .logging_config import get_logger
from .types import ErrorKind, EvalResult

logger = get_logger("batch")

EXPECT_SEPARATOR = "=>"
COMMENT_PREFIX = "#"


@dataclass
class BatchCase:
    line_no: int
    expression: str
    expected_value: float | None = None
    expected_error: str | None = None  # ErrorKind value


@dataclass
class BatchRecord:
    case: BatchCase
    result: EvalResult
    passed: bool


@dataclass
class BatchReport:
    records: list[BatchRecord]

    @property
    def passed(self) -> int:
        return sum(1 for r in self.records if r.passed)

    @property
    def failed(self) -> int:
        return len(self.records) - self.passed

    @property
    def ok(self) -> bool:
        return self.failed == 0

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "passed": self.passed,
            "failed": self.failed,
            "cases": [
                {
                    "line": r.case.line_no,
                    "expression": r.case.expression,
                    "passed": r.passed,
                    **r.result.to_dict(),
                }
                for r in self.records
            ],
        }


def parse_case(line: str, line_no: int) -> BatchCase | None:
    """Parse one harness line. Returns None for blank and comment lines.

    Raises:
        ValueError: If the expectation after "=>" is malformed
    """
    stripped = line.strip()
    if not stripped or stripped.startswith(COMMENT_PREFIX):
        return None

    expression, sep, expectation = stripped.partition(EXPECT_SEPARATOR)
    case = BatchCase(line_no=line_no, expression=expression.strip())
    if not sep:
        return case

    expectation = expectation.strip()
    if expectation.startswith("!"):
        kind = expectation[1:].lower()
        if kind not in {k.value for k in ErrorKind}:
            raise ValueError(f"line {line_no}: unknown error kind '{expectation}'")
        case.expected_error = kind
    else:
        try:
            case.expected_value = float(expectation)
        except ValueError:
            raise ValueError(
                f"line {line_no}: expected value '{expectation}' is not a number"
            ) from None
    return case


def parse_cases(lines: Iterable[str]) -> list[BatchCase]:
    cases = []
    for line_no, line in enumerate(lines, start=1):
        case = parse_case(line, line_no)
        if case is not None:
            cases.append(case)
    return cases


def check_case(case: BatchCase, result: EvalResult) -> bool:
    """Return True if result meets the case's expectation."""
    if case.expected_error is not None:
        return not result.ok and result.error_kind == case.expected_error
    if not result.ok:
        return False
    if case.expected_value is None:
        return True
    return math.isclose(result.value, case.expected_value, rel_tol=1e-9, abs_tol=1e-12)


def run_batch(cases: list[BatchCase], workers: int | None = None) -> BatchReport:
    """Evaluate every case independently; failures never stop the run."""
    results = evaluate_many((c.expression for c in cases), workers=workers)
    records = [
        BatchRecord(case=case, result=result, passed=check_case(case, result))
        for case, result in zip(cases, results)
    ]
    report = BatchReport(records=records)
    logger.info("Batch finished: %d passed, %d failed", report.passed, report.failed)
    return report


def format_report(report: BatchReport) -> str:
    """Render a report as human-readable lines."""
    lines = []
    for record in report.records:
        case, result = record.case, record.result
        status = "PASS" if record.passed else "FAIL"
        outcome = f"Result: {result.result}" if result.ok else f"Error: {result.error}"
        line = f"[{status}] {case.line_no}: {case.expression} -> {outcome}"
        if not record.passed:
            if case.expected_error is not None:
                line += f" (expected {ErrorKind(case.expected_error).label})"
            elif case.expected_value is not None:
                line += f" (expected {format_number(case.expected_value)})"
        lines.append(line)
    lines.append("-" * 50)
    lines.append(f"{report.passed} passed, {report.failed} failed")
    return "\n".join(lines)
