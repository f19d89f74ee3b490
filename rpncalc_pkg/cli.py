from __future__ import annotations

import argparse
import json
import sys

from . import config
from .api import evaluate, evaluate_expression
from .batch import format_report, parse_cases, run_batch
from .config import QUIT_COMMANDS, VERSION
from .logging_config import get_logger, setup_logging
from .types import EvalResult

logger = get_logger("cli")

BANNER = """---------------------------------
Arithmetic Expression Calculator
Enter an equation (or 'q' to quit):
Supported operators: + - * / % ^
---------------------------------"""


def _health_check() -> int:
    """Run health check against known expressions.

    Returns:
        Exit code (0 for success, non-zero for failures)
    """
    checks_passed = 0
    checks_failed = 0

    print("Running rpncalc health check...")
    print("-" * 50)
    print(f"[OK] Python {sys.version.split()[0]}")

    value_checks = [
        ("3 + 4", 7.0),
        ("8 - (5 - 2)", 5.0),
        ("2 ^ 3 ^ 2", 64.0),
        ("+(-2) * (-3)", 6.0),
        ("5.7 % 2", 1.0),
    ]
    for expression, expected in value_checks:
        outcome = evaluate_expression(expression)
        if outcome.ok and outcome.value == expected:
            print(f"[OK] {expression} = {outcome.value:g}")
            checks_passed += 1
        else:
            got = outcome.value if outcome.ok else outcome.error
            print(f"[FAIL] {expression}: expected {expected:g}, got {got}")
            checks_failed += 1

    error_checks = [
        ("4 / 0", "DIVISION_BY_ZERO"),
        ("2 * (4 + 3 - 1", "MISMATCHED_PARENTHESES"),
        ("7 & 3", "INVALID_CHARACTER"),
    ]
    for expression, code in error_checks:
        outcome = evaluate_expression(expression)
        if not outcome.ok and outcome.error.code == code:
            print(f"[OK] {expression} -> {outcome.error}")
            checks_passed += 1
        else:
            print(f"[FAIL] {expression}: expected {code}")
            checks_failed += 1

    print("-" * 50)
    print(f"Health check: {checks_passed} passed, {checks_failed} failed")
    return 0 if checks_failed == 0 else 1


def print_result_pretty(
    res: EvalResult, output_format: str = "human", show_rpn: bool = False
) -> None:
    """Print result in specified format.

    Args:
        res: Evaluation result
        output_format: "json" for JSON output, "human" for human-readable
        show_rpn: Also print the postfix form (human format only)
    """
    if output_format == "json":
        print(json.dumps(res.to_dict(), indent=2, ensure_ascii=False))
        return
    if show_rpn and res.rpn is not None:
        print(f"RPN: {res.rpn}")
    if not res.ok:
        print(f"Error: {res.error}")
        return
    print(f"Result: {res.result}")


def repl_loop(output_format: str = "human", show_rpn: bool = False) -> None:
    """Interactive loop; errors are printed and never end the session."""
    try:
        import readline  # noqa: F401
    except ImportError:
        # readline not available on Windows - that's fine
        pass

    print(BANNER)
    while True:
        try:
            raw = input(">> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nExiting...")
            break
        if not raw:
            continue
        if raw.lower() in QUIT_COMMANDS:
            print("Exiting...")
            break
        if raw.lower() == "help":
            print(BANNER)
            continue

        res = evaluate(raw)
        print_result_pretty(res, output_format, show_rpn)
        print()


def _run_batch_file(path: str, output_format: str, workers: int | None) -> int:
    try:
        if path == "-":
            lines = sys.stdin.read().splitlines()
        else:
            with open(path, encoding="utf-8") as handle:
                lines = handle.read().splitlines()
    except OSError as e:
        logger.error("Cannot read batch file %s: %s", path, e)
        print(f"Error: cannot read batch file: {e}")
        return 2

    try:
        cases = parse_cases(lines)
    except ValueError as e:
        print(f"Error: {e}")
        return 2

    report = run_batch(cases, workers=workers)
    if output_format == "json":
        print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(format_report(report))
    return 0 if report.ok else 1


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for the rpncalc CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = argparse.ArgumentParser(
        prog="rpncalc",
        description="Evaluate arithmetic expressions via shunting-yard and RPN.",
    )
    parser.add_argument(
        "-e",
        "--eval",
        type=str,
        help="Evaluate one expression and exit (non-interactive)",
        dest="eval_expr",
    )
    parser.add_argument(
        "--batch",
        type=str,
        metavar="FILE",
        help="Run a batch file of expressions ('-' reads stdin)",
    )
    parser.add_argument(
        "-j",
        "--jobs",
        type=int,
        help="Worker threads for batch evaluation (default: 4)",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "--rpn", action="store_true", help="Also show the postfix (RPN) form"
    )
    parser.add_argument(
        "-p", "--precision", type=int, help="Set output precision (significant digits)"
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    parser.add_argument(
        "--health-check",
        action="store_true",
        help="Run health check on known expressions",
    )
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level, log_file=args.log_file)

    if args.precision and args.precision > 0:
        config.OUTPUT_PRECISION = int(args.precision)

    if args.version:
        print(VERSION)
        return 0
    if args.health_check:
        return _health_check()
    if args.batch:
        return _run_batch_file(args.batch, args.format, args.jobs)
    if args.eval_expr is not None:
        res = evaluate(args.eval_expr.strip())
        print_result_pretty(res, args.format, args.rpn)
        return 0 if res.ok else 1

    repl_loop(args.format, args.rpn)
    return 0


if __name__ == "__main__":
    sys.exit(main_entry())
