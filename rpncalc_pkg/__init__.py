"""rpncalc package: tokenizer, shunting-yard converter, RPN evaluator, and CLI."""

__all__ = [
    "config",
    "lexer",
    "converter",
    "evaluator",
    "formatting",
    "batch",
    "cli",
    "types",
    "api",
    "logging_config",
]

# Public API exports

__api_exports__ = [
    "evaluate",
    "evaluate_expression",
    "evaluate_many",
    "to_rpn",
    "validate_expression",
]
