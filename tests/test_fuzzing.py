"""Fuzzing tests: random inputs and a SymPy oracle for random expressions."""

import math
import random
import string
import unittest

import sympy as sp

from rpncalc_pkg.api import evaluate_expression
from rpncalc_pkg.types import StageResult


def random_expression(rng, depth):
    """Build a fully parenthesized expression with literal divisors only."""
    if depth == 0 or rng.random() < 0.25:
        value = rng.randint(1, 9)
        return f"(-{value})" if rng.random() < 0.2 else str(value)
    op = rng.choice("+-*/")
    lhs = random_expression(rng, depth - 1)
    rhs = str(rng.randint(1, 9)) if op == "/" else random_expression(rng, depth - 1)
    return f"({lhs} {op} {rhs})"


class TestAgainstSympy(unittest.TestCase):
    """Compare pipeline results with SymPy's exact evaluation."""

    def test_random_expressions(self):
        rng = random.Random(20240501)
        for _ in range(300):
            expression = random_expression(rng, 4)
            with self.subTest(expression=expression):
                result = evaluate_expression(expression)
                self.assertTrue(result.ok, result.error)
                expected = float(sp.sympify(expression))
                self.assertTrue(
                    math.isclose(result.value, expected, rel_tol=1e-9, abs_tol=1e-6),
                    f"{expression}: {result.value} != {expected}",
                )

    def test_left_associative_power_differs_from_sympy(self):
        # SymPy groups ** from the right; this calculator groups ^ from the left
        self.assertEqual(evaluate_expression("2 ^ 3 ^ 2").value, 64.0)
        self.assertEqual(sp.sympify("2**3**2"), 512)
        self.assertEqual(sp.sympify("(2**3)**2"), 64)


class TestRandomInput(unittest.TestCase):
    """Random garbage never raises; it always yields a StageResult."""

    def test_random_strings(self):
        rng = random.Random(7)
        for _ in range(500):
            length = rng.randint(0, 40)
            text = "".join(rng.choices(string.printable, k=length))
            result = evaluate_expression(text)
            self.assertIsInstance(result, StageResult)
            self.assertTrue(result.ok or result.error is not None)

    def test_random_operator_soup(self):
        rng = random.Random(11)
        alphabet = "0123456789.+-*/%^() "
        for _ in range(1000):
            text = "".join(rng.choices(alphabet, k=rng.randint(1, 25)))
            result = evaluate_expression(text)
            self.assertIsInstance(result, StageResult)
            if result.ok:
                self.assertIsInstance(result.value, float)


if __name__ == "__main__":
    unittest.main()
