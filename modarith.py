"""
---
version: 0.1.0
created: 2026-10-18
updated: 2026-10-18
---

modarith.py — Modular arithmetic for the digraph affine attack.

  1. Errors (invalid modulus, missing inverse, unsolvable congruence)
  2. Extended Euclid and modular inverse
  3. Linear congruences a*x = b (mod m), including gcd(a, m) > 1
"""

from __future__ import annotations

import math


# ============================================================================
# 1. ERRORS
# ============================================================================

class ModularArithmeticError(ArithmeticError):
    """Base class for failures of the modular routines."""


class InvalidModulus(ModularArithmeticError, ValueError):
    """Modulus was zero or negative."""


class NoInverseExists(ModularArithmeticError):
    """gcd(a, m) != 1, so a has no inverse modulo m."""


class NoSolution(ModularArithmeticError):
    """The congruence a*x = b (mod m) has no solution."""


def _check_modulus(m: int) -> None:
    if m <= 0:
        raise InvalidModulus(f"Modulus must be a positive integer, got {m}")


# ============================================================================
# 2. INVERSE
# ============================================================================

def extended_gcd(a: int, b: int) -> tuple[int, int, int]:
    """
    Iterative extended Euclidean algorithm.

    Returns:
        (g, x, y) with a*x + b*y == g == gcd(a, b).
    """
    old_r, r = a, b
    old_x, x = 1, 0
    old_y, y = 0, 1
    while r != 0:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_x, x = x, old_x - q * x
        old_y, y = y, old_y - q * y
    return old_r, old_x, old_y


def modular_inverse(a: int, m: int) -> int:
    """
    Multiplicative inverse of a modulo m, normalized into [0, m).

    Raises:
        InvalidModulus: If m <= 0.
        NoInverseExists: If gcd(a, m) != 1.
    """
    _check_modulus(m)
    g, x, _ = extended_gcd(a % m, m)
    if g != 1:
        raise NoInverseExists(f"{a} has no multiplicative inverse modulo {m}")
    return x % m


# ============================================================================
# 3. LINEAR CONGRUENCES
# ============================================================================

def solve_linear_congruence(a: int, b: int, m: int) -> list[int]:
    """
    Solve a*x = b (mod m).

    With d = gcd(a, m) there are exactly d solutions when d divides b:
    x0 + k*(m/d) for k in [0, d), where x0 solves the reduced congruence
    (a/d)*x = b/d (mod m/d).

    Args:
        a: Coefficient (any integer, reduced mod m).
        b: Right-hand side (any integer, reduced mod m).
        m: Positive modulus.

    Returns:
        Ascending list of the d solutions in [0, m).

    Raises:
        InvalidModulus: If m <= 0.
        NoSolution: If b is not divisible by gcd(a, m).
    """
    _check_modulus(m)
    a %= m
    b %= m
    d = math.gcd(a, m)
    if b % d != 0:
        raise NoSolution(
            f"Congruence {a}x = {b} (mod {m}) has no solutions: "
            f"{b} is not divisible by {d}"
        )
    m1 = m // d
    x0 = (b // d) * modular_inverse(a // d, m1) % m1
    return [x0 + k * m1 for k in range(d)]
