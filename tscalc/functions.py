"""
Sample scalar functions.

Each entry pairs a callback f(t) with its ordinary derivative f'(t), which
is what the delta derivative reduces to at dense points. All functions are
pure and total on the reals.
"""
from __future__ import annotations

import math
from typing import Callable, Dict, List

ScalarFunction = Callable[[float], float]

FUNCTION_NAMES = [
    "quadratic",
    "linear",
    "cubic",
    "exponential",
    "sine",
]

_FUNCTIONS: Dict[str, tuple[ScalarFunction, ScalarFunction, str]] = {
    "quadratic": (lambda t: 3 * t * t + 2 * t, lambda t: 6 * t + 2, "3t^2 + 2t"),
    "linear": (lambda t: 2 * t + 1, lambda t: 2.0, "2t + 1"),
    "cubic": (lambda t: t ** 3, lambda t: 3 * t * t, "t^3"),
    "exponential": (math.exp, math.exp, "exp(t)"),
    "sine": (math.sin, math.cos, "sin(t)"),
}


def get_function_names() -> List[str]:
    """Return the list of supported function names."""

    return FUNCTION_NAMES.copy()


def _lookup(name: str) -> tuple[ScalarFunction, ScalarFunction, str]:
    if name not in _FUNCTIONS:
        raise ValueError(f"Unknown function: {name}")
    return _FUNCTIONS[name]


def make_function(name: str) -> ScalarFunction:
    """Return the callback for a named function."""

    return _lookup(name)[0]


def exact_derivative(name: str) -> ScalarFunction:
    """Return the ordinary derivative of a named function."""

    return _lookup(name)[1]


def describe_function(name: str) -> str:
    """Human readable formula, e.g. ``3t^2 + 2t``."""

    return _lookup(name)[2]
