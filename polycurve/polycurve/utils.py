"""Numeric helpers shared by the regression engine and the curve model.

Everything in here is pure: no function mutates its arguments. The in-place
point maintenance (``add_point``/``remove_point``) lives in
``polycurve.core.points`` because it needs the regression engine.
"""
from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .constants import VARIABLE
from .exceptions import InvalidInputError

Point = List[float]


def round_to(n: float, p: int) -> float:
    """Round ``n`` to ``p`` decimal places, halves away from zero.

    ``p`` may be zero or negative (``round_to(1234, -2) == 1200``).
    NaN and infinities are returned unchanged.

    >>> round_to(7.128, 2)
    7.13
    """
    if p >= 0:
        m = 10 ** p
        return float(np.sign(n) * np.floor(np.abs(n) * m + 0.5) / m)
    m = 10 ** -p
    return float(np.sign(n) * np.floor(np.abs(n) / m + 0.5) * m)


def int_range(n: int) -> List[int]:
    """Return ``[0, 1, ..., n - 1]``."""
    return list(range(n))


def precision_to_step_size(precision: int) -> float:
    """Step size of a numeric input showing ``precision`` decimal places."""
    # parse the decimal literal so that e.g. 2 gives exactly 0.01
    return float(f"1e{-precision}")


def require_finite(**values) -> None:
    for name, value in values.items():
        try:
            ok = math.isfinite(value)
        except TypeError:
            ok = False
        if not ok:
            raise InvalidInputError(
                f"{name} must be a finite number, got {value!r}"
            )


def require_range(lower_name: str, lower, upper_name: str, upper) -> None:
    require_finite(**{lower_name: lower, upper_name: upper})
    if upper <= lower:
        raise InvalidInputError(
            f"{upper_name} ({upper}) must be greater than {lower_name} ({lower})"
        )


def points_to_arrays(points: Sequence[Sequence[float]]) -> Tuple[np.ndarray, np.ndarray]:
    """Validate ``points`` and split them into x and y arrays."""
    for i, point in enumerate(points):
        if len(point) != 2:
            raise InvalidInputError(
                f"point {i} must be an [x, y] pair, got {point!r}"
            )
        require_finite(**{f"points[{i}].x": point[0], f"points[{i}].y": point[1]})
    arr = np.asarray(points, dtype=float).reshape(len(points), 2)
    return arr[:, 0], arr[:, 1]


def points_to_frame(points: Sequence[Sequence[float]]) -> pd.DataFrame:
    """Return the points as a DataFrame with ``x`` and ``y`` columns."""
    return pd.DataFrame(
        [[float(p[0]), float(p[1])] for p in points], columns=["x", "y"]
    )


def generate_random_points(
    n: int,
    precision: int,
    x_min: float,
    x_max: float,
    y_min: float,
    y_max: float,
    rng: Optional[np.random.Generator] = None,
) -> List[Point]:
    """Create ``n`` points evenly spaced on ``[x_min, x_max]`` with random y.

    The first point sits on ``x_min`` and the last on ``x_max``. The y values
    are drawn uniformly from ``[y_min, y_max)`` and rounded to ``precision``
    decimal places; x values are left as computed. Pass a seeded ``rng`` to
    make the output reproducible.
    """
    if n < 2:
        raise InvalidInputError(f"at least 2 points are required, got n={n}")
    require_range("x_min", x_min, "x_max", x_max)
    require_range("y_min", y_min, "y_max", y_max)
    rng = rng if rng is not None else np.random.default_rng()

    x_length = x_max - x_min
    y_length = y_max - y_min
    return [
        [
            (x_length / (n - 1)) * i + x_min,
            round_to(float(rng.random()) * y_length + y_min, precision),
        ]
        for i in int_range(n)
    ]


def sort_points_by_x(points: Sequence[Point]) -> List[Point]:
    """Return a new list of ``points`` sorted by x.

    The list is a shallow copy: the input list keeps its order but the
    point objects are shared.
    """
    return sorted(points, key=lambda p: p[0])


def polynomial_value(x: float, coefficients: Sequence[float]) -> float:
    """Evaluate the polynomial at ``x`` (coefficients highest degree first).

    >>> polynomial_value(2, [-1, 2, 1])
    1
    """
    n = len(coefficients)
    return sum(c * x ** (n - i - 1) for i, c in enumerate(coefficients))


def _format_coefficient(value: float) -> str:
    value = abs(float(value))
    if value.is_integer():
        return str(int(value))
    # plain decimal, never scientific notation: 2e-05 -> "0.00002"
    return np.format_float_positional(value, trim="-")


def generate_polynomial_equation(coefficients: Sequence[float]) -> str:
    """Readable polynomial, e.g. ``[3, -2, 1]`` -> ``"3*x^2 - 2*x + 1"``.

    Zero terms are dropped and a coefficient of 1 is not written in front of
    a variable. All-zero coefficients give an empty string.
    """
    n = len(coefficients)
    parts = []
    for index, coefficient in enumerate(coefficients):
        exponent = n - index - 1
        # the first shown term carries no '+' and no surrounding spaces
        shown_before = any(c != 0 for c in coefficients[:index])

        if coefficient >= 0:
            sign = " + " if shown_before else ""
        else:
            sign = " - " if shown_before else "-"

        if exponent > 1:
            variable_part = f"{VARIABLE}^{exponent}"
        elif exponent == 1:
            variable_part = VARIABLE
        else:
            variable_part = ""

        coefficient_part = _format_coefficient(coefficient)
        if coefficient_part == "0":
            continue
        if coefficient_part == "1" and variable_part:
            coefficient_part = ""
        multiplication = "*" if variable_part and coefficient_part else ""
        parts.append(f"{sign}{coefficient_part}{multiplication}{variable_part}")
    return "".join(parts)


def generate_polynomial_term(n: int, i: int, variable: str = VARIABLE) -> str:
    """Text shown after the ``i``-th of ``n`` coefficient inputs.

    For ``-7 * x^3 + 3 * x^2 + x + 5`` the terms are ``" * x^3 + "``,
    ``" * x^2 + "``, ``" * x + "`` and ``""``.
    """
    exponent = n - i - 1
    result = ""
    if exponent > 1:
        result += f" * {variable}^{exponent}"
    if exponent == 1:
        result += f" * {variable}"
    if i < n - 1:
        result += " + "
    return result


__all__ = [
    "Point",
    "round_to",
    "int_range",
    "precision_to_step_size",
    "require_finite",
    "require_range",
    "points_to_arrays",
    "points_to_frame",
    "generate_random_points",
    "sort_points_by_x",
    "polynomial_value",
    "generate_polynomial_equation",
    "generate_polynomial_term",
]
