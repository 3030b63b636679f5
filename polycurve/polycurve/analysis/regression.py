"""Polynomial regression with linear least-squares, and curve sampling."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np
import pandas as pd
from scipy.linalg import qr, solve_triangular

from ..constants import CURVE_FREQUENCY
from ..exceptions import (
    DegenerateGeometryError,
    InvalidInputError,
    InvalidOrderError,
)
from ..utils import (
    Point,
    generate_polynomial_equation,
    int_range,
    points_to_arrays,
    polynomial_value,
    require_range,
    round_to,
)

logger = logging.getLogger(__name__)

# absorbs float noise in frequency * (x_max - x_min), e.g. 7 * (10.1 - 0.1)
_SAMPLE_COUNT_TOLERANCE = 1e-9


@dataclass
class RegressionResult:
    coefficients: List[float]
    r2: float
    string: str
    order: int
    precision: int
    y_fit: pd.Series

    @property
    def equation(self) -> List[float]:
        """Alias of ``coefficients``."""
        return self.coefficients

    def predict(self, x: float) -> Point:
        return [x, polynomial_value(x, self.coefficients)]


def _r2(y, yhat):
    ss_res = np.sum((y - yhat) ** 2)
    ss_tot = np.sum((y - np.mean(y)) ** 2)
    if ss_tot == 0:
        # constant data: only a perfect fit counts
        return 1.0 if ss_res == 0 else 0.0
    return float(1 - ss_res / ss_tot)


def check_order(order) -> None:
    if isinstance(order, bool) or not isinstance(order, (int, np.integer)):
        raise InvalidOrderError(f"order must be an integer, got {order!r}")
    if order < 0:
        raise InvalidOrderError(f"order must not be negative, got {order}")


def check_frequency(frequency) -> None:
    if isinstance(frequency, bool) or not isinstance(frequency, (int, np.integer)):
        raise InvalidInputError(f"frequency must be an integer, got {frequency!r}")
    if frequency < 1:
        raise InvalidInputError(f"frequency must be at least 1, got {frequency}")


def _least_squares(x: np.ndarray, y: np.ndarray, order: int) -> np.ndarray:
    # columns x^order ... x^0, matching the coefficient order
    design = np.vander(x, order + 1)
    q, r = qr(design, mode="economic")
    return solve_triangular(r, q.T @ y)


def polynomial_regression(
    points: Sequence[Sequence[float]], order: int, precision: int
) -> RegressionResult:
    """Fit ``points`` to a polynomial ``a_n*x^n + ... + a_1*x + a_0``.

    The coefficients are returned highest degree first and rounded to
    ``precision`` decimal places. R² is computed from the rounded
    coefficients and rounded to ``precision`` as well, so a perfect fit
    reports exactly ``1.0``.

    Raises ``InvalidOrderError`` if there are fewer than ``order + 1`` points
    and ``DegenerateGeometryError`` if there are fewer than ``order + 1``
    distinct x values.
    """
    check_order(order)
    x, y = points_to_arrays(points)
    if len(x) < order + 1:
        raise InvalidOrderError(
            f"a polynomial of order {order} needs at least {order + 1} "
            f"points, got {len(x)}"
        )
    distinct = len(np.unique(x))
    if distinct < order + 1:
        raise DegenerateGeometryError(
            f"a polynomial of order {order} needs at least {order + 1} "
            f"distinct x values, got {distinct}"
        )

    raw = _least_squares(x, y, order)
    # + 0.0 turns -0.0 into 0.0
    coefficients = [round_to(c, precision) + 0.0 for c in raw]
    yhat = np.array([polynomial_value(xi, coefficients) for xi in x])
    r2 = round_to(_r2(y, yhat), precision)
    logger.debug(
        "fitted order %d to %d points: coefficients=%s r2=%s",
        order, len(x), coefficients, r2,
    )
    return RegressionResult(
        coefficients=coefficients,
        r2=r2,
        string="y = " + generate_polynomial_equation(coefficients),
        order=order,
        precision=precision,
        y_fit=pd.Series(yhat, name="y_fit"),
    )


def sample_count(x_min: float, x_max: float, frequency: int = CURVE_FREQUENCY) -> int:
    """Number of samples between ``x_min`` and ``x_max`` (both included).

    A fractional span is truncated: ``sample_count(0, 0.5) == 4``.
    """
    check_frequency(frequency)
    return int(math.floor(frequency * (x_max - x_min) + _SAMPLE_COUNT_TOLERANCE)) + 1


def generate_curve_points(
    points: Sequence[Sequence[float]],
    order: int,
    x_min: float,
    x_max: float,
    precision: int,
    frequency: int = CURVE_FREQUENCY,
) -> List[Point]:
    """Sample the fitted curve at ``x_min, x_min + 1/frequency, ..., x_max``.

    The polynomial is fitted to ``points`` with ``polynomial_regression``;
    its coefficients have ``precision`` decimal places. The sampled y values
    are not rounded.
    """
    require_range("x_min", x_min, "x_max", x_max)
    check_frequency(frequency)
    regression = polynomial_regression(points, order, precision)
    return [
        regression.predict(i / frequency + x_min)
        for i in int_range(sample_count(x_min, x_max, frequency))
    ]


__all__ = [
    "RegressionResult",
    "polynomial_regression",
    "generate_curve_points",
    "sample_count",
    "check_order",
    "check_frequency",
]
