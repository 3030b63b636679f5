import math

import numpy as np
import pytest

from polycurve.exceptions import InvalidInputError
from polycurve.utils import (
    generate_polynomial_equation,
    generate_polynomial_term,
    generate_random_points,
    int_range,
    points_to_frame,
    polynomial_value,
    precision_to_step_size,
    round_to,
    sort_points_by_x,
)


@pytest.mark.parametrize("n, p, expected", [
    (1.4, 0, 1),
    (1.6, 0, 2),
    (7.128, 2, 7.13),
    (2.5, 0, 3),
    (-2.5, 0, -3),   # halves go away from zero
    (-7.128, 2, -7.13),
    (1234, -2, 1200),
    (1250, -2, 1300),
])
def test_round_to(n, p, expected):
    assert round_to(n, p) == expected


def test_round_to_passes_through_non_finite():
    assert math.isnan(round_to(float("nan"), 2))
    assert round_to(float("inf"), 2) == float("inf")
    assert round_to(float("-inf"), 2) == float("-inf")


@pytest.mark.parametrize("n, expected", [
    (0, []),
    (1, [0]),
    (2, [0, 1]),
    (8, [0, 1, 2, 3, 4, 5, 6, 7]),
])
def test_int_range(n, expected):
    assert int_range(n) == expected


@pytest.mark.parametrize("precision, expected", [
    (-3, 1000),
    (-2, 100),
    (-1, 10),
    (0, 1),
    (1, 0.1),
    (2, 0.01),
    (3, 0.001),
])
def test_precision_to_step_size(precision, expected):
    assert precision_to_step_size(precision) == expected


@pytest.mark.parametrize("coefficients, expected", [
    ([1], "1"),
    ([2], "2"),
    ([1, 0], "x"),
    ([1, 1], "x + 1"),
    ([2, -2], "2*x - 2"),
    ([1, 0, 0], "x^2"),
    ([2, 1, 0], "2*x^2 + x"),
    ([-6, 3, -1], "-6*x^2 + 3*x - 1"),
    ([0, -1, 0.5], "-x + 0.5"),
    ([0.12, 7.5, 200.0], "0.12*x^2 + 7.5*x + 200"),
    ([0.00002, 0, 1], "0.00002*x^2 + 1"),
    ([-0.00526, 0.0001, 0], "-0.00526*x^2 + 0.0001*x"),
    ([0, 0, 0], ""),
])
def test_generate_polynomial_equation(coefficients, expected):
    assert generate_polynomial_equation(coefficients) == expected


@pytest.mark.parametrize("n, i, variable, expected", [
    (0, 0, "x", ""),
    (1, 0, "x", ""),
    (2, 0, "x", " * x + "),
    (2, 1, "x", ""),
    (3, 0, "y", " * y^2 + "),
    (3, 1, "y", " * y + "),
    (3, 2, "y", ""),
])
def test_generate_polynomial_term(n, i, variable, expected):
    assert generate_polynomial_term(n, i, variable) == expected


def test_polynomial_value():
    # y = -x^2 + 2x + 1
    assert polynomial_value(2, [-1, 2, 1]) == 1
    assert polynomial_value(0, [-1, 2, 1]) == 1
    assert polynomial_value(3.5, [4]) == 4


def test_generate_random_points_layout(rng):
    points = generate_random_points(3, 2, -10, 10, -10, 10, rng=rng)
    assert [p[0] for p in points] == [-10, 0, 10]
    for _, y in points:
        assert -10 <= y <= 10
        assert round_to(y, 2) == y


def test_generate_random_points_reproducible_with_seed():
    a = generate_random_points(5, 3, 0, 4, 0, 1, rng=np.random.default_rng(7))
    b = generate_random_points(5, 3, 0, 4, 0, 1, rng=np.random.default_rng(7))
    assert a == b


@pytest.mark.parametrize("args", [
    (1, 2, 0, 10, 0, 10),             # too few points
    (3, 2, 10, 10, 0, 10),            # empty x range
    (3, 2, 0, 10, 5, -5),             # inverted y range
    (3, 2, float("nan"), 10, 0, 10),  # non-finite bound
])
def test_generate_random_points_rejects_bad_bounds(args):
    with pytest.raises(InvalidInputError):
        generate_random_points(*args)


def test_sort_points_by_x_returns_copy():
    points = [[3, 1], [0, 2], [1, 5]]
    original = [list(p) for p in points]
    result = sort_points_by_x(points)
    assert result == [[0, 2], [1, 5], [3, 1]]
    assert points == original
    assert sort_points_by_x(result) == result


def test_sort_points_by_x_is_stable():
    points = [[1, "a"], [0, "b"], [1, "c"]]
    assert sort_points_by_x(points) == [[0, "b"], [1, "a"], [1, "c"]]


def test_points_to_frame():
    df = points_to_frame([[0, 1], [2, 3]])
    assert list(df.columns) == ["x", "y"]
    assert df["y"].tolist() == [1.0, 3.0]
