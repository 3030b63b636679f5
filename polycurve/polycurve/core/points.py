"""Point-set maintenance.

``add_point`` and ``remove_point`` mutate the list they are given;
``change_order`` works on a deep copy and returns it. Inputs are validated
before any mutation, so a failed call leaves the caller's list untouched.
"""
from __future__ import annotations

import copy
import logging
from typing import List, Literal, Union

from ..analysis.regression import check_order, polynomial_regression
from ..exceptions import DegenerateGeometryError
from ..utils import Point, points_to_arrays, round_to, sort_points_by_x

logger = logging.getLogger(__name__)


def remove_point(points: List[Point]) -> Union[Point, Literal[False]]:
    """Remove the second point in place and return it.

    The first and last points stay where they are, so the visible ends of
    the curve do not move. Returns ``False`` if there is no second point.
    """
    if len(points) < 2:
        return False
    removed = points.pop(1)
    logger.debug("removed point %s, %d left", removed, len(points))
    return removed


def add_point(
    points: List[Point], coefficient_precision: int, points_precision: int
) -> None:
    """Insert a new point lying on the curve through ``points`` (in place).

    The new x is the middle of the widest gap between neighbouring list
    entries. The new y comes from the interpolating polynomial of order
    ``len(points) - 1`` with ``coefficient_precision`` decimal places. Both
    coordinates are rounded to ``points_precision`` and the list is re-sorted
    by x afterwards.
    """
    if len(points) < 2:
        raise DegenerateGeometryError(
            f"at least 2 points are needed to insert a point, got {len(points)}"
        )
    points_to_arrays(points)

    # the last entry is compared with itself and so has a gap of zero
    gaps = [
        abs(p[0] - (points[i + 1] if i + 1 < len(points) else p)[0])
        for i, p in enumerate(points)
    ]
    widest = max(gaps)
    if widest == 0:
        raise DegenerateGeometryError("all points share the same x value")
    index = gaps.index(widest)
    new_x = (points[index][0] + points[index + 1][0]) / 2

    regression = polynomial_regression(points, len(points) - 1, coefficient_precision)
    new_y = regression.predict(new_x)[1]

    new_point = [round_to(new_x, points_precision), round_to(new_y, points_precision)]
    points.append(new_point)
    points.sort(key=lambda p: p[0])
    logger.debug("inserted point %s, %d total", new_point, len(points))


def change_order(
    points: List[Point],
    order: int,
    coefficient_precision: int,
    points_precision: int,
) -> List[Point]:
    """Return a copy of ``points`` with exactly ``order + 1`` points, sorted by x.

    Points are added with ``add_point`` or removed with ``remove_point``
    until the count matches. ``points`` itself is not modified.
    """
    check_order(order)
    result = copy.deepcopy(points)
    while len(result) - 1 != order:
        if len(result) - 1 < order:
            add_point(result, coefficient_precision, points_precision)
        else:
            remove_point(result)
    logger.debug("changed order to %d", order)
    return sort_points_by_x(result)


__all__ = ["remove_point", "add_point", "change_order"]
