"""Curve model.

A ``Curve`` bundles the editable state of one polynomial curve:
 - axis bounds and labels
 - the control points and the polynomial order
 - the derived fit (coefficients, equation, R², sampled curve points)
 - an operation log of every edit (for reproducibility)

Every edit validates and refits on a candidate before touching the stored
state, so a rejected edit leaves the curve unchanged.
"""
from __future__ import annotations

import copy
import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from ..analysis.regression import (
    RegressionResult,
    check_order,
    generate_curve_points,
    polynomial_regression,
)
from ..constants import (
    CURVE_FREQUENCY,
    DEFAULT_CURVE,
    PRECISION_COEFFICIENT,
    PRECISION_POINTS,
)
from ..exceptions import InvalidInputError, InvalidOrderError
from ..utils import (
    Point,
    generate_random_points,
    points_to_frame,
    polynomial_value,
    require_finite,
    require_range,
    round_to,
    sort_points_by_x,
)
from .points import change_order

logger = logging.getLogger(__name__)

OperationRecord = Dict[str, Any]


@dataclass
class Settings:
    precision_coefficient: int = PRECISION_COEFFICIENT
    precision_points: int = PRECISION_POINTS
    frequency: int = CURVE_FREQUENCY


@dataclass
class Axis:
    label: str
    min: float
    max: float


@dataclass
class Curve:
    name: str
    description: str
    x_axis: Axis
    y_axis: Axis
    points: List[Point]
    polynomial_order: int
    settings: Settings = field(default_factory=Settings)
    curve_points: List[Point] = field(default_factory=list)
    coefficients: List[float] = field(default_factory=list)
    equation: str = ""
    r2: Optional[float] = None
    operations: List[OperationRecord] = field(default_factory=list)

    def log(self, op: str, **params):
        rec: OperationRecord = {
            "op": op,
            "params": params,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "points": len(self.points),
            "order": self.polynomial_order,
        }
        self.operations.append(rec)
        logger.debug("curve %r: %s %s", self.name, op, params)

    # --- Fitting ---
    def _fit(
        self,
        points: Sequence[Point],
        order: int,
        x_axis: Optional[Axis] = None,
    ) -> Tuple[RegressionResult, List[Point]]:
        x_axis = x_axis or self.x_axis
        regression = polynomial_regression(
            points, order, self.settings.precision_coefficient
        )
        curve_points = generate_curve_points(
            points,
            order,
            x_axis.min,
            x_axis.max,
            self.settings.precision_coefficient,
            self.settings.frequency,
        )
        return regression, curve_points

    def _apply(
        self,
        points: List[Point],
        order: int,
        regression: RegressionResult,
        curve_points: List[Point],
    ):
        self.points = points
        self.polynomial_order = order
        self.coefficients = regression.coefficients
        self.equation = regression.string
        self.r2 = regression.r2
        self.curve_points = curve_points

    def refresh(self):
        """Recompute the fit from the current points and order."""
        regression, curve_points = self._fit(self.points, self.polynomial_order)
        self._apply(self.points, self.polynomial_order, regression, curve_points)
        return self

    # --- Edits ---
    def update_points(self, points: List[Point], order: int):
        regression, curve_points = self._fit(points, order)
        self._apply(points, order, regression, curve_points)
        self.log("update_points", order=order)
        return self

    def update_order(self, order: int):
        """Add or remove points until there is one more point than ``order``."""
        points = change_order(
            self.points,
            order,
            self.settings.precision_coefficient,
            self.settings.precision_points,
        )
        regression, curve_points = self._fit(points, order)
        self._apply(points, order, regression, curve_points)
        self.log("update_order", order=order)
        return self

    def update_coefficient(self, value: float, coefficient_index: int):
        """Set one coefficient and move every point onto the new polynomial.

        The points are updated in place; their x values are kept and their
        y values are rounded to the points precision.
        """
        require_finite(value=value)
        if not 0 <= coefficient_index < len(self.coefficients):
            raise InvalidInputError(
                f"coefficient index {coefficient_index} out of range "
                f"for {len(self.coefficients)} coefficients"
            )
        coefficients = list(self.coefficients)
        coefficients[coefficient_index] = value
        new_ys = [
            round_to(
                polynomial_value(point[0], coefficients),
                self.settings.precision_points,
            )
            for point in self.points
        ]
        candidate = [[point[0], y] for point, y in zip(self.points, new_ys)]
        regression, curve_points = self._fit(candidate, self.polynomial_order)
        for point, y in zip(self.points, new_ys):
            point[1] = y
        self._apply(self.points, self.polynomial_order, regression, curve_points)
        self.log("update_coefficient", index=coefficient_index, value=value)
        return self

    def update_point_coordinate(
        self, value: float, point_index: int, coordinate_index: int
    ):
        """Change one coordinate of an existing point (in place)."""
        require_finite(value=value)
        self._check_point_index(point_index)
        if coordinate_index not in (0, 1):
            raise InvalidInputError(
                f"coordinate index must be 0 (x) or 1 (y), got {coordinate_index}"
            )
        candidate = copy.deepcopy(self.points)
        candidate[point_index][coordinate_index] = value
        regression, curve_points = self._fit(candidate, self.polynomial_order)
        self.points[point_index][coordinate_index] = value
        self._apply(self.points, self.polynomial_order, regression, curve_points)
        self.log(
            "update_point_coordinate",
            index=point_index,
            coordinate=coordinate_index,
            value=value,
        )
        return self

    def drag_point(self, point_index: int, x: float, y: float):
        """Move a point to ``(x, y)`` and re-sort the points by x."""
        require_finite(x=x, y=y)
        self._check_point_index(point_index)
        x = round_to(x, self.settings.precision_points)
        y = round_to(y, self.settings.precision_points)
        candidate = copy.deepcopy(self.points)
        candidate[point_index][:] = [x, y]
        regression, curve_points = self._fit(candidate, self.polynomial_order)
        self.points[point_index][:] = [x, y]
        self._apply(
            sort_points_by_x(self.points),
            self.polynomial_order,
            regression,
            curve_points,
        )
        self.log("drag_point", index=point_index, x=x, y=y)
        return self

    def update_axis_label(self, axis: str, label: str):
        if axis not in ("x", "y"):
            raise InvalidInputError(f"axis must be 'x' or 'y', got {axis!r}")
        target = self.x_axis if axis == "x" else self.y_axis
        target.label = label
        self.log("update_axis_label", axis=axis, label=label)
        return self

    def update_axis_range(self, axis: str, axis_min: float, axis_max: float):
        """Set the bounds of an axis, e.g. after a zoom or pan.

        Bounds are rounded to whole numbers. Changing the x bounds resamples
        the curve.
        """
        if axis not in ("x", "y"):
            raise InvalidInputError(f"axis must be 'x' or 'y', got {axis!r}")
        require_range(f"{axis}_min", axis_min, f"{axis}_max", axis_max)
        axis_min = round_to(axis_min, 0)
        axis_max = round_to(axis_max, 0)
        require_range(f"{axis}_min", axis_min, f"{axis}_max", axis_max)
        target = self.x_axis if axis == "x" else self.y_axis
        if axis == "x":
            candidate = Axis(label=target.label, min=axis_min, max=axis_max)
            regression, curve_points = self._fit(
                self.points, self.polynomial_order, candidate
            )
            target.min, target.max = axis_min, axis_max
            self._apply(self.points, self.polynomial_order, regression, curve_points)
        else:
            target.min, target.max = axis_min, axis_max
        self.log("update_axis_range", axis=axis, min=axis_min, max=axis_max)
        return self

    def update_name(self, name: str):
        self.name = name
        self.log("update_name", name=name)
        return self

    def update_description(self, description: str):
        self.description = description
        self.log("update_description", description=description)
        return self

    def _check_point_index(self, point_index: int):
        if not 0 <= point_index < len(self.points):
            raise InvalidInputError(
                f"point index {point_index} out of range for "
                f"{len(self.points)} points"
            )

    # --- Views ---
    def points_frame(self) -> pd.DataFrame:
        return points_to_frame(self.points)

    def curve_frame(self) -> pd.DataFrame:
        return points_to_frame(self.curve_points)

    # --- Serialization helpers ---
    def to_dict(self) -> Dict[str, Any]:
        """Serializable state; sampled curve points are left out."""
        return {
            "name": self.name,
            "description": self.description,
            "x_axis": asdict(self.x_axis),
            "y_axis": asdict(self.y_axis),
            "points": [list(p) for p in self.points],
            "polynomial_order": self.polynomial_order,
            "settings": asdict(self.settings),
            "operations": self.operations,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Curve":
        curve = cls(
            name=d["name"],
            description=d.get("description", ""),
            x_axis=Axis(**d["x_axis"]),
            y_axis=Axis(**d["y_axis"]),
            points=[list(p) for p in d["points"]],
            polynomial_order=d["polynomial_order"],
            settings=Settings(**d.get("settings", {})),
        )
        curve.refresh()
        curve.operations = d.get("operations", [])
        return curve


def _axis(props: Optional[Dict[str, Any]], default: Dict[str, Any]) -> Axis:
    props = props or {}
    values = {
        key: default[key] if props.get(key) is None else props[key]
        for key in ("label", "min", "max")
    }
    return Axis(**values)


def generate_curve(
    props: Optional[Dict[str, Any]] = None,
    defaults: Optional[Dict[str, Any]] = None,
    settings: Optional[Settings] = None,
    rng: Optional[np.random.Generator] = None,
) -> Curve:
    """Build a ``Curve`` from ``props``, filling gaps from ``defaults``.

    The order is taken from the points (``len(points) - 1``) if given, else
    from ``polynomial_order``, else from the coefficients
    (``len(coefficients) - 1``), else from the defaults. Missing points are
    generated randomly inside the axis bounds. If coefficients are given,
    every point's y is replaced by the polynomial's value at its x.
    """
    props = props or {}
    defaults = defaults or DEFAULT_CURVE
    settings = settings or Settings()

    def pick(key):
        return defaults[key] if props.get(key) is None else props[key]

    x_axis = _axis(props.get("x_axis"), defaults["x_axis"])
    y_axis = _axis(props.get("y_axis"), defaults["y_axis"])

    points = props.get("points")
    order = props.get("polynomial_order")
    coefficients = props.get("coefficients")
    if points is not None:
        points = copy.deepcopy([list(p) for p in points])
        order = len(points) - 1
        if coefficients is not None and len(coefficients) - 1 != order:
            raise InvalidOrderError(
                f"{len(points)} points need {len(points)} coefficients, "
                f"got {len(coefficients)}"
            )
    elif order is not None:
        pass
    elif coefficients is not None:
        order = len(coefficients) - 1
    else:
        order = defaults["polynomial_order"]
    check_order(order)

    if points is None:
        points = generate_random_points(
            order + 1,
            settings.precision_points,
            x_axis.min,
            x_axis.max,
            y_axis.min,
            y_axis.max,
            rng=rng,
        )

    if coefficients is not None:
        for point in points:
            point[1] = polynomial_value(point[0], coefficients)

    curve = Curve(
        name=pick("name"),
        description=pick("description"),
        x_axis=x_axis,
        y_axis=y_axis,
        points=points,
        polynomial_order=order,
        settings=settings,
    )
    curve.refresh()
    curve.log("generate_curve", order=order)
    return curve


__all__ = ["Curve", "Axis", "Settings", "OperationRecord", "generate_curve"]
