"""polycurve package root.

Exposes high-level API surface for convenience.
"""
import logging

from .utils import (  # noqa: F401
	round_to,
	int_range,
	precision_to_step_size,
	generate_random_points,
	sort_points_by_x,
	polynomial_value,
	generate_polynomial_equation,
	generate_polynomial_term,
)
from .analysis.regression import (  # noqa: F401
	RegressionResult,
	polynomial_regression,
	generate_curve_points,
)
from .core import Curve, generate_curve, add_point, remove_point, change_order  # noqa: F401
from .exceptions import (  # noqa: F401
	CurveError,
	InvalidOrderError,
	DegenerateGeometryError,
	InvalidInputError,
)
from .project import save_curve, load_curve  # noqa: F401

# silent unless the application configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())
