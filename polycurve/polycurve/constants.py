"""Central constants & defaults."""

# Curve samples per unit of x
CURVE_FREQUENCY = 7

# Number of decimal places kept for the polynomial's coefficients and for
# the draggable points. The two are configured independently; fitted
# coefficients only round-trip exactly within PRECISION_COEFFICIENT.
PRECISION_COEFFICIENT = 5
PRECISION_POINTS = 5

DEFAULT_CURVE = {
    "name": "Random Polynomial",
    "description": "This is some random polynomial.",
    "x_axis": {"label": "x Values", "min": -5, "max": 10},
    "y_axis": {"label": "y Values", "min": -5, "max": 10},
    # the order of the polynomial to plot
    "polynomial_order": 3,
}

VARIABLE = "x"

__all__ = [
    "CURVE_FREQUENCY",
    "PRECISION_COEFFICIENT",
    "PRECISION_POINTS",
    "DEFAULT_CURVE",
    "VARIABLE",
]
