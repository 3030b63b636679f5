from .curve import Axis, Curve, Settings, generate_curve  # noqa: F401
from .points import add_point, change_order, remove_point  # noqa: F401
