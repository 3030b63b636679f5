"""Errors raised by the regression engine and point utilities."""
from __future__ import annotations


class CurveError(ValueError):
    """Base class for all polycurve errors."""
    pass


class InvalidOrderError(CurveError):
    """Raised when the order cannot be fitted with the given points."""
    pass


class DegenerateGeometryError(CurveError):
    """Raised when the points do not span enough distinct x values."""
    pass


class InvalidInputError(CurveError):
    """Raised for non-finite numbers, empty ranges and malformed points."""
    pass


__all__ = [
    "CurveError",
    "InvalidOrderError",
    "DegenerateGeometryError",
    "InvalidInputError",
]
