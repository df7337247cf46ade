"""Exceptions raised by manifold elements."""

from __future__ import annotations


class ManifoldError(Exception):
    pass


class InvalidPoint(ManifoldError, ValueError):
    """An embedding point that does not lie on the manifold was passed to a checked constructor."""


class DegenerateGeodesic(ManifoldError, ArithmeticError):
    """The geodesic between two elements is not unique (e.g. antipodal points on a sphere)."""


__all__ = ["ManifoldError", "InvalidPoint", "DegenerateGeodesic"]
