"""Angle helpers.

All functions work elementwise on scalars and arrays and return floats (or
float arrays of the input shape). Inputs must be finite.
"""

from __future__ import annotations

import numpy as np

__all__ = ["wrap_angle", "angle_difference", "deg_to_rad", "rad_to_deg"]


def _as_finite(x: np.ndarray, name: str) -> np.ndarray:
    a = np.asarray(x, dtype=float)
    if not np.all(np.isfinite(a)):
        raise ValueError(f"{name} must be finite.")
    return a


def wrap_angle(theta):
    """
    Wrap an angle to the half-open interval [-π, π).

    Uses the remainder form ((θ + π) mod 2π) − π so that +π maps to −π.
    """
    t = _as_finite(theta, "theta")
    out = np.mod(t + np.pi, 2.0 * np.pi) - np.pi
    return float(out) if out.ndim == 0 else out


def angle_difference(a, b):
    """Signed shortest rotation from angle a to angle b, in [-π, π)."""
    return wrap_angle(_as_finite(b, "b") - _as_finite(a, "a"))


def deg_to_rad(deg):
    out = np.deg2rad(_as_finite(deg, "deg"))
    return float(out) if out.ndim == 0 else out


def rad_to_deg(rad):
    out = np.rad2deg(_as_finite(rad, "rad"))
    return float(out) if out.ndim == 0 else out
