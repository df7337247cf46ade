"""Unit spheres S^(n-1) embedded in R^n.

Invariants
- Points satisfy | ||x|| - 1 | <= tol.
- Distance is the great-circle angle, computed as 2 arcsin(||x - y|| / 2)
  (accurate for nearby points).
- exp_x(v) = cos|v| x + sin|v| v/|v|;  log_x(y) = θ u/|u| with u = y - (x·y) x.
- The geodesic between antipodal points is not unique: interpolation and the
  chart maps raise DegenerateGeodesic there.
- Tangent coordinates are taken in a deterministic orthonormal frame of the
  tangent space (columns 1..n-1 of a Householder reflection sending e0 to ±x).
"""

from __future__ import annotations

import functools

import numpy as np

from mana.base.manifold_element import ManifoldElement
from mana.errors import DegenerateGeodesic
from mana.utils.logging import get_logger

__all__ = ["SphereElement", "tangent_frame"]

_log = get_logger(__name__)

# Norms below this are treated as zero.
_TINY = 1e-15
# |y - (x·y)x| below this with x·y < 0 means x and y are antipodal.
_ANTIPODAL_EPS = 1e-12


def tangent_frame(x: np.ndarray) -> np.ndarray:
    """
    Orthonormal frame of the tangent space at unit vector x.

    Returns an array of shape (n-1, n) whose rows are orthonormal and
    orthogonal to x. Deterministic in x.
    """
    x = np.asarray(x, dtype=float)
    n = x.shape[0]
    sign = 1.0 if x[0] >= 0.0 else -1.0
    w = x.copy()
    w[0] += sign
    # H = I - 2 w w^T / (w^T w) maps e0 to -sign * x
    H = np.eye(n) - 2.0 * np.outer(w, w) / float(w @ w)
    return H[1:, :]


def _log_ambient(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    d = float(np.clip(x @ y, -1.0, 1.0))
    u = y - d * x
    u_norm = float(np.linalg.norm(u))
    if u_norm < _ANTIPODAL_EPS and d < 0.0:
        _log.warning("antipodal points on the sphere; geodesic is not unique")
        raise DegenerateGeodesic("log map is undefined between antipodal points.")
    if u_norm < _TINY:
        return np.zeros_like(x)
    theta = 2.0 * np.arcsin(min(1.0, float(np.linalg.norm(x - y)) / 2.0))
    return u * (theta / u_norm)


def _exp_ambient(x: np.ndarray, v: np.ndarray) -> np.ndarray:
    v_norm = float(np.linalg.norm(v))
    if v_norm < _TINY:
        y = x + v
    else:
        y = np.cos(v_norm) * x + np.sin(v_norm) * (v / v_norm)
    return y / np.linalg.norm(y)


class SphereElement(ManifoldElement):
    """A unit vector in R^3 (the 2-sphere). Use of_dimension(n) for S^(n-1)."""

    DIMENSION = 2
    EMBEDDING_DIMENSION = 3
    EMBEDDING_SHAPE = (3,)
    INJECTIVITY_RADIUS = float(np.pi)

    __slots__ = ()

    @staticmethod
    def of_dimension(ambient: int) -> type:
        """Element type for the unit sphere in R^ambient (ambient >= 2)."""
        if not (isinstance(ambient, (int, np.integer)) and not isinstance(ambient, bool) and ambient >= 2):
            raise ValueError("ambient must be an integer >= 2.")
        return _sphere_type(int(ambient))

    # ---- Manifold hooks ----

    @classmethod
    def _project_impl(cls, point: np.ndarray) -> np.ndarray:
        n = float(np.linalg.norm(point))
        if n < _TINY:
            _log.debug("projecting zero vector onto sphere; returning e0")
            e0 = np.zeros(cls.EMBEDDING_SHAPE, dtype=float)
            e0[0] = 1.0
            return e0
        return point / n

    @classmethod
    def _is_valid_impl(cls, point: np.ndarray, tolerance: float) -> bool:
        return bool(abs(float(np.linalg.norm(point)) - 1.0) <= tolerance)

    def _distance_to_impl(self, other) -> float:
        chord = float(np.linalg.norm(self._point - other._point))
        return 2.0 * float(np.arcsin(min(1.0, chord / 2.0)))

    def _interpolate_impl(self, other, fraction: float):
        v = _log_ambient(self._point, other._point)
        return self._from_point_impl(_exp_ambient(self._point, fraction * v))

    def _exp_map_impl(self, tangent: np.ndarray):
        v = tangent @ tangent_frame(self._point)
        return self._from_point_impl(_exp_ambient(self._point, v))

    def _log_map_impl(self, other) -> np.ndarray:
        return tangent_frame(self._point) @ _log_ambient(self._point, other._point)

    def _tangent_space_basis_impl(self):
        return list(tangent_frame(self._point))


@functools.lru_cache(maxsize=None)
def _sphere_type(ambient: int) -> type:
    if ambient == SphereElement.EMBEDDING_DIMENSION:
        return SphereElement
    return type(
        f"Sphere{ambient - 1}Element",
        (SphereElement,),
        {
            "__slots__": (),
            "__module__": __name__,
            "DIMENSION": ambient - 1,
            "EMBEDDING_DIMENSION": ambient,
            "EMBEDDING_SHAPE": (ambient,),
        },
    )
