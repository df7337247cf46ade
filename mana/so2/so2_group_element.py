"""Planar rotations SO(2) embedded in 2x2 matrices.

Invariants
- Points satisfy R^T R = I and det R = 1 within tolerance.
- The Lie algebra coordinate is the rotation angle; log() lies in (-π, π].
- Projection is the Frobenius-nearest rotation, R(atan2(M10 - M01, M00 + M11)).
- Distance is the absolute wrapped angle difference.
"""

from __future__ import annotations

import numpy as np

from mana.base.lie_group_element import LieGroupElement
from mana.utils.angles import angle_difference
from mana.utils.logging import get_logger

__all__ = ["SO2Element", "rotation_matrix_2d"]

_log = get_logger(__name__)

# Below this, M00 + M11 and M10 - M01 carry no usable direction.
_DEGENERATE_EPS = 1e-15


def rotation_matrix_2d(theta: float) -> np.ndarray:
    """Counter-clockwise rotation by `theta` radians."""
    c, s = np.cos(theta), np.sin(theta)
    return np.array([[c, -s], [s, c]], dtype=float)


class SO2Element(LieGroupElement):
    """A planar rotation."""

    DIMENSION = 1
    EMBEDDING_DIMENSION = 4
    EMBEDDING_SHAPE = (2, 2)

    __slots__ = ()

    @classmethod
    def from_angle(cls, theta: float) -> "SO2Element":
        t = float(theta)
        if not np.isfinite(t):
            raise ValueError("theta must be finite.")
        return cls._from_point_impl(rotation_matrix_2d(t))

    def angle(self) -> float:
        """Rotation angle in (-π, π]."""
        return float(np.arctan2(self._point[1, 0], self._point[0, 0]))

    # ---- Group structure ----

    @classmethod
    def identity(cls) -> "SO2Element":
        return cls._from_point_impl(np.eye(2, dtype=float))

    @classmethod
    def hat(cls, tangent: np.ndarray) -> np.ndarray:
        w = float(cls._coerce_tangent(tangent)[0])
        return np.array([[0.0, -w], [w, 0.0]], dtype=float)

    @classmethod
    def vee(cls, algebra: np.ndarray) -> np.ndarray:
        A = np.asarray(algebra, dtype=float)
        if A.shape != (2, 2):
            raise ValueError(f"algebra must have shape (2, 2); got {A.shape}.")
        return np.array([0.5 * (A[1, 0] - A[0, 1])], dtype=float)

    @classmethod
    def exp(cls, tangent: np.ndarray) -> "SO2Element":
        return cls.from_angle(cls._coerce_tangent(tangent)[0])

    def log(self) -> np.ndarray:
        return np.array([self.angle()], dtype=float)

    # ---- Manifold hooks ----

    def _distance_to_impl(self, other) -> float:
        return abs(angle_difference(self.angle(), other.angle()))

    @classmethod
    def _project_impl(cls, point: np.ndarray) -> np.ndarray:
        cos_part = point[0, 0] + point[1, 1]
        sin_part = point[1, 0] - point[0, 1]
        if abs(cos_part) <= _DEGENERATE_EPS and abs(sin_part) <= _DEGENERATE_EPS:
            # Every rotation is equidistant; pick the identity.
            _log.debug("degenerate SO(2) projection; returning identity")
            return np.eye(2, dtype=float)
        return rotation_matrix_2d(np.arctan2(sin_part, cos_part))

    @classmethod
    def _is_valid_impl(cls, point: np.ndarray, tolerance: float) -> bool:
        ortho_err = np.linalg.norm(point.T @ point - np.eye(2), ord="fro")
        det_err = abs(np.linalg.det(point) - 1.0)
        return bool(ortho_err <= tolerance and det_err <= tolerance)
