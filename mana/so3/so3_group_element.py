"""Spatial rotations SO(3) embedded in 3x3 matrices.

Invariants
- Points satisfy ||R^T R - I||_F <= tol and |det R - 1| <= tol.
- exp is the Rodrigues formula; log returns a rotation vector with norm in [0, π].
- The rotation angle is computed with atan2(sin, cos), accurate near 0 and π.
- At angle π the axis is taken from the symmetric part (R + R^T)/2; its sign is
  fixed by the skew part when available and otherwise so that the first
  non-zero component is positive (deterministic).
- Projection is the Frobenius-nearest rotation U diag(1, 1, det(U V^T)) V^T.
"""

from __future__ import annotations

import numpy as np

from mana.base.lie_group_element import LieGroupElement

__all__ = ["SO3Element", "skew"]

# Series expansions replace the closed forms below this angle.
_SMALL_ANGLE = 1e-8
# Below this sin(angle) (with cos(angle) < 0) the axis comes from the symmetric part.
_NEAR_PI_SIN = 1e-3


def skew(w: np.ndarray) -> np.ndarray:
    """Cross-product matrix [w]_x such that [w]_x v = w × v."""
    w = np.asarray(w, dtype=float)
    if w.shape != (3,):
        raise ValueError(f"w must have shape (3,); got {w.shape}.")
    return np.array(
        [
            [0.0, -w[2], w[1]],
            [w[2], 0.0, -w[0]],
            [-w[1], w[0], 0.0],
        ],
        dtype=float,
    )


def _axis_near_pi(R: np.ndarray, cos_t: float, s: np.ndarray) -> np.ndarray:
    """Unit rotation axis of R when the angle is close to π."""
    # (R + R^T)/2 = cos(t) I + (1 - cos(t)) a a^T
    aat = (0.5 * (R + R.T) - cos_t * np.eye(3)) / (1.0 - cos_t)
    j = int(np.argmax(np.diag(aat)))
    axis = aat[:, j] / np.sqrt(max(aat[j, j], 0.0))
    axis = axis / np.linalg.norm(axis)
    if np.dot(axis, s) < 0.0:
        axis = -axis
    elif np.dot(axis, s) == 0.0:
        nz = np.flatnonzero(np.abs(axis) > 1e-12)
        if nz.size and axis[nz[0]] < 0.0:
            axis = -axis
    return axis


class SO3Element(LieGroupElement):
    """A rotation in three dimensions."""

    DIMENSION = 3
    EMBEDDING_DIMENSION = 9
    EMBEDDING_SHAPE = (3, 3)

    __slots__ = ()

    @classmethod
    def from_axis_angle(cls, axis: np.ndarray, angle: float) -> "SO3Element":
        a = np.asarray(axis, dtype=float)
        if a.shape != (3,) or not np.all(np.isfinite(a)):
            raise ValueError("axis must be a finite vector of shape (3,).")
        n = np.linalg.norm(a)
        if n == 0.0:
            raise ValueError("axis must be non-zero.")
        t = float(angle)
        if not np.isfinite(t):
            raise ValueError("angle must be finite.")
        return cls.exp(a / n * t)

    @classmethod
    def from_rotation_vector(cls, rotvec: np.ndarray) -> "SO3Element":
        return cls.exp(rotvec)

    def rotation_vector(self) -> np.ndarray:
        return self.log()

    def angle(self) -> float:
        """Rotation angle in [0, π]."""
        return float(np.linalg.norm(self.log()))

    # ---- Group structure ----

    @classmethod
    def identity(cls) -> "SO3Element":
        return cls._from_point_impl(np.eye(3, dtype=float))

    @classmethod
    def hat(cls, tangent: np.ndarray) -> np.ndarray:
        return skew(cls._coerce_tangent(tangent))

    @classmethod
    def vee(cls, algebra: np.ndarray) -> np.ndarray:
        A = np.asarray(algebra, dtype=float)
        if A.shape != (3, 3):
            raise ValueError(f"algebra must have shape (3, 3); got {A.shape}.")
        return 0.5 * np.array(
            [A[2, 1] - A[1, 2], A[0, 2] - A[2, 0], A[1, 0] - A[0, 1]],
            dtype=float,
        )

    @classmethod
    def exp(cls, tangent: np.ndarray) -> "SO3Element":
        w = cls._coerce_tangent(tangent)
        theta = float(np.linalg.norm(w))
        K = skew(w)
        if theta < _SMALL_ANGLE:
            a = 1.0 - theta**2 / 6.0
            b = 0.5 - theta**2 / 24.0
        else:
            a = np.sin(theta) / theta
            # (1 - cos t) / t^2 without cancellation
            b = 0.5 * (np.sin(0.5 * theta) / (0.5 * theta)) ** 2
        R = np.eye(3) + a * K + b * (K @ K)
        return cls._from_point_impl(R)

    def log(self) -> np.ndarray:
        R = self._point
        cos_t = float(np.clip(0.5 * (np.trace(R) - 1.0), -1.0, 1.0))
        # s = sin(t) * axis
        s = self.vee(R)
        sin_t = float(np.linalg.norm(s))
        theta = float(np.arctan2(sin_t, cos_t))

        if theta < _SMALL_ANGLE:
            return s * (1.0 + theta**2 / 6.0)
        if cos_t < 0.0 and sin_t < _NEAR_PI_SIN:
            return theta * _axis_near_pi(R, cos_t, s)
        return s * (theta / sin_t)

    # ---- Manifold hooks ----

    @classmethod
    def _project_impl(cls, point: np.ndarray) -> np.ndarray:
        U, _, Vt = np.linalg.svd(point)
        d = 1.0 if np.linalg.det(U @ Vt) >= 0.0 else -1.0
        return U @ np.diag([1.0, 1.0, d]) @ Vt

    @classmethod
    def _is_valid_impl(cls, point: np.ndarray, tolerance: float) -> bool:
        ortho_err = np.linalg.norm(point.T @ point - np.eye(3), ord="fro")
        det_err = abs(np.linalg.det(point) - 1.0)
        return bool(ortho_err <= tolerance and det_err <= tolerance)
