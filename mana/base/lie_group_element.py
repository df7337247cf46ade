"""Matrix Lie groups as extrinsic manifolds.

A LieGroupElement is a ManifoldElement whose embedding point is a square
matrix closed under multiplication. Distance, interpolation and the chart maps
are all derived from the group exponential/logarithm:

    d(a, b)              = |log(a^-1 b)|
    a.interpolate(b, t)  = a exp(t log(a^-1 b))
    chart at o: to_tangent(g) = log(o^-1 g),  to_manifold(v) = o exp(v)

Tangent vectors are coordinates in the Lie algebra (length DIMENSION); hat/vee
convert between coordinates and algebra matrices.

Subclasses implement identity, hat, vee, exp, log (plus the projection and
validity hooks of ManifoldElement).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import ClassVar, List, TypeVar

import numpy as np

from mana.base.manifold_element import ManifoldElement

__all__ = ["LieGroupElement"]

GroupT = TypeVar("GroupT", bound="LieGroupElement")


class LieGroupElement(ManifoldElement):
    """Element of a matrix Lie group whose inverse is the transpose (orthogonal groups)."""

    INJECTIVITY_RADIUS: ClassVar[float] = float(np.pi)

    __slots__ = ()

    # ---- Group structure ----

    @classmethod
    @abstractmethod
    def identity(cls: type[GroupT]) -> GroupT:
        ...

    @classmethod
    @abstractmethod
    def hat(cls, tangent: np.ndarray) -> np.ndarray:
        """Map tangent coordinates to a Lie algebra matrix."""

    @classmethod
    @abstractmethod
    def vee(cls, algebra: np.ndarray) -> np.ndarray:
        """Map a Lie algebra matrix to tangent coordinates."""

    @classmethod
    @abstractmethod
    def exp(cls: type[GroupT], tangent: np.ndarray) -> GroupT:
        """Group exponential of tangent coordinates at the identity."""

    @abstractmethod
    def log(self) -> np.ndarray:
        """Group logarithm: tangent coordinates at the identity reaching this element."""

    def compose(self: GroupT, other: GroupT) -> GroupT:
        self._check_same_manifold(other)
        return self._from_point_impl(self._point @ other._point)

    def __mul__(self: GroupT, other: object) -> GroupT:
        if type(other) is not type(self):
            return NotImplemented
        return self.compose(other)  # type: ignore[arg-type]

    def inverse(self: GroupT) -> GroupT:
        return self._from_point_impl(self._point.T)

    def between(self: GroupT, other: GroupT) -> GroupT:
        """Relative element self^-1 * other."""
        self._check_same_manifold(other)
        return self.inverse().compose(other)

    def act(self, x: np.ndarray) -> np.ndarray:
        """Apply the group element to a vector (or to the columns of a matrix)."""
        n = self.EMBEDDING_SHAPE[0]
        v = np.asarray(x, dtype=float)
        if v.shape[0] != n:
            raise ValueError(f"x must have leading dimension {n}; got {v.shape}.")
        return self._point @ v

    # ---- ManifoldElement hooks ----

    def _distance_to_impl(self, other) -> float:
        return float(np.linalg.norm(self.between(other).log()))

    def _interpolate_impl(self, other, fraction: float):
        delta = self.between(other).log()
        return self.compose(self.exp(fraction * delta))

    def _exp_map_impl(self, tangent: np.ndarray):
        return self.compose(self.exp(tangent))

    def _log_map_impl(self, other) -> np.ndarray:
        return self.between(other).log()

    def _tangent_space_basis_impl(self) -> List[np.ndarray]:
        basis = []
        for i in range(self.DIMENSION):
            e = np.zeros(self.DIMENSION, dtype=float)
            e[i] = 1.0
            d = self._point @ self.hat(e)
            basis.append(d / np.linalg.norm(d, ord="fro"))
        return basis
