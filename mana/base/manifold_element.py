"""Extrinsic manifold elements, charts and geodesics.

Manifolds are expressed extrinsically: every element is a point of a larger
ambient (embedding) space, e.g. a 3x3 matrix for a rotation in SO(3).

Invariants
- Elements are immutable; their embedding point is a read-only float64 array.
- Every operation returns new elements; nothing is mutated in place.
- Elements of different concrete manifolds are never compared (TypeError).
- equal_to(other, tol) is exactly distance_to(other) < tol (strict).
- Geodesic.length() == beg.distance_to(end); Geodesic.interpolate(t) ==
  beg.interpolate(end, t).
- Chart.to_tangent(origin) == 0 and Chart.to_manifold(0) == origin; the two
  maps invert each other inside the element type's INJECTIVITY_RADIUS.

Subclasses implement the hooks:
- _project_impl(point) -> point
- _is_valid_impl(point, tolerance) -> bool
- _distance_to_impl(other) -> float
- _interpolate_impl(other, fraction) -> element
- _exp_map_impl(tangent) -> element
- _log_map_impl(other) -> tangent
- _tangent_space_basis_impl() -> sequence of embedding-space arrays
and may override _from_point_impl(point) (default: cls(point)).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Generic, List, Optional, Sequence, Tuple, TypeVar

import numpy as np

from mana.constants import resolve_tolerance
from mana.errors import InvalidPoint, ManifoldError
from mana.utils.logging import get_logger

__all__ = ["ManifoldElement", "ManifoldChart", "ManifoldGeodesic"]

_log = get_logger(__name__)

ElementT = TypeVar("ElementT", bound="ManifoldElement")


def _read_only(a: np.ndarray) -> np.ndarray:
    out = np.array(a, dtype=np.float64, copy=True)
    out.setflags(write=False)
    return out


def _as_fraction(fraction: float) -> float:
    try:
        f = float(fraction)
    except (TypeError, ValueError) as e:
        raise TypeError("fraction must be a real number convertible to float") from e
    if not np.isfinite(f):
        raise ValueError(f"fraction must be finite, got {f}")
    return f


class ManifoldElement(ABC):
    """
    Base class for an element of a differentiable manifold.

    Concrete subclasses declare the type-level constants DIMENSION,
    EMBEDDING_DIMENSION (DIMENSION <= EMBEDDING_DIMENSION) and EMBEDDING_SHAPE.
    """

    # The dimension of the manifold (length of tangent vectors).
    DIMENSION: ClassVar[int]
    # The dimension of the embedding space.
    EMBEDDING_DIMENSION: ClassVar[int]
    # Shape of a point in the embedding space; not necessarily a vector.
    EMBEDDING_SHAPE: ClassVar[Tuple[int, ...]]
    # Scalar type used for distances and fractions.
    SCALAR_DTYPE: ClassVar[np.dtype] = np.dtype(np.float64)
    # Radius around a chart origin inside which exp/log maps invert each other.
    INJECTIVITY_RADIUS: ClassVar[float] = float("inf")

    __slots__ = ("_point",)
    # Tolerance-based equality is not an equivalence relation; elements are unhashable.
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, point: np.ndarray) -> None:
        object.__setattr__(self, "_point", _read_only(self._coerce_point(point)))

    def __setattr__(self, name, value) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        body = np.array2string(self._point, precision=6, suppress_small=True, separator=", ")
        return f"{type(self).__name__}({body})"

    # ---- Construction and validation ----

    @classmethod
    def _coerce_point(cls, point: np.ndarray) -> np.ndarray:
        """Return `point` as a float array of EMBEDDING_SHAPE; raise ValueError otherwise."""
        p = np.asarray(point, dtype=float)
        if p.shape != tuple(cls.EMBEDDING_SHAPE):
            raise ValueError(
                f"{cls.__name__} point must have shape {tuple(cls.EMBEDDING_SHAPE)}; got {p.shape}."
            )
        if not np.all(np.isfinite(p)):
            raise ValueError(f"{cls.__name__} point must contain finite values.")
        return p

    @classmethod
    def _coerce_tangent(cls, tangent: np.ndarray) -> np.ndarray:
        v = np.asarray(tangent, dtype=float)
        if v.ndim == 0 and cls.DIMENSION == 1:
            v = v.reshape(1)
        if v.shape != (cls.DIMENSION,):
            raise ValueError(f"tangent vector must have shape ({cls.DIMENSION},); got {v.shape}.")
        if not np.all(np.isfinite(v)):
            raise ValueError("tangent vector must contain finite values.")
        return v

    @classmethod
    def from_point(cls: type[ElementT], point: np.ndarray, check: bool = False) -> ElementT:
        """
        Construct from a point in the embedding space.

        Precondition: the point lies on the manifold (is_valid(point) is True).
        Calling with an invalid point is a programming error and the result is
        unspecified unless check=True, in which case InvalidPoint is raised.
        Malformed shapes or non-finite values always raise ValueError.
        """
        p = cls._coerce_point(point)
        if check and not cls.is_valid(p):
            _log.warning("rejecting off-manifold point for %s", cls.__name__)
            raise InvalidPoint(f"point does not lie on {cls.__name__} within tolerance.")
        return cls._from_point_impl(p)

    @classmethod
    def _from_point_impl(cls: type[ElementT], point: np.ndarray) -> ElementT:
        return cls(point)

    @classmethod
    def project(cls, point: np.ndarray) -> np.ndarray:
        """
        Project a point from the embedding space onto the manifold.

        Returns the nearest valid embedding point under the manifold's metric,
        e.g. the Frobenius-nearest rotation for SO(3). Idempotent.
        """
        p = cls._coerce_point(point)
        return np.asarray(cls._project_impl(p), dtype=float)

    @classmethod
    def from_projection(cls: type[ElementT], point: np.ndarray) -> ElementT:
        """Construct the element nearest to an arbitrary embedding point."""
        return cls._from_point_impl(cls.project(point))

    @classmethod
    def is_valid(cls, point: np.ndarray, tolerance: Optional[float] = None) -> bool:
        """
        Check if a point in embedding space lies on the manifold.

        Advisory: never raises. Malformed points (wrong shape, non-finite or
        non-real values) and malformed tolerances (negative, non-finite,
        non-numeric) are reported as not valid.
        """
        try:
            tol = resolve_tolerance(tolerance, cls.SCALAR_DTYPE)
            p = cls._coerce_point(point)
        except (TypeError, ValueError):
            return False
        return bool(cls._is_valid_impl(p, tol))

    def point(self) -> np.ndarray:
        """Return this element's (read-only) point in the embedding space."""
        return self._point

    # ---- Metric structure ----

    def _check_same_manifold(self, other: object) -> None:
        if type(other) is not type(self):
            raise TypeError(
                f"expected another {type(self).__name__}; got {type(other).__name__}."
            )

    def geodesic_to(self: ElementT, other: ElementT) -> "ManifoldGeodesic[ElementT]":
        """Build the geodesic curve from this element to `other`."""
        return ManifoldGeodesic(self, other)

    def distance_to(self: ElementT, other: ElementT) -> float:
        """Geodesic distance between two points on the manifold."""
        self._check_same_manifold(other)
        return float(self._distance_to_impl(other))

    def interpolate(self: ElementT, other: ElementT, fraction: float) -> ElementT:
        """
        Interpolate along the geodesic from this element to `other`.

        Fractions in [0, 1] give points along the geodesic; values outside that
        range extrapolate along the same curve.
        """
        self._check_same_manifold(other)
        return self._interpolate_impl(other, _as_fraction(fraction))

    def equal_to(self: ElementT, other: ElementT, tolerance: Optional[float] = None) -> bool:
        """
        True iff distance_to(other) < tolerance (strict).

        Reflexive and symmetric, but not transitive: a == b and b == c does not
        imply a == c.
        """
        tol = resolve_tolerance(tolerance, self.SCALAR_DTYPE)
        return self.distance_to(other) < tol

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.equal_to(other)  # type: ignore[arg-type]

    def __ne__(self, other: object) -> bool:
        eq = self.__eq__(other)
        if eq is NotImplemented:
            return NotImplemented
        return not eq

    # ---- Tangent space ----

    def local_chart(self: ElementT) -> "ManifoldChart[ElementT]":
        """Build a chart at this point on the manifold."""
        return ManifoldChart(self)

    def tangent_space_basis(self) -> Tuple[np.ndarray, ...]:
        """Return DIMENSION embedding-space arrays spanning the tangent space at this point."""
        basis = tuple(_read_only(b) for b in self._tangent_space_basis_impl())
        if len(basis) != self.DIMENSION:
            raise ManifoldError(
                f"tangent basis must have {self.DIMENSION} vectors; got {len(basis)}"
            )
        return basis

    def exp_map(self: ElementT, tangent: np.ndarray) -> ElementT:
        """Exponential map at this element for tangent coordinates `tangent`."""
        return self._exp_map_impl(self._coerce_tangent(tangent))

    def log_map(self: ElementT, other: ElementT) -> np.ndarray:
        """Logarithmic map at this element: tangent coordinates pointing to `other`."""
        self._check_same_manifold(other)
        v = np.asarray(self._log_map_impl(other), dtype=float).reshape(self.DIMENSION)
        return v

    # ---- Hooks ----

    @classmethod
    @abstractmethod
    def _project_impl(cls, point: np.ndarray) -> np.ndarray:
        ...

    @classmethod
    @abstractmethod
    def _is_valid_impl(cls, point: np.ndarray, tolerance: float) -> bool:
        ...

    @abstractmethod
    def _distance_to_impl(self, other) -> float:
        ...

    @abstractmethod
    def _interpolate_impl(self, other, fraction: float):
        ...

    @abstractmethod
    def _exp_map_impl(self, tangent: np.ndarray):
        ...

    @abstractmethod
    def _log_map_impl(self, other) -> np.ndarray:
        ...

    @abstractmethod
    def _tangent_space_basis_impl(self) -> Sequence[np.ndarray]:
        ...


@dataclass(frozen=True, eq=False)
class ManifoldChart(Generic[ElementT]):
    """
    Chart on a manifold, mapping between a neighborhood of `origin` and the
    tangent space at `origin` (coordinates of length DIMENSION).

    The zero tangent vector is mapped to the origin. Charts are local: the maps
    round-trip only for elements within the origin's INJECTIVITY_RADIUS.
    """

    origin: ElementT

    def __post_init__(self) -> None:
        if not isinstance(self.origin, ManifoldElement):
            raise TypeError("chart origin must be a ManifoldElement")

    @property
    def dimension(self) -> int:
        return type(self.origin).DIMENSION

    def contains(self, element: ElementT) -> bool:
        """True if `element` lies strictly inside the chart's valid neighborhood."""
        return self.origin.distance_to(element) < type(self.origin).INJECTIVITY_RADIUS

    def to_tangent(self, element: ElementT) -> np.ndarray:
        """Map an element on the manifold to a tangent vector (logarithmic map)."""
        return self.origin.log_map(element)

    def to_manifold(self, tangent: np.ndarray) -> ElementT:
        """Map a tangent vector to an element on the manifold (exponential map)."""
        return self.origin.exp_map(tangent)


@dataclass(frozen=True, eq=False)
class ManifoldGeodesic(Generic[ElementT]):
    """Geodesic curve between `beg` and `end`, parameterized on [0, 1]."""

    beg: ElementT
    end: ElementT

    def __post_init__(self) -> None:
        if not isinstance(self.beg, ManifoldElement):
            raise TypeError("geodesic endpoints must be ManifoldElements")
        if type(self.end) is not type(self.beg):
            raise TypeError(
                f"geodesic endpoints must share a manifold; got {type(self.beg).__name__} "
                f"and {type(self.end).__name__}."
            )

    def interpolate(self, fraction: float) -> ElementT:
        """
        Interpolate along the geodesic. Values in [0, 1] perform true
        interpolation, values outside of this range perform extrapolation.
        """
        return self.beg.interpolate(self.end, fraction)

    def length(self) -> float:
        return self.beg.distance_to(self.end)

    def sample(self, steps: int) -> List[ElementT]:
        """Return steps + 1 elements at evenly spaced fractions, endpoints included."""
        if not (isinstance(steps, int) and steps >= 1):
            raise ValueError("steps must be an integer >= 1.")
        return [self.interpolate(float(t)) for t in np.linspace(0.0, 1.0, steps + 1)]
