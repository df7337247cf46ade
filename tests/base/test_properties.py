"""Formal invariants of the element contract, checked on every shipped manifold.

Deterministic tests (fixed seeds):
- Projection lands on the manifold and is idempotent.
- Distance is symmetric, zero on the diagonal, satisfies the triangle inequality.
- Interpolation hits both endpoints; geodesic length equals distance.
"""

import numpy as np
import pytest

from mana.constants import default_tolerance
from mana.so2 import SO2Element
from mana.so3 import SO3Element
from mana.sphere import SphereElement

MANIFOLDS = [SO2Element, SO3Element, SphereElement, SphereElement.of_dimension(5)]
IDS = ["so2", "so3", "s2", "s4"]


def _random_points(cls, n, seed=0):
    rng = np.random.default_rng(seed)
    return [rng.standard_normal(cls.EMBEDDING_SHAPE) for _ in range(n)]


def _random_elements(cls, n, seed=0):
    return [cls.from_projection(p) for p in _random_points(cls, n, seed)]


@pytest.mark.parametrize("cls", MANIFOLDS, ids=IDS)
def test_projection_is_valid_and_idempotent(cls) -> None:
    for p in _random_points(cls, 20):
        q = cls.project(p)
        assert cls.is_valid(q)
        np.testing.assert_allclose(cls.project(q), q, rtol=0.0, atol=1e-12)
        assert cls.from_point(cls.project(q)) == cls.from_point(q)


@pytest.mark.parametrize("cls", MANIFOLDS, ids=IDS)
def test_distance_axioms(cls) -> None:
    tol = default_tolerance()
    elems = _random_elements(cls, 8, seed=1)
    for a in elems:
        assert a.distance_to(a) == pytest.approx(0.0, abs=1e-12)
        for b in elems:
            d_ab = a.distance_to(b)
            assert d_ab >= 0.0
            assert d_ab == pytest.approx(b.distance_to(a), abs=tol)
            for c in elems:
                assert a.distance_to(c) <= d_ab + b.distance_to(c) + tol


@pytest.mark.parametrize("cls", MANIFOLDS, ids=IDS)
def test_distance_zero_only_at_equal_elements(cls) -> None:
    a, b = _random_elements(cls, 2, seed=2)
    assert a.distance_to(b) > 0.0
    assert a != b


@pytest.mark.parametrize("cls", MANIFOLDS, ids=IDS)
def test_interpolation_endpoints(cls) -> None:
    elems = _random_elements(cls, 6, seed=3)
    for a, b in zip(elems[:-1], elems[1:]):
        assert a.interpolate(b, 0.0) == a
        assert a.interpolate(b, 1.0) == b


@pytest.mark.parametrize("cls", MANIFOLDS, ids=IDS)
def test_interpolation_scales_distance_along_geodesic(cls) -> None:
    a, b = _random_elements(cls, 2, seed=4)
    d = a.distance_to(b)
    for t in (0.25, 0.5, 0.75):
        m = a.interpolate(b, t)
        assert cls.is_valid(m.point())
        assert a.distance_to(m) == pytest.approx(t * d, abs=1e-9)
        assert m.distance_to(b) == pytest.approx((1.0 - t) * d, abs=1e-9)


@pytest.mark.parametrize("cls", MANIFOLDS, ids=IDS)
def test_geodesic_length_matches_distance(cls) -> None:
    elems = _random_elements(cls, 5, seed=5)
    for a, b in zip(elems[:-1], elems[1:]):
        g = a.geodesic_to(b)
        assert g.length() == a.distance_to(b)
        assert g.interpolate(0.0) == a
        assert g.interpolate(1.0) == b


@pytest.mark.parametrize("cls", MANIFOLDS, ids=IDS)
def test_tangent_space_basis_is_orthonormal(cls) -> None:
    (a,) = _random_elements(cls, 1, seed=6)
    basis = a.tangent_space_basis()
    assert len(basis) == cls.DIMENSION
    gram = np.array([[float(np.sum(u * v)) for v in basis] for u in basis])
    np.testing.assert_allclose(gram, np.eye(cls.DIMENSION), rtol=0.0, atol=1e-12)
