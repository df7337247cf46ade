"""Formal tests for unit spheres: great circles, antipodal degeneracy, dimensions."""

import numpy as np
import pytest

from mana.errors import DegenerateGeodesic, ManifoldError
from mana.so2 import SO2Element
from mana.sphere import SphereElement, tangent_frame

E0 = np.array([1.0, 0.0, 0.0])
E1 = np.array([0.0, 1.0, 0.0])


def test_quarter_great_circle() -> None:
    a, b = SphereElement.from_point(E0), SphereElement.from_point(E1)
    assert a.distance_to(b) == pytest.approx(np.pi / 2.0, abs=1e-12)
    mid = a.interpolate(b, 0.5)
    np.testing.assert_allclose(mid.point(), [np.sqrt(0.5), np.sqrt(0.5), 0.0], rtol=0.0, atol=1e-15)
    # Extrapolating to 2 reaches the antipode of the start
    assert a.geodesic_to(b).interpolate(2.0) == SphereElement.from_point(-E0)


def test_antipodal_geodesic_is_degenerate() -> None:
    a, b = SphereElement.from_point(E0), SphereElement.from_point(-E0)
    assert a.distance_to(b) == pytest.approx(np.pi, abs=1e-12)
    with pytest.raises(DegenerateGeodesic):
        a.interpolate(b, 0.5)
    with pytest.raises(ManifoldError):
        a.local_chart().to_tangent(b)
    with pytest.raises(ArithmeticError):
        a.geodesic_to(b).interpolate(0.25)


def test_projection_normalizes_and_handles_zero() -> None:
    np.testing.assert_allclose(SphereElement.project([3.0, 0.0, 4.0]), [0.6, 0.0, 0.8], rtol=0.0, atol=1e-15)
    np.testing.assert_array_equal(SphereElement.project(np.zeros(3)), E0)


def test_is_valid() -> None:
    assert SphereElement.is_valid(E1)
    assert not SphereElement.is_valid(1.001 * E1)
    assert not SphereElement.is_valid([1.0, 0.0])


def test_tangent_frame_is_orthonormal_complement() -> None:
    rng = np.random.default_rng(0)
    for n in (2, 3, 6):
        for x in (np.eye(n)[0], -np.eye(n)[0], rng.standard_normal(n)):
            x = x / np.linalg.norm(x)
            F = tangent_frame(x)
            assert F.shape == (n - 1, n)
            np.testing.assert_allclose(F @ F.T, np.eye(n - 1), rtol=0.0, atol=1e-12)
            np.testing.assert_allclose(F @ x, np.zeros(n - 1), rtol=0.0, atol=1e-12)


def test_of_dimension_types() -> None:
    assert SphereElement.of_dimension(3) is SphereElement
    S4 = SphereElement.of_dimension(5)
    assert S4 is SphereElement.of_dimension(5)
    assert issubclass(S4, SphereElement)
    assert (S4.DIMENSION, S4.EMBEDDING_DIMENSION, S4.EMBEDDING_SHAPE) == (4, 5, (5,))
    assert SphereElement.of_dimension(np.int64(5)) is S4
    assert SphereElement.of_dimension(np.int32(3)) is SphereElement
    with pytest.raises(ValueError):
        SphereElement.of_dimension(1)
    with pytest.raises(ValueError):
        SphereElement.of_dimension(4.0)  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        SphereElement.of_dimension(True)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        S4.from_point(np.eye(5)[0]).distance_to(SphereElement.from_point(E0))


def test_circle_matches_planar_rotations() -> None:
    S1 = SphereElement.of_dimension(2)
    for ta, tb in [(0.2, 1.4), (3.0, -3.0), (-2.0, 0.5)]:
        a = S1.from_point([np.cos(ta), np.sin(ta)])
        b = S1.from_point([np.cos(tb), np.sin(tb)])
        expected = SO2Element.from_angle(ta).distance_to(SO2Element.from_angle(tb))
        assert a.distance_to(b) == pytest.approx(expected, abs=1e-12)


def test_chart_coordinates_use_tangent_frame() -> None:
    x = SphereElement.from_point(E0)
    chart = x.local_chart()
    v = chart.to_tangent(SphereElement.from_point(E1))
    assert np.linalg.norm(v) == pytest.approx(np.pi / 2.0, abs=1e-12)
    ambient = v @ tangent_frame(E0)
    np.testing.assert_allclose(ambient, [0.0, np.pi / 2.0, 0.0], rtol=0.0, atol=1e-12)
