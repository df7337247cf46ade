"""Manifold base classes: element contract, chart, geodesic and the Lie-group layer."""

from .manifold_element import ManifoldElement, ManifoldChart, ManifoldGeodesic
from .lie_group_element import LieGroupElement

__all__ = ["ManifoldElement", "ManifoldChart", "ManifoldGeodesic", "LieGroupElement"]
