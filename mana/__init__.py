"""
mana: differentiable manifolds represented extrinsically.

Geometric algorithms are written once against the ManifoldElement contract
(projection, validity, distance, interpolation) and reused across concrete
spaces. Charts give a local tangent-space view; geodesics give a named view
over a pair of elements.
"""

from .constants import Constants, constants_for, default_tolerance
from .errors import ManifoldError, InvalidPoint, DegenerateGeodesic
from .base import ManifoldElement, ManifoldChart, ManifoldGeodesic, LieGroupElement
from .so2 import SO2Element
from .so3 import SO3Element
from .sphere import SphereElement

__version__ = "0.1.0"

__all__ = [
    "Constants",
    "constants_for",
    "default_tolerance",
    "ManifoldError",
    "InvalidPoint",
    "DegenerateGeodesic",
    "ManifoldElement",
    "ManifoldChart",
    "ManifoldGeodesic",
    "LieGroupElement",
    "SO2Element",
    "SO3Element",
    "SphereElement",
]
