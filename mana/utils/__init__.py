"""Utilities shared by the manifold packages: logging and angle helpers."""

from .logging import get_logger
from .angles import wrap_angle, angle_difference, deg_to_rad, rad_to_deg

__all__ = [
    "get_logger",
    "wrap_angle",
    "angle_difference",
    "deg_to_rad",
    "rad_to_deg",
]
