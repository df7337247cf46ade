"""Per-dtype numeric constants.

Invariants
- Built once at import; the mapping is read-only afterwards.
- epsilon > 0 for every registered dtype.

Public API
- Constants(epsilon)
- constants_for(dtype=np.float64) -> Constants
- default_tolerance(dtype=np.float64) -> float
- resolve_tolerance(tolerance, dtype=np.float64) -> float
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

import numpy as np


@dataclass(frozen=True)
class Constants:
    epsilon: float  # default tolerance for distances and validity checks

    def __post_init__(self) -> None:
        if not (np.isfinite(self.epsilon) and float(self.epsilon) > 0.0):
            raise ValueError("epsilon must be a positive finite float")


_CONSTANTS: Mapping[np.dtype, Constants] = MappingProxyType(
    {
        np.dtype(np.float32): Constants(epsilon=1e-5),
        np.dtype(np.float64): Constants(epsilon=1e-9),
    }
)


def constants_for(dtype: object = np.float64) -> Constants:
    """
    Return the constants registered for a floating dtype.

    Unregistered floating dtypes (e.g. float16, longdouble) fall back to float64.
    Non-floating dtypes raise ValueError.
    """
    dt = np.dtype(dtype)
    if not np.issubdtype(dt, np.floating):
        raise ValueError(f"dtype must be a floating type; got {dt}")
    return _CONSTANTS.get(dt, _CONSTANTS[np.dtype(np.float64)])


def default_tolerance(dtype: object = np.float64) -> float:
    return constants_for(dtype).epsilon


def resolve_tolerance(tolerance: Optional[float], dtype: object = np.float64) -> float:
    """Return `tolerance` as a float, or the dtype's default epsilon when None."""
    if tolerance is None:
        return default_tolerance(dtype)
    tol = float(tolerance)
    if not (np.isfinite(tol) and tol >= 0.0):
        raise ValueError("tolerance must be a nonnegative finite float")
    return tol


__all__ = ["Constants", "constants_for", "default_tolerance", "resolve_tolerance"]
