"""Grid interpolation of sampled coefficients."""

from ephemerides.interpolation.hermite import hermite_value
from ephemerides.interpolation.neighbors import (
    closest_index,
    select_neighborhood,
    NeighborLocator,
)
from ephemerides.interpolation.grid import GridInterpolationCache

__all__ = [
    "hermite_value",
    "closest_index",
    "select_neighborhood",
    "NeighborLocator",
    "GridInterpolationCache",
]
