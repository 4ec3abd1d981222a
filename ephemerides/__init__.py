"""
Ephemerides: playback and interpolation core for orbit propagation.

This library provides:
- Bounded random-access playback of dense integration output
- Decoding of raw state vectors into orbit, mass and auxiliary channels
- Grid caches interpolating sparsely sampled force-model coefficients
"""

__version__ = "0.1.0"

from ephemerides.core.state import OrbitType, OrbitalState, ElementMassDecoder
from ephemerides.core.settings import GridSettings
from ephemerides.playback.ephemeris import TrajectoryPlayback
from ephemerides.playback.channels import ChannelExtractor
from ephemerides.interpolation.grid import GridInterpolationCache
from ephemerides.errors import (
    EphemerisError,
    OutOfRangeQuery,
    DuplicateChannelName,
    EmptyGridQuery,
    UpstreamDecodeFailure,
)

__all__ = [
    "OrbitType",
    "OrbitalState",
    "ElementMassDecoder",
    "GridSettings",
    "TrajectoryPlayback",
    "ChannelExtractor",
    "GridInterpolationCache",
    "EphemerisError",
    "OutOfRangeQuery",
    "DuplicateChannelName",
    "EmptyGridQuery",
    "UpstreamDecodeFailure",
]
