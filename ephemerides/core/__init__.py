"""Core state types and settings."""

from ephemerides.core.state import (
    ORBIT_STATE_LENGTH,
    OrbitType,
    OrbitalState,
    StateDecoder,
    ElementMassDecoder,
)
from ephemerides.core.settings import GridSettings

__all__ = [
    "ORBIT_STATE_LENGTH",
    "OrbitType",
    "OrbitalState",
    "StateDecoder",
    "ElementMassDecoder",
    "GridSettings",
]
