"""Structured orbital state and raw-vector decoding."""

from dataclasses import dataclass, field, replace
from enum import Enum, auto
from types import MappingProxyType
from typing import Mapping, Protocol
import numpy as np
from numpy.typing import NDArray

from ephemerides.errors import UnknownChannel

ORBIT_STATE_LENGTH = 7  # 6 orbital elements + mass


class OrbitType(Enum):
    """Interpretation of the six leading raw entries."""
    CARTESIAN = auto()    # position, velocity
    KEPLERIAN = auto()    # a, e, i, ω, Ω, anomaly
    CIRCULAR = auto()     # a, ex, ey, i, Ω, latitude argument
    EQUINOCTIAL = auto()  # a, ex, ey, hx, hy, mean longitude


@dataclass(frozen=True, eq=False)
class OrbitalState:
    """Decoded spacecraft state at one date."""

    date: float
    elements: NDArray   # (6,)
    mass: float
    orbit_type: OrbitType = OrbitType.EQUINOCTIAL
    additional_states: Mapping[str, NDArray] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def additional_state(self, name: str) -> NDArray:
        """Auxiliary channel values attached to this state."""
        try:
            return self.additional_states[name]
        except KeyError:
            raise UnknownChannel(name) from None

    def with_additional_state(self, name: str, values: NDArray) -> "OrbitalState":
        """Return a copy with one more auxiliary channel attached."""
        merged = dict(self.additional_states)
        merged[name] = np.array(values, dtype=float)
        return replace(self, additional_states=MappingProxyType(merged))

    def __eq__(self, other) -> bool:
        if not isinstance(other, OrbitalState):
            return NotImplemented
        if self.additional_states.keys() != other.additional_states.keys():
            return False
        return (
            self.date == other.date
            and self.mass == other.mass
            and self.orbit_type is other.orbit_type
            and np.array_equal(self.elements, other.elements)
            and all(
                np.array_equal(v, other.additional_states[k])
                for k, v in self.additional_states.items()
            )
        )

    def __hash__(self) -> int:
        # arrays are left out; equal states still hash equal
        return hash((self.date, self.mass, self.orbit_type))


class StateDecoder(Protocol):
    """Maps a raw integration vector to a structured state."""

    def decode(self, date: float, raw: NDArray) -> OrbitalState:
        """
        Decode the leading orbit + mass entries of a raw vector.

        Args:
            date: Date the raw vector was interpolated at
            raw: Raw state vector, length >= 7

        Returns:
            Structured state at date
        """
        ...


class ElementMassDecoder:
    """Default decoder: six elements followed by the mass."""

    def __init__(self, orbit_type: OrbitType = OrbitType.EQUINOCTIAL):
        self.orbit_type = orbit_type

    def decode(self, date: float, raw: NDArray) -> OrbitalState:
        raw = np.asarray(raw, dtype=float)
        if raw.ndim != 1 or raw.shape[0] < ORBIT_STATE_LENGTH:
            raise ValueError(
                f"raw state must be a vector of at least {ORBIT_STATE_LENGTH} "
                f"entries, got shape {raw.shape}"
            )
        head = raw[:ORBIT_STATE_LENGTH]
        if not np.all(np.isfinite(head)):
            raise ValueError(f"non-finite orbit or mass entries: {head}")
        mass = float(head[6])
        if mass <= 0.0:
            raise ValueError(f"mass must be strictly positive, got {mass}")
        return OrbitalState(
            date=date,
            elements=head[:6].copy(),
            mass=mass,
            orbit_type=self.orbit_type,
        )
