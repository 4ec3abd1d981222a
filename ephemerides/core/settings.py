"""Construction-time settings."""

from dataclasses import dataclass, fields
from numbers import Integral
from typing import Any, Mapping


@dataclass(frozen=True)
class GridSettings:
    """Settings for a grid interpolation cache."""

    interpolation_points: int = 3   # neighborhood size K
    persistent_hint: bool = True    # keep the closest-neighbor hint between calls

    def __post_init__(self):
        if isinstance(self.interpolation_points, bool) or not isinstance(
            self.interpolation_points, Integral
        ):
            raise ValueError(
                "interpolation_points must be an integer, "
                f"got {self.interpolation_points!r}"
            )
        if self.interpolation_points < 1:
            raise ValueError(
                f"interpolation_points must be >= 1, got {self.interpolation_points}"
            )

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "GridSettings":
        """
        Build settings from a plain mapping, e.g. a parsed config section.

        Args:
            values: Field name to value

        Returns:
            Validated settings

        Raises:
            ValueError: on unknown keys or invalid values
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(f"unknown grid settings: {', '.join(unknown)}")
        return cls(**dict(values))
