"""Interpolated cache of sparsely sampled scalar coefficients."""

import logging
import math

from ephemerides.core.settings import GridSettings
from ephemerides.errors import EmptyGridQuery
from ephemerides.interpolation.hermite import hermite_value
from ephemerides.interpolation.neighbors import NeighborLocator, select_neighborhood

logger = logging.getLogger(__name__)


class GridInterpolationCache:
    """
    Time-ordered (date, value) samples answering continuous-time queries.

    A force model pushes coefficient values at the few dates where it
    evaluates them; the integrator then reads interpolated values at every
    intermediate date. Each query uses the interpolation_points samples
    closest to the query date (or the whole grid if it is smaller).

    Not thread-safe: insertions and the search hint mutate on every call.
    """

    def __init__(self, interpolation_points: int = 3, *, persistent_hint: bool = True):
        """
        Args:
            interpolation_points: Neighborhood size K, >= 1
            persistent_hint: Keep the closest-sample hint between calls
        """
        settings = GridSettings(interpolation_points, persistent_hint)
        self.interpolation_points = settings.interpolation_points
        self._abscissae: list[float] = []
        self._values: list[float] = []
        self._locator = NeighborLocator(settings.persistent_hint)

    @classmethod
    def from_settings(cls, settings: GridSettings) -> "GridInterpolationCache":
        return cls(
            settings.interpolation_points,
            persistent_hint=settings.persistent_hint,
        )

    def __len__(self) -> int:
        return len(self._abscissae)

    @property
    def dates(self) -> tuple[float, ...]:
        return tuple(self._abscissae)

    @property
    def values(self) -> tuple[float, ...]:
        return tuple(self._values)

    @property
    def hint(self) -> int:
        """Index of the last closest sample found."""
        return self._locator.hint

    def insert(self, date: float, value: float) -> None:
        """
        Add a sample, overwriting the value if date is already on the grid.

        Args:
            date: Sample date
            value: Coefficient value at date
        """
        date, value = _finite_date(date), float(value)
        if not self._abscissae:
            self._abscissae.append(date)
            self._values.append(value)
            logger.debug("grid started at %r", date)
            return

        closest = self._locator.locate(self._abscissae, date)
        if self._abscissae[closest] == date:
            self._values[closest] = value
            logger.debug("grid value at %r overwritten", date)
            return

        index = closest if date < self._abscissae[closest] else closest + 1
        self._abscissae.insert(index, date)
        self._values.insert(index, value)
        logger.debug("grid point %r inserted at index %d", date, index)

    def neighbors(self, date: float) -> list[int]:
        """Indices used to interpolate at date, closest first."""
        date = _finite_date(date)
        size = min(self.interpolation_points, len(self._abscissae))
        if size == 0:
            raise EmptyGridQuery(date)
        if size >= len(self._abscissae):
            return list(range(size))
        closest = self._locator.locate(self._abscissae, date)
        return select_neighborhood(self._abscissae, date, closest, size)

    def value_at(self, date: float) -> float:
        """
        Interpolated coefficient value at date.

        Dates outside the sampled span are extrapolated from the boundary
        neighborhood.

        Raises:
            EmptyGridQuery: no sample has been inserted yet
            ValueError: date is NaN or infinite
        """
        indices = self.neighbors(date)
        offsets = [self._abscissae[i] - date for i in indices]
        samples = [self._values[i] for i in indices]
        return hermite_value(offsets, samples, at=0.0)

    def clear(self) -> None:
        """Drop all samples, e.g. before a new propagation run."""
        self._abscissae.clear()
        self._values.clear()
        self._locator.reset()
        logger.debug("grid cleared")


def _finite_date(date: float) -> float:
    date = float(date)
    # NaN compares false both ways and would land anywhere in the grid
    if not math.isfinite(date):
        raise ValueError(f"grid dates must be finite, got {date!r}")
    return date
