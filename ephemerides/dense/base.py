"""Dense output model interface."""

from abc import ABC, abstractmethod
import logging
from typing import Protocol
import numpy as np
from numpy.typing import NDArray

logger = logging.getLogger(__name__)


class DenseOutputModel(Protocol):
    """
    Continuous integration output addressed through a single cursor.

    Times are elapsed from the integration start, so the cursor sits at
    0.0 right after construction.
    """

    @property
    def interpolated_time(self) -> float:
        """Elapsed time the cursor is positioned at."""
        ...

    def set_interpolated_time(self, elapsed: float) -> None:
        """Move the cursor to the given elapsed time."""
        ...

    @property
    def interpolated_state(self) -> NDArray:
        """Raw state vector at the cursor."""
        ...


class CursorModel(ABC):
    """Shared cursor bookkeeping for concrete dense models."""

    def __init__(self, start: float, t_min: float, t_max: float):
        self.start = float(start)
        self.t_min = float(t_min)
        self.t_max = float(t_max)
        self.repositions = 0
        self._elapsed = 0.0
        self._state = self._evaluate(self.start)

    @abstractmethod
    def _evaluate(self, t: float) -> NDArray:
        """Raw state at absolute integration time t."""
        ...

    @property
    def interpolated_time(self) -> float:
        return self._elapsed

    @property
    def interpolated_state(self) -> NDArray:
        return self._state

    def set_interpolated_time(self, elapsed: float) -> None:
        t = self.start + elapsed
        # start + elapsed can drift by a few ulps past the span ends
        tol = 8 * np.finfo(float).eps * max(1.0, abs(self.t_min), abs(self.t_max))
        if t < self.t_min - tol or t > self.t_max + tol:
            raise ValueError(
                f"time {t!r} is outside the dense output span "
                f"[{self.t_min!r}, {self.t_max!r}]"
            )
        t = min(max(t, self.t_min), self.t_max)
        self._state = np.asarray(self._evaluate(t), dtype=float)
        self._elapsed = elapsed
        self.repositions += 1
        logger.debug("dense model cursor moved to elapsed=%r", elapsed)
